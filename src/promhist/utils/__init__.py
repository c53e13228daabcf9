"""Utility functions and classes for the application."""

from .logging_config import LoggingConfig

__all__ = ["LoggingConfig"]
