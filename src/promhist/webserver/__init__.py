"""HTTP exposition of the histogram registry."""

from .server import WebServer

__all__ = ["WebServer"]
