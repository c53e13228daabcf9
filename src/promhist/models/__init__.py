"""Configuration and request models."""

from .config import Config
from .histogram import HistogramConfig, HistogramEventModel, load_histogram_configs

__all__ = [
    "Config",
    "HistogramConfig",
    "HistogramEventModel",
    "load_histogram_configs",
]
