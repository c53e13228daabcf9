"""Application configuration for the promhist service."""

import os
from dataclasses import dataclass


@dataclass
class Config:
    """Configuration class for the promhist service."""

    log_level: str = "INFO"
    log_file: str | None = None
    metric_host: str = "127.0.0.1"  # Host for metrics endpoint
    metric_port: int = 8080  # Port for metrics endpoint
    histograms_file: str = "histograms.json"  # JSON list of histogram definitions

    @classmethod
    def from_env(cls) -> "Config":
        """Create config from environment variables."""
        return cls(
            log_level=os.getenv("LOG_LEVEL", "INFO"),
            log_file=os.getenv("LOG_FILE"),
            metric_host=os.getenv("METRIC_HOST", "127.0.0.1"),
            metric_port=int(os.getenv("METRIC_PORT", "8080")),
            histograms_file=os.getenv("HISTOGRAMS_FILE", "histograms.json"),
        )
