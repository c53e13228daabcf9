"""promhist - closed-world labelled histograms with Prometheus exposition."""

__version__ = "1.0.0"
