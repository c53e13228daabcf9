# pyright: strict
"""Exporters rendering the histogram registry for scrapers and dashboards."""

from __future__ import annotations

import json
import math
import time
from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Any

from .types import format_number

if TYPE_CHECKING:
    from .registry import HistogramRegistry


class MetricExporter(ABC):
    """Abstract base class for metric exporters."""

    def __init__(self, registry: HistogramRegistry) -> None:
        """Initialize the exporter with a histogram registry."""
        self.registry = registry

    @abstractmethod
    def export(self) -> str:
        """Export metrics in the format expected by the backend."""

    @abstractmethod
    def get_content_type(self) -> str:
        """Get the content type for the exported format."""


class PrometheusExporter(MetricExporter):
    """Exporter for Prometheus metrics format."""

    def export(self) -> str:
        """Export metrics in Prometheus exposition format."""
        reports = [histogram.report() for histogram in self.registry.list_histograms()]
        if not reports:
            return ""
        return "\n".join(reports) + "\n"

    def get_content_type(self) -> str:
        """Get the content type for Prometheus format."""
        return "text/plain; version=0.0.4; charset=utf-8"


class JSONExporter(MetricExporter):
    """Exporter for JSON metrics format."""

    def export(self) -> str:
        """Export metrics in JSON format."""
        metrics_data = {
            "timestamp": time.time(),
            "metrics": [
                histogram.to_dict() for histogram in self.registry.list_histograms()
            ],
        }
        return json.dumps(_replace_non_finite(metrics_data), indent=2)

    def get_content_type(self) -> str:
        """Get the content type for JSON format."""
        return "application/json"


def _replace_non_finite(value: Any) -> Any:
    """Swap NaN and infinities for their exposition strings, which JSON lacks."""
    if isinstance(value, float) and not math.isfinite(value):
        return format_number(value)
    if isinstance(value, dict):
        return {key: _replace_non_finite(item) for key, item in value.items()}  # type: ignore[misc]
    if isinstance(value, list):
        return [_replace_non_finite(item) for item in value]  # type: ignore[misc]
    return value
