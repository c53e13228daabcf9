# pyright: strict
"""Registry holding every histogram exposed by the application."""

from __future__ import annotations

import threading
from collections.abc import Iterable, Mapping
from typing import Any

from loguru import logger

from promhist.models.histogram import HistogramConfig

from .histogram import DiagnosticSink, LabelledHistogram
from .types import HistogramEvent


class HistogramRegistry:
    """Thread-safe registry of histograms keyed by metric name."""

    def __init__(self) -> None:
        """Initialize the histogram registry."""
        self._histograms: dict[str, LabelledHistogram] = {}
        self._lock = threading.RLock()

    @classmethod
    def from_configs(
        cls,
        configs: Iterable[HistogramConfig | Mapping[str, Any]],
        diagnostic_sink: DiagnosticSink | None = None,
    ) -> HistogramRegistry:
        """Create a registry with one histogram per definition."""
        registry = cls()
        for config in configs:
            registry.register(config, diagnostic_sink)
        return registry

    def register(
        self,
        config: HistogramConfig | Mapping[str, Any],
        diagnostic_sink: DiagnosticSink | None = None,
    ) -> LabelledHistogram:
        """Create and store a histogram for ``config``.

        Raises:
            ValueError: If a histogram with the same name is already registered.

        """
        histogram = LabelledHistogram(config, diagnostic_sink)
        with self._lock:
            if histogram.name in self._histograms:
                error_msg = f"Histogram {histogram.name} is already registered"
                raise ValueError(error_msg)
            self._histograms[histogram.name] = histogram
        logger.info(
            "Histogram added to registry",
            metric=histogram.name,
            permutations=len(histogram.permutations),
        )
        return histogram

    def get(self, name: str) -> LabelledHistogram:
        """Get a histogram by name.

        Raises:
            KeyError: If no histogram with that name is registered.

        """
        with self._lock:
            histogram = self._histograms.get(name)
        if histogram is None:
            error_msg = f"Unknown histogram: {name}"
            raise KeyError(error_msg)
        return histogram

    def record(self, name: str, event: HistogramEvent) -> None:
        """Record an event on the named histogram."""
        self.get(name).record(event)

    def list_histograms(self) -> list[LabelledHistogram]:
        """Get all registered histograms in registration order."""
        with self._lock:
            return list(self._histograms.values())

    def list_names(self) -> list[str]:
        """Get the names of all registered histograms."""
        with self._lock:
            return list(self._histograms)

    def get_registry_summary(self) -> dict[str, Any]:
        """Get a summary of all histograms in the registry."""
        histograms = self.list_histograms()
        return {
            "total_histograms": len(histograms),
            "histograms": {histogram.name: histogram.to_dict() for histogram in histograms},
        }

    def clear(self) -> None:
        """Remove all histograms from the registry."""
        with self._lock:
            self._histograms.clear()
