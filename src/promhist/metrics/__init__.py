# pyright: strict
"""Closed-world histogram metrics package."""

from __future__ import annotations

from .exporters import JSONExporter, MetricExporter, PrometheusExporter
from .histogram import DiagnosticSink, LabelledHistogram, log_rejected_permutation
from .labels import LabelSet, flatten_labels, get_label_permutations, iter_label_sets
from .registry import HistogramRegistry
from .types import HistogramEvent, ObservationAggregate, format_number, to_observation

__all__ = [
    "DiagnosticSink",
    "HistogramEvent",
    "HistogramRegistry",
    "JSONExporter",
    "LabelSet",
    "LabelledHistogram",
    "MetricExporter",
    "ObservationAggregate",
    "PrometheusExporter",
    "flatten_labels",
    "format_number",
    "get_label_permutations",
    "iter_label_sets",
    "log_rejected_permutation",
    "to_observation",
]
