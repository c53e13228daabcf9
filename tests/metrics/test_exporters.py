# pyright: strict
"""Tests for registry exporters."""

from __future__ import annotations

import json
import math

import pytest

from promhist.metrics import (
    HistogramEvent,
    HistogramRegistry,
    JSONExporter,
    PrometheusExporter,
)


class TestPrometheusExporter:
    """Test PrometheusExporter."""

    @pytest.mark.unit
    def test_export_joins_reports(self, registry: HistogramRegistry) -> None:
        """Test every histogram report appears in order with a trailing newline."""
        exporter = PrometheusExporter(registry)
        expected = "\n".join(h.report() for h in registry.list_histograms()) + "\n"

        assert exporter.export() == expected
        assert exporter.export().index("# HELP latency") < exporter.export().index(
            "# HELP job_seconds"
        )

    @pytest.mark.unit
    def test_export_empty_registry(self) -> None:
        """Test an empty registry exports nothing."""
        assert PrometheusExporter(HistogramRegistry()).export() == ""

    @pytest.mark.unit
    def test_content_type(self, registry: HistogramRegistry) -> None:
        """Test the Prometheus text content type."""
        assert (
            PrometheusExporter(registry).get_content_type()
            == "text/plain; version=0.0.4; charset=utf-8"
        )


class TestJSONExporter:
    """Test JSONExporter."""

    @pytest.mark.unit
    def test_export_structure(self, registry: HistogramRegistry) -> None:
        """Test exported JSON lists each histogram."""
        registry.record("latency", HistogramEvent(labels={"method": "GET"}, observations=[5]))
        data = json.loads(JSONExporter(registry).export())

        assert isinstance(data["timestamp"], float)
        assert [metric["name"] for metric in data["metrics"]] == ["latency", "job_seconds"]
        assert data["metrics"][0]["series"][0]["buckets"] == {"10": 1, "50": 1}

    @pytest.mark.unit
    def test_non_finite_sums_become_strings(self, registry: HistogramRegistry) -> None:
        """Test NaN sums are exported as valid JSON."""
        registry.record("job_seconds", HistogramEvent(observations=[math.nan]))
        exported = JSONExporter(registry).export()

        assert "NaN" in exported
        data = json.loads(exported, parse_constant=lambda _: pytest.fail("bare constant"))
        assert data["metrics"][1]["series"][0]["sum"] == "NaN"

    @pytest.mark.unit
    def test_content_type(self, registry: HistogramRegistry) -> None:
        """Test the JSON content type."""
        assert JSONExporter(registry).get_content_type() == "application/json"
