"""Metrics API endpoints."""

from __future__ import annotations

from typing import TYPE_CHECKING

from fastapi import APIRouter, HTTPException, Response, status
from fastapi.responses import JSONResponse, PlainTextResponse
from loguru import logger

from promhist.metrics.exporters import JSONExporter, PrometheusExporter
from promhist.models.histogram import HistogramEventModel

if TYPE_CHECKING:
    from promhist.metrics.registry import HistogramRegistry


def create_metrics_router(registry: HistogramRegistry) -> APIRouter:
    """Create metrics router.

    Args:
        registry: HistogramRegistry instance backing every endpoint

    Returns:
        APIRouter configured with scrape and ingestion endpoints

    """
    router = APIRouter()
    prometheus_exporter = PrometheusExporter(registry)
    json_exporter = JSONExporter(registry)

    @router.get("/metrics")
    async def prometheus_metrics() -> Response:  # type: ignore[no-untyped-def]
        """Export histograms in Prometheus exposition format."""
        try:
            metrics_text = prometheus_exporter.export()
        except Exception as e:
            logger.exception("Failed to export Prometheus metrics")
            raise HTTPException(status_code=500, detail="Failed to export metrics") from e

        logger.debug("Prometheus metrics exported")
        return PlainTextResponse(
            content=metrics_text, media_type=prometheus_exporter.get_content_type()
        )

    @router.get("/metrics/json")
    async def json_metrics() -> Response:  # type: ignore[no-untyped-def]
        """Export histograms in JSON format."""
        try:
            metrics_json = json_exporter.export()
        except Exception as e:
            logger.exception("Failed to export JSON metrics")
            raise HTTPException(status_code=500, detail="Failed to export metrics") from e

        logger.debug("JSON metrics exported")
        return Response(content=metrics_json, media_type=json_exporter.get_content_type())

    @router.post("/histograms/{name}/events", status_code=status.HTTP_202_ACCEPTED)
    def record_event(name: str, event: HistogramEventModel) -> JSONResponse:  # type: ignore[no-untyped-def]
        """Record observations on a histogram.

        Events with undeclared label combinations are accepted and silently
        dropped by the histogram; only an unknown histogram name is an error.
        """
        try:
            histogram = registry.get(name)
        except KeyError as e:
            raise HTTPException(status_code=404, detail=f"Unknown histogram: {name}") from e

        histogram.record(event.to_event())
        return JSONResponse(
            content={"status": "accepted"}, status_code=status.HTTP_202_ACCEPTED
        )

    return router
