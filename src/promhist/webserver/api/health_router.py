"""Health check API endpoints."""

from __future__ import annotations

import time
from typing import TYPE_CHECKING

from fastapi import APIRouter
from fastapi.responses import JSONResponse

from promhist import __version__

if TYPE_CHECKING:
    from promhist.metrics.registry import HistogramRegistry


def create_health_router(registry: HistogramRegistry) -> APIRouter:
    """Create health check router.

    Args:
        registry: HistogramRegistry whose declared series are reported

    Returns:
        APIRouter configured with health endpoints

    """
    router = APIRouter()
    started_at = time.time()

    @router.get("/health")
    async def health_check() -> JSONResponse:  # type: ignore[no-untyped-def]
        """Report uptime and the fixed series count of every histogram.

        The permutation counts never change after registration, so they
        double as the number of series a scrape will return per histogram.
        """
        permutations = {
            histogram.name: len(histogram.permutations)
            for histogram in registry.list_histograms()
        }
        return JSONResponse(
            content={
                "status": "healthy",
                "version": __version__,
                "uptime_seconds": time.time() - started_at,
                "histograms": permutations,
                "total_permutations": sum(permutations.values()),
            }
        )

    @router.get("/live")
    async def liveness_check() -> JSONResponse:  # type: ignore[no-untyped-def]
        """Liveness check for Kubernetes deployments."""
        return JSONResponse(content={"status": "alive"})

    return router
