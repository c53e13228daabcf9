"""Web server exposing the histogram registry to scrapers and clients."""

from __future__ import annotations

import asyncio
from asyncio import CancelledError
from contextlib import asynccontextmanager, suppress
from typing import TYPE_CHECKING

import uvicorn
from fastapi import FastAPI
from loguru import logger

from promhist import __version__

from .api import create_health_router, create_metrics_router

if TYPE_CHECKING:
    from collections.abc import AsyncGenerator

    from promhist.metrics.registry import HistogramRegistry


class WebServer:
    """FastAPI web server for the histogram registry.

    Health, scrape and ingestion routes are mounted under ``/api/v1``. The
    Prometheus text export is additionally served at the root ``/metrics``
    path, which is where scrapers look by default.
    """

    def __init__(self, registry: HistogramRegistry) -> None:
        """Initialize the web server.

        Args:
            registry: HistogramRegistry whose histograms are served and recorded.

        """
        self.registry = registry
        self.app = self._create_app()
        self.server: uvicorn.Server | None = None
        self.server_task: asyncio.Task[None] | None = None

    @asynccontextmanager
    async def _lifespan_context(self, _app: FastAPI) -> AsyncGenerator[None]:
        """Manage application lifespan events."""
        logger.info("Starting promhist web server")
        yield
        logger.info("Shutting down promhist web server")

    def _create_app(self) -> FastAPI:
        """Create and configure the FastAPI application."""
        app = FastAPI(
            title="promhist",
            description="Closed-world labelled histograms in Prometheus exposition format",
            version=__version__,
            docs_url="/docs",
            redoc_url="/redoc",
            lifespan=self._lifespan_context,
        )

        health_router = create_health_router(self.registry)
        metrics_router = create_metrics_router(self.registry)

        app.include_router(health_router, prefix="/api/v1", tags=["health"])
        app.include_router(metrics_router, prefix="/api/v1", tags=["metrics"])
        app.include_router(metrics_router, include_in_schema=False)

        return app

    async def start(
        self,
        host: str = "127.0.0.1",
        port: int = 8080,
        log_level: str = "info",
        *,
        access_log: bool = False,
    ) -> None:
        """Serve the app with uvicorn from a background asyncio task.

        Args:
            host: Interface the scrape endpoint binds to.
            port: TCP port for the scrape endpoint; 0 picks a free port.
            log_level: Uvicorn log level name, case-insensitive.
            access_log: Whether uvicorn logs every request.

        """
        if self.is_running:
            logger.warning("Web server already running")
            return

        self.server = uvicorn.Server(
            uvicorn.Config(
                app=self.app,
                host=host,
                port=port,
                log_level=log_level.lower(),
                access_log=access_log,
                loop="asyncio",
            )
        )
        self.server_task = asyncio.create_task(self.server.serve())
        logger.info("Web server started", host=host, port=port)

    async def stop(self, *, shutdown_timeout: float = 5.0) -> None:
        """Ask uvicorn to exit, cancelling it if it outlives ``shutdown_timeout``."""
        if self.server_task is None or self.server_task.done():
            return

        if self.server is not None:
            self.server.should_exit = True

        try:
            await asyncio.wait_for(asyncio.shield(self.server_task), timeout=shutdown_timeout)
        except TimeoutError:
            logger.warning("Web server shutdown timed out, cancelling", timeout=shutdown_timeout)
            self.server_task.cancel()
            with suppress(CancelledError):
                await self.server_task

        logger.info("Web server stopped")

    @property
    def is_running(self) -> bool:
        """Check if the web server task is alive."""
        return (
            self.server_task is not None
            and not self.server_task.done()
            and self.server is not None
        )
