"""promhist - serve closed-world histograms for Prometheus scraping."""

import asyncio
import signal
import sys
from collections.abc import Callable
from pathlib import Path
from types import FrameType, TracebackType
from typing import TypeAlias

from dotenv import load_dotenv
from loguru import logger

from promhist.metrics import HistogramRegistry
from promhist.models import Config, load_histogram_configs
from promhist.utils import LoggingConfig
from promhist.webserver import WebServer

# Load environment variables from .env file
load_dotenv(override=True)

SignalHandler: TypeAlias = Callable[[int, FrameType | None], None]


class HistogramApp:
    """Application wiring a histogram registry to its web server."""

    def __init__(self, config: Config) -> None:
        """Load histogram definitions and prepare the web server.

        Args:
            config: The application configuration.

        Raises:
            ValueError: If the histogram definitions are missing or invalid.

        """
        self.config = config
        self.is_shutting_down = False
        self._shutdown_event = asyncio.Event()

        LoggingConfig.configure(config.log_level, config.log_file)

        histograms_path = Path(config.histograms_file)
        if not histograms_path.is_file():
            error_msg = f"Histogram definitions file not found: {histograms_path}"
            raise ValueError(error_msg)

        self.registry = HistogramRegistry.from_configs(load_histogram_configs(histograms_path))
        self.web_server = WebServer(self.registry)

        signal_handler: SignalHandler = self._signal_handler
        signal.signal(signal.SIGINT, signal_handler)
        signal.signal(signal.SIGTERM, signal_handler)

    async def __aenter__(self) -> "HistogramApp":
        """Start the web server."""
        await self.web_server.start(
            host=self.config.metric_host,
            port=self.config.metric_port,
            log_level=self.config.log_level,
        )
        logger.info(
            "Serving histograms",
            histograms=",".join(self.registry.list_names()),
            host=self.config.metric_host,
            port=self.config.metric_port,
        )
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        """Stop the web server without masking an in-flight exception."""
        try:
            await self.web_server.stop()
        except Exception as cleanup_error:  # noqa: BLE001
            logger.error(
                "Error during service cleanup",
                error=str(cleanup_error),
                error_type=type(cleanup_error).__name__,
            )

    def _signal_handler(self, signum: int, _frame: FrameType | None) -> None:
        """Handle shutdown signals (SIGINT, SIGTERM) gracefully."""
        logger.info(
            "Received shutdown signal, initiating graceful shutdown",
            signal=signum,
        )
        self.shutdown()

    async def run(self) -> None:
        """Block until shutdown is requested."""
        await self._shutdown_event.wait()

    def shutdown(self) -> None:
        """Request application shutdown."""
        if self.is_shutting_down:
            return

        logger.info("Shutting down promhist application")
        self.is_shutting_down = True
        self._shutdown_event.set()


async def main() -> None:
    """Run the promhist service until interrupted."""
    exit_code = 0

    try:
        config = Config.from_env()
        logger.info(
            "Starting promhist application with configuration",
            histograms_file=config.histograms_file,
            host=config.metric_host,
            port=config.metric_port,
            log_level=config.log_level,
        )

        async with HistogramApp(config) as app:
            await app.run()

    except ValueError as e:
        logger.error(
            "Configuration error - application startup failed",
            error=str(e),
            error_type=type(e).__name__,
            stage="startup",
        )
        exit_code = 1
    except KeyboardInterrupt:
        logger.info("Application interrupted by user")
    except Exception as e:  # noqa: BLE001
        logger.error(
            "Runtime error - application failed",
            error=str(e),
            error_type=type(e).__name__,
            stage="runtime",
        )
        exit_code = 1
    finally:
        logger.info("promhist application shutdown completed")
        if exit_code != 0:
            sys.exit(exit_code)


def run() -> None:
    """Console script entry point."""
    try:
        asyncio.run(main())
    except KeyboardInterrupt:
        logger.info("Application terminated by user")
        sys.exit(0)
    except Exception as e:  # noqa: BLE001
        logger.error(
            "Fatal error running application",
            error=str(e),
            error_type=type(e).__name__,
        )
        sys.exit(1)


if __name__ == "__main__":
    run()
