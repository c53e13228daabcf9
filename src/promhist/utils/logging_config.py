"""Centralized logging configuration for the promhist service."""

import sys
from contextlib import suppress
from typing import Any

from loguru import logger


class LoggingConfig:
    """Process-wide loguru setup shared by the service and its tests."""

    _configured = False
    _log_level = "INFO"
    _log_file: str | None = None

    @classmethod
    def configure(cls, log_level: str, log_file: str | None = None) -> None:
        """Configure logging for the entire application.

        Args:
            log_level: The logging level (DEBUG, INFO, WARNING, ERROR)
            log_file: Optional log file path for file logging

        """
        if cls._configured:
            return

        cls._log_level = log_level
        cls._log_file = log_file

        logger.remove()
        logger.add(
            sys.stdout,
            level=log_level,
            format=cls._console_formatter,
            serialize=False,
        )

        if log_file:
            logger.add(
                log_file,
                level=log_level,
                rotation="10 MB",
                retention="7 days",
                format=cls._file_formatter,
            )
            logger.info("File logging enabled", log_file=log_file)

        cls._configured = True
        logger.info("Logging configuration applied", level=log_level)

    @staticmethod
    def _escape_braces(value: Any) -> str:
        """Escape braces and ``<`` so loguru reads them as literal text.

        Formatter output goes through ``str.format`` and color markup parsing,
        and label values in log extras are arbitrary client input.
        """
        return str(value).replace("{", "{{").replace("}", "}}").replace("<", r"\<")

    @classmethod
    def _format_extra(cls, extra: dict[str, Any], *, colorize: bool) -> str:
        """Render extra fields as ``key=value`` pairs joined by pipes."""
        pairs: list[str] = []
        for key, value in extra.items():
            safe_key = cls._escape_braces(key)
            safe_value = cls._escape_braces(value)
            if colorize:
                pairs.append(f"<cyan>{safe_key}</cyan>=<magenta>{safe_value}</magenta>")
            else:
                pairs.append(f"{safe_key}={safe_value}")
        return " | ".join(pairs)

    @classmethod
    def _console_formatter(cls, record: Any) -> str:
        """Format log record for console output with color codes."""
        time_part = record["time"].strftime("%m-%d %H:%M:%S")
        level_part = f"{record['level'].name: <8}"
        location_part = f"{record['name']}:{record['function']}:{record['line']}"
        message_part = cls._escape_braces(record["message"])

        formatted_message = (
            f"<green>{time_part}</green> | "
            f"<level>{level_part}</level> | "
            f"<cyan>{location_part}</cyan> | "
            f"<level>{message_part}</level>"
        )

        extra = record.get("extra", {})
        if extra:
            formatted_message += " | " + cls._format_extra(extra, colorize=True)

        return formatted_message + "\n"

    @classmethod
    def _file_formatter(cls, record: Any) -> str:
        """Format log record for file output without color codes."""
        time_part = record["time"].strftime("%Y-%m-%d %H:%M:%S")
        level_part = f"{record['level'].name: <8}"
        location_part = f"{record['name']}:{record['function']}:{record['line']}"
        message_part = cls._escape_braces(record["message"])

        formatted_message = f"{time_part} | {level_part} | {location_part} | {message_part}"

        extra = record.get("extra", {})
        if extra:
            formatted_message += " | " + cls._format_extra(extra, colorize=False)

        return formatted_message + "\n"

    @classmethod
    def ensure_configured(cls) -> None:
        """Ensure logging is configured with default settings if not already done."""
        if not cls._configured:
            cls.configure(cls._log_level, cls._log_file)

    @classmethod
    def is_configured(cls) -> bool:
        """Check if logging has been configured."""
        return cls._configured

    @classmethod
    def reset(cls) -> None:
        """Reset logging configuration state.

        This is primarily useful for testing purposes.
        """
        cls._configured = False
        cls._log_level = "INFO"
        cls._log_file = None
        with suppress(ValueError):
            logger.remove()
