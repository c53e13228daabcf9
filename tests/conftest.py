# pyright: strict
"""Shared pytest fixtures for promhist tests."""

from __future__ import annotations

from collections.abc import Generator
from typing import Any

import pytest
from loguru import logger

from promhist.metrics import HistogramRegistry, LabelledHistogram
from promhist.models import HistogramConfig


@pytest.fixture
def latency_config() -> HistogramConfig:
    """Two-permutation histogram definition used across tests."""
    return HistogramConfig.model_validate(
        {
            "name": "latency",
            "help": "h",
            "type": "histogram",
            "buckets": [10, 50],
            "labels": {"method": ["GET", "POST"]},
        }
    )


@pytest.fixture
def rejections() -> list[tuple[str, str]]:
    """Collected ``(metric, permutation)`` pairs from a capturing sink."""
    return []


@pytest.fixture
def latency_histogram(
    latency_config: HistogramConfig, rejections: list[tuple[str, str]]
) -> LabelledHistogram:
    """Histogram for ``latency_config`` whose rejections land in ``rejections``."""
    return LabelledHistogram(
        latency_config,
        diagnostic_sink=lambda metric, key: rejections.append((metric, key)),
    )


@pytest.fixture
def registry(latency_config: HistogramConfig) -> HistogramRegistry:
    """Registry holding the latency histogram and an unlabelled one."""
    return HistogramRegistry.from_configs(
        [
            latency_config,
            {"name": "job_seconds", "help": "Job runtime", "buckets": [1, 0.5]},
        ]
    )


@pytest.fixture
def log_records() -> Generator[list[dict[str, Any]], None, None]:
    """Capture loguru records emitted while the test runs."""
    records: list[dict[str, Any]] = []
    handler_id = logger.add(
        lambda message: records.append(message.record),  # type: ignore[attr-defined]
        level="DEBUG",
        format="{message}",
    )
    yield records
    logger.remove(handler_id)
