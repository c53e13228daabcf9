# pyright: strict
"""Core histogram data structures."""

from __future__ import annotations

import math
import threading
from collections.abc import Iterable, Mapping, Sequence
from dataclasses import dataclass, field
from typing import Any


def format_number(value: float) -> str:
    """Format a number the way it appears in the exposition text.

    Integral values drop the fractional part (``10`` rather than ``10.0``),
    other finite values use the shortest round-trip representation. Python
    pads exponents to two digits, so ``1e-7`` renders as ``1e-07``; both
    forms parse to the same float in Prometheus.
    """
    if isinstance(value, int):
        return str(value)
    if math.isnan(value):
        return "NaN"
    if math.isinf(value):
        return "+Inf" if value > 0 else "-Inf"
    if value.is_integer() and abs(value) < 1e21:
        return str(int(value))
    return repr(value)


def to_observation(value: float) -> float:
    """Coerce an observed number to float, saturating ints too large for one."""
    try:
        return float(value)
    except OverflowError:
        return math.inf if value > 0 else -math.inf


@dataclass(frozen=True)
class HistogramEvent:
    """A batch of observations recorded against one label combination."""

    labels: Mapping[str, str] = field(default_factory=dict)
    """Label name to label value assignment for every observation."""

    observations: Sequence[float] = field(default_factory=tuple)
    """Observed values, folded in order."""


@dataclass
class ObservationAggregate:
    """Cumulative histogram state for a single label combination."""

    limits: Sequence[float]
    """Finite bucket upper bounds in ascending order."""

    counts: list[int] = field(init=False)
    """Cumulative count per bucket, aligned with ``limits``."""

    sum: float = field(default=0.0, init=False)
    """Sum of all observed values."""

    count: int = field(default=0, init=False)
    """Total number of observations, the value of the ``+Inf`` bucket."""

    _lock: threading.Lock = field(
        default_factory=threading.Lock, init=False, repr=False, compare=False
    )

    def __post_init__(self) -> None:
        """Initialize bucket counts."""
        self.limits = tuple(self.limits)
        self.counts = [0] * len(self.limits)

    def observe(self, value: float) -> None:
        """Record a single observation."""
        self.observe_all((value,))

    def observe_all(self, values: Iterable[float]) -> None:
        """Fold observations into every bucket whose limit is ``>=`` the value."""
        with self._lock:
            for value in values:
                for i, bucket_upper_bound in enumerate(self.limits):
                    if value <= bucket_upper_bound:
                        self.counts[i] += 1
                self.count += 1
                self.sum += value

    def snapshot(self) -> tuple[list[tuple[float, int]], float, int]:
        """Return ``(bucket pairs, sum, count)`` read under the aggregate lock."""
        with self._lock:
            return (
                list(zip(self.limits, self.counts, strict=True)),
                self.sum,
                self.count,
            )

    @property
    def buckets(self) -> dict[str, int]:
        """Bucket counts keyed by the display form of each limit."""
        pairs, _, _ = self.snapshot()
        return {format_number(limit): count for limit, count in pairs}

    def to_dict(self) -> dict[str, Any]:
        """Convert the aggregate to a dictionary representation."""
        pairs, total, count = self.snapshot()
        return {
            "buckets": {format_number(limit): n for limit, n in pairs},
            "sum": total,
            "count": count,
        }
