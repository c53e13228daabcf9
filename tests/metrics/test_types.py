# pyright: strict
"""Tests for aggregate state and number formatting."""

from __future__ import annotations

import math

import pytest

from promhist.metrics.types import (
    HistogramEvent,
    ObservationAggregate,
    format_number,
    to_observation,
)


class TestFormatNumber:
    """Test exposition number formatting."""

    @pytest.mark.unit
    @pytest.mark.parametrize(
        ("value", "expected"),
        [
            (10, "10"),
            (10.0, "10"),
            (0.25, "0.25"),
            (-3.0, "-3"),
            (0.1 + 0.2, "0.30000000000000004"),
            (math.inf, "+Inf"),
            (-math.inf, "-Inf"),
            (math.nan, "NaN"),
            (1e-07, "1e-07"),
        ],
    )
    def test_format_number(self, value: float, expected: str) -> None:
        """Test integral, decimal and non-finite values."""
        assert format_number(value) == expected


class TestToObservation:
    """Test coercion of observed numbers."""

    @pytest.mark.unit
    @pytest.mark.parametrize(
        ("value", "expected"),
        [
            (3, 3.0),
            (0.5, 0.5),
            (10**400, math.inf),
            (-(10**400), -math.inf),
        ],
    )
    def test_to_observation(self, value: float, expected: float) -> None:
        """Test ints beyond float range saturate to infinity."""
        assert to_observation(value) == expected


class TestObservationAggregate:
    """Test ObservationAggregate."""

    @pytest.mark.unit
    def test_initial_state(self) -> None:
        """Test a new aggregate is zeroed with every limit present."""
        aggregate = ObservationAggregate([10.0, 50.0])

        assert aggregate.buckets == {"10": 0, "50": 0}
        assert aggregate.sum == 0.0
        assert aggregate.count == 0

    @pytest.mark.unit
    def test_cumulative_buckets(self) -> None:
        """Test each observation counts toward every bucket at or above it."""
        aggregate = ObservationAggregate([1.0, 5.0, 10.0])
        aggregate.observe_all([0.5, 3.0, 7.0, 100.0])

        assert aggregate.buckets == {"1": 1, "5": 2, "10": 3}
        assert aggregate.count == 4
        assert aggregate.sum == pytest.approx(110.5)

    @pytest.mark.unit
    def test_boundary_value_counts_in_bucket(self) -> None:
        """Test an observation equal to a limit lands in that bucket."""
        aggregate = ObservationAggregate([10.0, 50.0])
        aggregate.observe(10.0)

        assert aggregate.buckets == {"10": 1, "50": 1}

    @pytest.mark.unit
    def test_non_finite_values(self) -> None:
        """Test NaN and +Inf reach no finite bucket but are counted."""
        aggregate = ObservationAggregate([10.0])
        aggregate.observe(math.nan)
        aggregate.observe(math.inf)
        aggregate.observe(-math.inf)

        assert aggregate.buckets == {"10": 1}
        assert aggregate.count == 3
        assert math.isnan(aggregate.sum)

    @pytest.mark.unit
    def test_snapshot_pairs_limits_with_counts(self) -> None:
        """Test snapshot returns aligned pairs, sum and count."""
        aggregate = ObservationAggregate([1.0, 2.0])
        aggregate.observe(1.5)

        assert aggregate.snapshot() == ([(1.0, 0), (2.0, 1)], 1.5, 1)

    @pytest.mark.unit
    def test_to_dict(self) -> None:
        """Test dictionary representation."""
        aggregate = ObservationAggregate([0.5])
        aggregate.observe(0.25)

        assert aggregate.to_dict() == {"buckets": {"0.5": 1}, "sum": 0.25, "count": 1}


class TestHistogramEvent:
    """Test HistogramEvent defaults."""

    @pytest.mark.unit
    def test_defaults(self) -> None:
        """Test an event with no labels and no observations."""
        event = HistogramEvent()
        assert dict(event.labels) == {}
        assert list(event.observations) == []
