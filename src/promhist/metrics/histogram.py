# pyright: strict
"""Closed-world labelled histogram with Prometheus text rendering."""

from __future__ import annotations

from collections.abc import Callable, Mapping
from typing import Any, TypeAlias

from loguru import logger

from promhist.models.histogram import HistogramConfig

from .labels import LabelSet, iter_label_sets
from .types import HistogramEvent, ObservationAggregate, format_number, to_observation

DiagnosticSink: TypeAlias = Callable[[str, str], None]
"""Receives ``(metric_name, flattened_key)`` for every rejected event."""


def log_rejected_permutation(metric_name: str, permutation: str) -> None:
    """Report a rejected label permutation on the operational log."""
    logger.warning(
        "Disallowed label permutation",
        metric=metric_name,
        permutation=permutation,
    )


class LabelledHistogram:
    """Histogram whose label permutations are fixed when it is constructed.

    Every combination of the declared label values gets a zeroed
    ``ObservationAggregate`` up front. Events carrying any other combination
    are dropped and handed to the diagnostic sink instead of creating new
    series, so the number of exported series can never grow past what was
    declared.
    """

    def __init__(
        self,
        config: HistogramConfig | Mapping[str, Any],
        diagnostic_sink: DiagnosticSink | None = None,
    ) -> None:
        """Build the permutation registry for a histogram definition.

        Args:
            config: Histogram definition, validated if given as a mapping.
            diagnostic_sink: Callback notified of rejected events. Defaults to
                a loguru warning.

        """
        if not isinstance(config, HistogramConfig):
            config = HistogramConfig.model_validate(config)
        self.config = config
        self.diagnostic_sink = diagnostic_sink or log_rejected_permutation

        self._aggregates: dict[LabelSet, ObservationAggregate] = {
            label_set: ObservationAggregate(config.buckets)
            for label_set in iter_label_sets(config.labels)
        }
        self._keys: dict[LabelSet, str] = {
            label_set: label_set.flatten() for label_set in self._aggregates
        }

        logger.debug(
            "Histogram registered",
            metric=config.name,
            permutations=len(self._aggregates),
            buckets=len(config.buckets),
        )

    @property
    def name(self) -> str:
        """Metric name."""
        return self.config.name

    @property
    def permutations(self) -> list[str]:
        """Flattened keys of every allowed permutation, in render order."""
        return list(self._keys.values())

    def get_aggregate(self, labels: Mapping[str, str]) -> ObservationAggregate | None:
        """Get the aggregate for a label mapping, or None if it is not allowed."""
        return self._aggregates.get(LabelSet.create(labels))

    def record(self, event: HistogramEvent) -> None:
        """Fold an event's observations into the aggregate for its labels.

        Events whose labels do not resolve to a declared permutation are
        discarded and reported to the diagnostic sink; nothing is raised.
        """
        label_set = LabelSet.create(event.labels)
        aggregate = self._aggregates.get(label_set)
        if aggregate is None:
            self.diagnostic_sink(self.name, label_set.flatten())
            return

        aggregate.observe_all([to_observation(value) for value in event.observations])

    def report(self) -> str:
        """Render every permutation in Prometheus text exposition format."""
        lines = [
            f"# HELP {self.name} {self.config.help_text}",
            f"# TYPE {self.name} {self.config.metric_type}",
        ]
        for label_set, aggregate in self._aggregates.items():
            lines.extend(self._format_aggregate(self._keys[label_set], aggregate))
        return "\n".join(lines)

    def _format_aggregate(self, key: str, aggregate: ObservationAggregate) -> list[str]:
        """Format one permutation's bucket, sum and count lines."""
        pairs, total, count = aggregate.snapshot()
        # Existing labels go in front of the synthetic le label.
        prefix = f"{key}," if key else ""

        lines = [
            f'{self.name}_bucket{{{prefix}le="{format_number(limit)}"}} {bucket_count}'
            for limit, bucket_count in pairs
        ]
        lines.append(f'{self.name}_bucket{{{prefix}le="+Inf"}} {count}')
        lines.append(f"{self.name}_sum{{{key}}} {format_number(total)}")
        lines.append(f"{self.name}_count{{{key}}} {count}")
        return lines

    def to_dict(self) -> dict[str, Any]:
        """Convert the histogram to a dictionary representation."""
        return {
            "name": self.name,
            "help": self.config.help_text,
            "type": self.config.metric_type,
            "buckets": [format_number(limit) for limit in self.config.buckets],
            "series": [
                {"labels": label_set.labels_dict(), **aggregate.to_dict()}
                for label_set, aggregate in self._aggregates.items()
            ],
        }
