"""Histogram definition and event models."""

from __future__ import annotations

import json
import math
from pathlib import Path
from typing import TYPE_CHECKING, Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

if TYPE_CHECKING:
    from promhist.metrics.types import HistogramEvent


class HistogramConfig(BaseModel):
    """Pydantic model describing the full shape of one histogram metric."""

    name: str = Field(description="Metric name used as the exposition prefix.")
    help_text: str = Field(
        description="Text rendered on the HELP line.",
        alias="help",
    )
    metric_type: str = Field(
        default="histogram",
        description="Text rendered on the TYPE line.",
        alias="type",
    )
    buckets: tuple[float, ...] = Field(
        default=(),
        description="Finite bucket upper bounds; +Inf is always synthesized.",
    )
    labels: dict[str, tuple[str, ...]] = Field(
        default_factory=dict,
        description="Label name to the closed set of allowed values.",
    )

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    @field_validator("buckets")
    @classmethod
    def _normalize_buckets(cls, value: tuple[float, ...]) -> tuple[float, ...]:
        """Sort limits ascending, collapse duplicates and drop a configured +Inf."""
        if any(math.isnan(limit) for limit in value):
            error_msg = "Bucket limits must not be NaN"
            raise ValueError(error_msg)
        return tuple(sorted({limit for limit in value if limit != math.inf}))

    @field_validator("labels")
    @classmethod
    def _validate_labels(
        cls, value: dict[str, tuple[str, ...]]
    ) -> dict[str, tuple[str, ...]]:
        """Reject labels without allowed values and collapse repeated values."""
        normalized: dict[str, tuple[str, ...]] = {}
        for name, allowed in value.items():
            if not allowed:
                error_msg = f"Label {name!r} declares no allowed values"
                raise ValueError(error_msg)
            normalized[name] = tuple(dict.fromkeys(allowed))
        return normalized


class HistogramEventModel(BaseModel):
    """Request body carrying observations for one label combination."""

    labels: dict[str, str] = Field(
        default_factory=dict, description="Label name to label value assignment."
    )
    observations: list[float] = Field(
        default_factory=list, description="Observed values, folded in order."
    )

    def to_event(self) -> HistogramEvent:
        """Convert the request body into a histogram event."""
        from promhist.metrics.types import HistogramEvent

        return HistogramEvent(labels=dict(self.labels), observations=tuple(self.observations))


def load_histogram_configs(path: str | Path) -> list[HistogramConfig]:
    """Load histogram definitions from a JSON file.

    The file holds either a list of definitions or an object with a
    ``histograms`` list. Any other shape raises ``ValueError``.

    Args:
        path: Location of the JSON file.

    Returns:
        Validated histogram configurations in file order.

    """
    raw: Any = json.loads(Path(path).read_text(encoding="utf-8"))
    if isinstance(raw, dict):
        if "histograms" not in raw:
            error_msg = f"Missing 'histograms' list in {path}"
            raise ValueError(error_msg)
        raw = raw["histograms"]
    if not isinstance(raw, list):
        error_msg = f"Expected a list of histogram definitions in {path}"
        raise ValueError(error_msg)
    return [HistogramConfig.model_validate(item) for item in raw]
