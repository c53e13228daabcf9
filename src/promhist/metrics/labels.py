# pyright: strict
"""Label sets and the permutation helpers used to key histogram aggregates."""

from __future__ import annotations

import itertools
from collections.abc import Iterator, Mapping, Sequence
from dataclasses import dataclass, field


@dataclass(frozen=True)
class LabelSet:
    """Order-independent identity of one label-name to label-value assignment."""

    labels: frozenset[tuple[str, str]] = field(default_factory=frozenset)
    """Immutable set of label key-value pairs."""

    @classmethod
    def create(cls, labels: Mapping[str, object] | None = None) -> LabelSet:
        """Create a label set from an optional labels mapping."""
        label_items: frozenset[tuple[str, str]] = (
            frozenset((str(name), str(value)) for name, value in labels.items())
            if labels
            else frozenset()
        )
        return cls(labels=label_items)

    def labels_dict(self) -> dict[str, str]:
        """Convert labels back to a dictionary sorted by label name."""
        return dict(sorted(self.labels))

    def flatten(self) -> str:
        """Render the canonical ``name="value"`` form, names ascending."""
        return ",".join(f'{name}="{value}"' for name, value in sorted(self.labels))


def flatten_labels(labels: Mapping[str, object]) -> str:
    """Serialize a label mapping into its canonical permutation key."""
    return LabelSet.create(labels).flatten()


def iter_label_sets(labels: Mapping[str, Sequence[str]]) -> Iterator[LabelSet]:
    """Yield every label set in the cartesian product of the allowed values.

    Label names are walked in ascending order and values in declared order, so
    the rightmost name varies fastest. An empty mapping yields exactly one
    empty label set.
    """
    names = sorted(labels)
    for values in itertools.product(*(labels[name] for name in names)):
        yield LabelSet(frozenset(zip(names, values, strict=True)))


def get_label_permutations(labels: Mapping[str, Sequence[str]]) -> list[str]:
    """Expand allowed label values into the flattened key of every permutation."""
    return [label_set.flatten() for label_set in iter_label_sets(labels)]
