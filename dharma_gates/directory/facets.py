"""Filter option lists built from the centers currently in the directory."""
from __future__ import annotations

from dataclasses import asdict, dataclass, field
from typing import Iterable, Mapping

from dharma_gates.utils.text import normalize_text


@dataclass(frozen=True)
class FilterOptions:
    """Display labels for every facet the listing can be filtered on."""

    vehicles: list[str] = field(default_factory=list)
    center_types: list[str] = field(default_factory=list)
    settings: list[str] = field(default_factory=list)
    price_models: list[str] = field(default_factory=list)
    gender_policies: list[str] = field(default_factory=list)
    traditions: list[str] = field(default_factory=list)

    def as_dict(self) -> dict[str, list[str]]:
        """Return the options as a serialisable dictionary."""

        return asdict(self)


def group_similar_values(values: Iterable[str | None]) -> dict[str, list[str]]:
    """Bucket values by their accent/case-folded form.

    Each bucket keeps the distinct original spellings in first-seen order, so
    ``["Zen", "zen", "Zén"]`` yields ``{"zen": ["Zen", "zen", "Zén"]}``.
    Empty and ``None`` values are dropped.
    """

    groups: dict[str, list[str]] = {}
    for value in values:
        if not value or not value.strip():
            continue
        representatives = groups.setdefault(normalize_text(value), [])
        if value not in representatives:
            representatives.append(value)
    return groups


def facet_labels(values: Iterable[str | None]) -> list[str]:
    """Return one sorted display label per group of similar values."""

    return sorted(group[0] for group in group_similar_values(values).values())


def _scalar_values(centers: Iterable[Mapping[str, object]], key: str) -> list[str | None]:
    return [value if isinstance(value, str) else None for value in (center.get(key) for center in centers)]


def _list_values(centers: Iterable[Mapping[str, object]], key: str) -> list[str]:
    flattened: list[str] = []
    for center in centers:
        values = center.get(key)
        if isinstance(values, str):
            flattened.append(values)
        elif isinstance(values, (list, tuple)):
            flattened.extend(str(value) for value in values if value)
    return flattened


def build_filter_options(centers: Iterable[Mapping[str, object]]) -> FilterOptions:
    """Compute facet labels from scratch for the given centers."""

    rows = list(centers)
    return FilterOptions(
        vehicles=facet_labels(_scalar_values(rows, "vehicle")),
        center_types=facet_labels(_scalar_values(rows, "center_type")),
        settings=facet_labels(_scalar_values(rows, "setting")),
        price_models=facet_labels(_scalar_values(rows, "price_model")),
        gender_policies=facet_labels(_scalar_values(rows, "gender_policy")),
        traditions=facet_labels(_list_values(rows, "traditions")),
    )


__all__ = ["FilterOptions", "build_filter_options", "facet_labels", "group_similar_values"]
