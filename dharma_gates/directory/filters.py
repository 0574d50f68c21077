"""Filtering helpers for the center listing."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, List, Mapping

from dharma_gates.utils.text import contains_text


@dataclass(frozen=True)
class CenterFilters:
    """Criteria selected in the listing; unset criteria match everything."""

    search: str | None = None
    vehicle: str | None = None
    center_type: str | None = None
    location: str | None = None
    setting: str | None = None
    price_model: str | None = None
    gender_policy: str | None = None
    beginner_friendly: bool | None = None
    ordination_possible: bool | None = None


_EXACT_FIELDS = ("vehicle", "center_type", "setting", "price_model", "gender_policy")
_FLAG_FIELDS = ("beginner_friendly", "ordination_possible")


def _matches_search(center: Mapping[str, object], term: str | None) -> bool:
    if not term:
        return True
    name = center.get("name")
    address = center.get("address")
    return contains_text(name if isinstance(name, str) else None, term) or contains_text(
        address if isinstance(address, str) else None, term
    )


def _matches_location(center: Mapping[str, object], location: str | None) -> bool:
    if not location:
        return True
    address = center.get("address")
    return contains_text(address if isinstance(address, str) else None, location)


def matches(center: Mapping[str, object], filters: CenterFilters) -> bool:
    """Return whether a single center satisfies every active criterion."""

    if not _matches_search(center, filters.search):
        return False
    if not _matches_location(center, filters.location):
        return False
    for field_name in _EXACT_FIELDS:
        expected = getattr(filters, field_name)
        if expected and center.get(field_name) != expected:
            return False
    for field_name in _FLAG_FIELDS:
        expected = getattr(filters, field_name)
        if expected is not None and center.get(field_name) is not expected:
            return False
    return True


def filter_centers(
    centers: Iterable[Mapping[str, object]],
    filters: CenterFilters,
) -> List[Mapping[str, object]]:
    """Return centers that satisfy the given filters, preserving input order."""

    return [center for center in centers if matches(center, filters)]


__all__ = ["CenterFilters", "filter_centers", "matches"]
