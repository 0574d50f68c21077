"""Country/state sectioning of the center listing.

Each center's stored address is resolved through the composite decoder
first and the legacy parser second. Centers that resolve are filed under
``tree[country][state]``; the rest land in ``unparseable``. The tree is
rebuilt from scratch on every call.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Iterable, Iterator, Mapping

from dharma_gates.parsing.composite import decode_composite
from dharma_gates.parsing.legacy_address import ParsedLocation, parse_legacy_address

DEFAULT_PINNED_COUNTRY = "United States"
UNKNOWN_STATE = "Unknown"

Entity = Mapping[str, Any]


def resolve_location(address: str | None) -> ParsedLocation | None:
    """Return the country/state an address belongs to, or ``None``."""

    composite = decode_composite(address)
    if composite is None:
        return parse_legacy_address(address)
    # an empty state files under UNKNOWN_STATE instead of re-parsing the whole
    # string, so geocoded centers without a subdivision still group by country
    if composite.country:
        return ParsedLocation(country=composite.country, state=composite.state or UNKNOWN_STATE)
    # geocoder gave no country breakdown; the display name is still a postal address
    return parse_legacy_address(composite.display_name)


def _name_key(entity: Entity) -> str:
    name = entity.get("name")
    return name if isinstance(name, str) else ""


@dataclass
class GroupingTree:
    """Centers keyed by country then state, plus the ones that could not be placed."""

    tree: dict[str, dict[str, list[Entity]]] = field(default_factory=dict)
    unparseable: list[Entity] = field(default_factory=list)
    pinned_country: str = DEFAULT_PINNED_COUNTRY

    def countries(self) -> list[str]:
        """Country keys with the pinned country first and the rest alphabetical."""

        return sorted(self.tree, key=lambda country: (country != self.pinned_country, country))

    def states(self, country: str) -> list[str]:
        return sorted(self.tree.get(country, {}))

    def sections(self) -> Iterator[tuple[str, str, list[Entity]]]:
        """Yield ``(country, state, centers)`` in display order."""

        for country in self.countries():
            for state in self.states(country):
                yield country, state, self.tree[country][state]

    def __len__(self) -> int:
        placed = sum(len(entities) for states in self.tree.values() for entities in states.values())
        return placed + len(self.unparseable)

    def as_dict(self) -> dict[str, Any]:
        """Return the tree as ordered lists suitable for JSON responses."""

        return {
            "countries": [
                {
                    "country": country,
                    "states": [
                        {"state": state, "centers": list(self.tree[country][state])}
                        for state in self.states(country)
                    ],
                }
                for country in self.countries()
            ],
            "unparseable": list(self.unparseable),
        }


def group_by_location(
    entities: Iterable[Entity],
    *,
    pinned_country: str = DEFAULT_PINNED_COUNTRY,
) -> GroupingTree:
    """Partition centers into a :class:`GroupingTree` sorted by name within each bucket."""

    grouped = GroupingTree(pinned_country=pinned_country)
    for entity in entities:
        address = entity.get("address")
        location = resolve_location(address if isinstance(address, str) else None)
        if location is None:
            grouped.unparseable.append(entity)
            continue
        grouped.tree.setdefault(location.country, {}).setdefault(location.state, []).append(entity)

    for states in grouped.tree.values():
        for entities_in_state in states.values():
            entities_in_state.sort(key=_name_key)
    grouped.unparseable.sort(key=_name_key)
    return grouped


__all__ = [
    "DEFAULT_PINNED_COUNTRY",
    "GroupingTree",
    "UNKNOWN_STATE",
    "group_by_location",
    "resolve_location",
]
