"""Encoding and decoding of the ``display|||country|||state`` address format."""
from __future__ import annotations

from dataclasses import dataclass

SEPARATOR = "|||"
_PART_COUNT = 3


@dataclass(frozen=True)
class CompositeAddress:
    """Geocoder output as persisted in a center's ``address`` column."""

    display_name: str
    country: str
    state: str


def encode_composite(display_name: str, country: str, state: str) -> str:
    """Join the three fields with ``|||``.

    Field values are not escaped, so a display name that itself contains
    ``|||`` produces a string that no longer decodes.
    """

    return SEPARATOR.join((display_name, country, state))


def is_composite(address: str | None) -> bool:
    """Return whether the address uses the composite encoding."""

    return address is not None and SEPARATOR in address


def decode_composite(address: str | None) -> CompositeAddress | None:
    """Split a composite address into its fields.

    ``None`` is returned for legacy text and for composite strings with the
    wrong number of parts; callers fall back to legacy parsing in both cases.
    """

    if address is None or SEPARATOR not in address:
        return None
    parts = address.split(SEPARATOR)
    if len(parts) != _PART_COUNT:
        return None
    display_name, country, state = parts
    return CompositeAddress(display_name=display_name, country=country.strip(), state=state.strip())


__all__ = ["SEPARATOR", "CompositeAddress", "decode_composite", "encode_composite", "is_composite"]
