"""Heuristic country/state extraction for free-text postal addresses.

Rows written before geocoding was introduced hold plain comma separated
addresses such as ``"123 Main St, Ukiah, CA 95482"``. The parser reads the
last part as the country (or infers the United States from a trailing
``XX 12345`` state/ZIP pair) and then walks the remaining parts right to
left, applying :data:`SCAN_RULES` to each one until a state token is
accepted.
"""
from __future__ import annotations

import re
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Iterable, Sequence

from dharma_gates.parsing.regions import normalize_state

UNITED_STATES = "United States"

_STATE_WITH_ZIP_RE = re.compile(r"^[A-Z]{2}\s+[0-9]")
_LEADING_DIGIT_RE = re.compile(r"^[0-9]")
_CITY_DESIGNATOR_RE = re.compile(r"\b(city|town|village|township|borough|district)\b", re.IGNORECASE)


@dataclass(frozen=True)
class ParsedLocation:
    """Country and normalised state derived from an address."""

    country: str
    state: str


class ScanAction(Enum):
    """What the backward scan does with a part once a rule matches."""

    SKIP = "skip"
    ACCEPT_ABBREVIATION = "accept_abbreviation"
    ACCEPT = "accept"


@dataclass(frozen=True)
class ScanRule:
    name: str
    matches: Callable[[str], bool]
    action: ScanAction


def _looks_like_zip(part: str) -> bool:
    return bool(_LEADING_DIGIT_RE.match(part))


def _is_state_with_zip(part: str) -> bool:
    return bool(_STATE_WITH_ZIP_RE.match(part))


def _is_city_designator(part: str) -> bool:
    return bool(_CITY_DESIGNATOR_RE.search(part))


# First matching rule wins; the last rule always matches.
SCAN_RULES: tuple[ScanRule, ...] = (
    ScanRule("zip_code", _looks_like_zip, ScanAction.SKIP),
    ScanRule("state_with_zip", _is_state_with_zip, ScanAction.ACCEPT_ABBREVIATION),
    ScanRule("city_designator", _is_city_designator, ScanAction.SKIP),
    ScanRule("state", lambda part: True, ScanAction.ACCEPT),
)


def _abbreviation(part: str) -> str:
    return part.split()[0]


def find_state_token(candidates: Iterable[str], rules: Sequence[ScanRule] = SCAN_RULES) -> str | None:
    """Return the first part accepted by ``rules`` or ``None`` when every part is skipped."""

    for part in candidates:
        for rule in rules:
            if not rule.matches(part):
                continue
            if rule.action is ScanAction.SKIP:
                break
            if rule.action is ScanAction.ACCEPT_ABBREVIATION:
                return _abbreviation(part)
            return part
    return None


def parse_legacy_address(address: str | None) -> ParsedLocation | None:
    """Infer ``(country, state)`` from a comma separated address.

    Returns ``None`` whenever the address cannot be resolved; the parser does
    not raise on malformed input.
    """

    if not address:
        return None

    parts = [part.strip() for part in address.split(",")]
    if len(parts) < 2:
        return None

    last = parts[-1]
    if _is_state_with_zip(last):
        return ParsedLocation(
            country=UNITED_STATES,
            state=normalize_state(_abbreviation(last), UNITED_STATES),
        )

    country = last
    state = find_state_token(reversed(parts[:-1]))
    if not state:
        return None
    return ParsedLocation(country=country, state=normalize_state(state, country))


__all__ = [
    "SCAN_RULES",
    "ParsedLocation",
    "ScanAction",
    "ScanRule",
    "UNITED_STATES",
    "find_state_token",
    "parse_legacy_address",
]
