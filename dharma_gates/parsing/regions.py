"""Subdivision lookup tables for the countries the directory expands abbreviations for."""
from __future__ import annotations

from typing import Mapping

from dharma_gates.utils.text import title_case

US_STATES: Mapping[str, str] = {
    "AL": "Alabama",
    "AK": "Alaska",
    "AZ": "Arizona",
    "AR": "Arkansas",
    "CA": "California",
    "CO": "Colorado",
    "CT": "Connecticut",
    "DE": "Delaware",
    "FL": "Florida",
    "GA": "Georgia",
    "HI": "Hawaii",
    "ID": "Idaho",
    "IL": "Illinois",
    "IN": "Indiana",
    "IA": "Iowa",
    "KS": "Kansas",
    "KY": "Kentucky",
    "LA": "Louisiana",
    "ME": "Maine",
    "MD": "Maryland",
    "MA": "Massachusetts",
    "MI": "Michigan",
    "MN": "Minnesota",
    "MS": "Mississippi",
    "MO": "Missouri",
    "MT": "Montana",
    "NE": "Nebraska",
    "NV": "Nevada",
    "NH": "New Hampshire",
    "NJ": "New Jersey",
    "NM": "New Mexico",
    "NY": "New York",
    "NC": "North Carolina",
    "ND": "North Dakota",
    "OH": "Ohio",
    "OK": "Oklahoma",
    "OR": "Oregon",
    "PA": "Pennsylvania",
    "RI": "Rhode Island",
    "SC": "South Carolina",
    "SD": "South Dakota",
    "TN": "Tennessee",
    "TX": "Texas",
    "UT": "Utah",
    "VT": "Vermont",
    "VA": "Virginia",
    "WA": "Washington",
    "WV": "West Virginia",
    "WI": "Wisconsin",
    "WY": "Wyoming",
    "DC": "District of Columbia",
}

CANADIAN_PROVINCES: Mapping[str, str] = {
    "AB": "Alberta",
    "BC": "British Columbia",
    "MB": "Manitoba",
    "NB": "New Brunswick",
    "NL": "Newfoundland and Labrador",
    "NS": "Nova Scotia",
    "ON": "Ontario",
    "PE": "Prince Edward Island",
    "QC": "Quebec",
    "SK": "Saskatchewan",
    "NT": "Northwest Territories",
    "NU": "Nunavut",
    "YT": "Yukon",
}


def is_united_states(country: str) -> bool:
    lowered = country.lower()
    return "united states" in lowered or "usa" in lowered or lowered == "us"


def is_canada(country: str) -> bool:
    return "canada" in country.lower()


def _subdivisions_for(country: str) -> Mapping[str, str] | None:
    if is_united_states(country):
        return US_STATES
    if is_canada(country):
        return CANADIAN_PROVINCES
    return None


def normalize_state(token: str, country: str) -> str:
    """Expand or canonicalise a state/province token within its country.

    ``normalize_state("CA", "United States")`` is ``"California"`` while
    ``normalize_state("CA", "")`` has no table to consult and falls through
    to title case, giving ``"Ca"``.
    """

    trimmed = token.strip()
    table = _subdivisions_for(country)
    if table is not None:
        expanded = table.get(trimmed.upper())
        if expanded is not None:
            return expanded
        lowered = trimmed.lower()
        for full_name in table.values():
            if full_name.lower() == lowered:
                return full_name
    return title_case(trimmed)


__all__ = ["CANADIAN_PROVINCES", "US_STATES", "is_canada", "is_united_states", "normalize_state"]
