"""Text processing helpers."""
from __future__ import annotations

import re
import unicodedata


def clean_whitespace(value: str) -> str:
    """Collapse multiple whitespace characters into single spaces."""

    return re.sub(r"\s+", " ", value).strip()


def normalize_text(text: str) -> str:
    """Fold case and strip accents so that "Zén", "zen" and "ZEN" compare equal."""

    decomposed = unicodedata.normalize("NFD", text.lower())
    stripped = "".join(char for char in decomposed if not unicodedata.combining(char))
    return stripped.strip()


def title_case(value: str) -> str:
    """Capitalise the first letter of every space separated word and lower the rest."""

    return " ".join(word[:1].upper() + word[1:].lower() for word in value.split(" "))


def contains_text(haystack: str | None, needle: str) -> bool:
    """Case-insensitive substring check that treats a missing haystack as no match."""

    if not haystack:
        return False
    return needle.lower() in haystack.lower()
