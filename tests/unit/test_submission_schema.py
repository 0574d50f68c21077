"""Unit tests for the center submission schema."""
from __future__ import annotations

import pytest
from pydantic import ValidationError

pytest.importorskip("email_validator")

from dharma_gates.services.submission import CenterSubmission

BASE = {
    "name": "  Wat   Metta ",
    "center_type": "Monastery",
    "vehicle": "Theravada",
    "description": "Forest monastery in the Thai tradition.",
}


def test_coordinates_are_accepted() -> None:
    """Valid coordinates alone should satisfy the location requirement."""

    submission = CenterSubmission(**BASE, latitude=33.2, longitude=-116.9)

    assert submission.has_coordinates is True
    assert submission.name == "Wat   Metta"


def test_address_is_accepted_without_coordinates() -> None:
    """An address alone should also be enough."""

    submission = CenterSubmission(**BASE, address="Valley Center, CA 92082")

    assert submission.has_coordinates is False


def test_location_is_required() -> None:
    """Neither coordinates nor address should be rejected."""

    with pytest.raises(ValidationError):
        CenterSubmission(**BASE)
    with pytest.raises(ValidationError):
        CenterSubmission(**BASE, address="   ")


def test_coordinates_must_be_paired_and_in_range() -> None:
    """Half a coordinate pair or out-of-range values should fail."""

    with pytest.raises(ValidationError):
        CenterSubmission(**BASE, latitude=10.0)
    with pytest.raises(ValidationError):
        CenterSubmission(**BASE, latitude=91.0, longitude=0.0)
    with pytest.raises(ValidationError):
        CenterSubmission(**BASE, latitude=0.0, longitude=-181.0)


def test_contact_fields_are_validated() -> None:
    """Email and website formats are checked; blanks are treated as missing."""

    with pytest.raises(ValidationError):
        CenterSubmission(**BASE, address="x", email="not-an-email")
    with pytest.raises(ValidationError):
        CenterSubmission(**BASE, address="x", website="watmetta.org")

    submission = CenterSubmission(**BASE, address="x", email="", website="https://watmetta.org")
    assert submission.email is None
    assert submission.website == "https://watmetta.org"


def test_list_fields_accept_comma_separated_text() -> None:
    """Comma separated strings should become clean lists."""

    submission = CenterSubmission(**BASE, address="x", traditions="Thai Forest, , Ajahn Chah", teachers=[])

    assert submission.traditions == ["Thai Forest", "Ajahn Chah"]
    assert submission.teachers is None


def test_blank_required_fields_are_rejected() -> None:
    """Whitespace-only names should fail validation."""

    with pytest.raises(ValidationError):
        CenterSubmission(**{**BASE, "name": "   "}, address="x")


def test_update_keeps_only_sent_fields() -> None:
    """Partial edits should not touch fields that were not sent."""

    from dharma_gates.services.submission import CenterUpdate

    update = CenterUpdate(name=" Wat Metta ", address="", traditions="Thai Forest,")

    assert update.model_dump(exclude_unset=True) == {
        "name": "Wat Metta",
        "address": None,
        "traditions": ["Thai Forest"],
    }


@pytest.mark.parametrize(
    "fields",
    [
        {"latitude": 10.0},
        {"latitude": 10.0, "longitude": None},
        {"name": None},
        {"vehicle": "  "},
        {"website": "ftp://example.org"},
    ],
)
def test_update_rejects_invalid_edits(fields: dict) -> None:
    """Unpaired coordinates and blank required fields are refused."""

    from dharma_gates.services.submission import CenterUpdate

    with pytest.raises(ValidationError):
        CenterUpdate(**fields)
