"""Integration tests for the geocode proxy endpoint."""
from __future__ import annotations

import pytest

pytest.importorskip("fastapi")

from dharma_gates.geocoding import GeocodeNotFound, GeocodeServiceUnavailable


def test_forward_lookup(api_client, geocoder) -> None:
    """An address query should return the normalised result."""

    response = api_client.get("/geocode", params={"address": "Redwood Valley, CA"})

    assert response.status_code == 200
    assert response.json() == {
        "latitude": 39.2,
        "longitude": -123.2,
        "display_name": geocoder.result.display_name,
        "country": "United States",
        "state": "California",
    }
    assert geocoder.calls == [("forward", "Redwood Valley, CA")]


def test_reverse_lookup(api_client, geocoder) -> None:
    """Coordinates without an address should trigger a reverse lookup."""

    response = api_client.get("/geocode", params={"lat": 39.2, "lon": -123.2})

    assert response.status_code == 200
    assert geocoder.calls == [("reverse", 39.2, -123.2)]


def test_missing_query_is_bad_request(api_client, geocoder) -> None:
    """Neither address nor a full coordinate pair should be a 400."""

    assert api_client.get("/geocode").status_code == 400
    assert api_client.get("/geocode", params={"lat": 10}).status_code == 400
    assert api_client.get("/geocode", params={"address": "  "}).status_code == 400
    assert geocoder.calls == []


def test_out_of_range_coordinates_fail_validation(api_client) -> None:
    """Latitude beyond the poles should be rejected before geocoding."""

    assert api_client.get("/geocode", params={"lat": 120, "lon": 0}).status_code == 422


def test_not_found_and_unavailable_are_distinct(api_client, geocoder) -> None:
    """Callers must be able to tell "check input" apart from "try again"."""

    geocoder.error = GeocodeNotFound("nothing")
    not_found = api_client.get("/geocode", params={"address": "Atlantis"})
    reverse_not_found = api_client.get("/geocode", params={"lat": 0, "lon": -30})

    geocoder.error = GeocodeServiceUnavailable("down")
    unavailable = api_client.get("/geocode", params={"address": "Atlantis"})

    assert not_found.status_code == 404
    assert not_found.json()["detail"] == "Address not found"
    assert reverse_not_found.json()["detail"] == "Coordinates not found"
    assert unavailable.status_code == 503
    assert unavailable.json()["detail"] == "Geocoding service temporarily unavailable"
