"""Integration tests for the moderation API."""
from __future__ import annotations

import uuid

import pytest

pytest.importorskip("fastapi")
pytest.importorskip("email_validator")

from dharma_gates.geocoding import GeocodeNotFound


def test_approve_and_reject_flow(api_client, seed_centers) -> None:
    """Approving publishes a center; rejecting deletes it."""

    keep_id, drop_id = seed_centers(
        {"name": "Keep", "address": "x|||Nepal|||Bagmati", "pending": True},
        {"name": "Drop", "address": "x|||Nepal|||Bagmati", "pending": True},
    )

    assert api_client.get("/admin/summary").json() == {"total": 2, "pending": 2}

    approved = api_client.post(f"/admin/centers/{keep_id}/approve")
    assert approved.status_code == 200
    assert approved.json()["pending"] is False

    rejected = api_client.delete(f"/admin/centers/{drop_id}")
    assert rejected.status_code == 204
    assert api_client.delete(f"/admin/centers/{drop_id}").status_code == 404

    assert api_client.get("/admin/summary").json() == {"total": 1, "pending": 0}
    assert [center["name"] for center in api_client.get("/centers").json()] == ["Keep"]


def test_unknown_center_is_not_found(api_client) -> None:
    """Moderating a missing center should 404."""

    assert api_client.post(f"/admin/centers/{uuid.uuid4()}/approve").status_code == 404


def test_feedback_moderation(api_client, seed_centers) -> None:
    """Moderators can annotate and clear feedback, and filter by status."""

    (center_id,) = seed_centers({"name": "Abhayagiri", "address": "x|||United States|||California"})
    feedback = api_client.post(
        f"/centers/{center_id}/feedback",
        json={"feedback_type": "closure", "subject": "Closed?", "feedback_content": "Looks closed."},
    ).json()

    noted = api_client.put(f"/admin/feedback/{feedback['id']}/notes", json={"admin_notes": "  Called them. "})
    assert noted.status_code == 200
    assert noted.json()["admin_notes"] == "Called them."

    assert len(api_client.get("/admin/feedback", params={"status": "pending"}).json()) == 1

    cleared = api_client.post(f"/admin/feedback/{feedback['id']}/clear")
    assert cleared.status_code == 200
    assert cleared.json()["admin_status"] == "cleared"
    assert cleared.json()["reviewed_at"] is not None

    assert api_client.get("/admin/feedback", params={"status": "pending"}).json() == []
    assert len(api_client.get("/admin/feedback").json()) == 1
    assert api_client.get("/admin/feedback", params={"status": "bogus"}).status_code == 422
    assert api_client.post(f"/admin/feedback/{uuid.uuid4()}/clear").status_code == 404


def test_edit_center_geocodes_a_changed_address(api_client, geocoder, seed_centers) -> None:
    """A new free-text address is stored in composite form and regrouped."""

    (center_id,) = seed_centers({"name": "Abhayagiri", "address": "Somewhere, Nowhere"})

    response = api_client.put(
        f"/admin/centers/{center_id}",
        json={"address": "16201 Tomki Rd, Redwood Valley, CA", "phone": "707-485-1630"},
    )

    assert response.status_code == 200
    body = response.json()
    assert body["address"] == f"{geocoder.result.display_name}|||United States|||California"
    assert (body["latitude"], body["longitude"]) == (39.2, -123.2)
    assert body["phone"] == "707-485-1630"
    assert body["name"] == "Abhayagiri"
    assert geocoder.calls == [("forward", "16201 Tomki Rd, Redwood Valley, CA")]

    grouped = api_client.get("/centers/grouped").json()
    assert grouped["countries"][0]["states"][0]["state"] == "California"


def test_edit_center_keeps_composite_and_unchanged_addresses(api_client, geocoder, seed_centers) -> None:
    """Composite addresses and edits without an address change skip geocoding."""

    (center_id,) = seed_centers({"name": "Birken", "address": "Knutsford|||Canada|||British Columbia"})

    renamed = api_client.put(f"/admin/centers/{center_id}", json={"name": "  Birken   Forest "})
    moved = api_client.put(
        f"/admin/centers/{center_id}",
        json={"address": "Kelowna|||Canada|||British Columbia", "latitude": 49.9, "longitude": -119.5},
    )

    assert renamed.json()["name"] == "Birken Forest"
    assert renamed.json()["address"] == "Knutsford|||Canada|||British Columbia"
    assert moved.json()["address"] == "Kelowna|||Canada|||British Columbia"
    assert moved.json()["latitude"] == 49.9
    assert geocoder.calls == []


def test_edit_center_rejects_bad_input(api_client, geocoder, seed_centers) -> None:
    """Unpaired coordinates, blank required fields and unknown ids are refused."""

    (center_id,) = seed_centers({"name": "Keep", "address": "x|||Nepal|||Bagmati"})

    assert api_client.put(f"/admin/centers/{center_id}", json={"latitude": 10.0}).status_code == 422
    assert api_client.put(f"/admin/centers/{center_id}", json={"name": "   "}).status_code == 422
    assert api_client.put(f"/admin/centers/{uuid.uuid4()}", json={"name": "Other"}).status_code == 404

    geocoder.error = GeocodeNotFound("no match")
    missing = api_client.put(f"/admin/centers/{center_id}", json={"address": "Atlantis"})
    assert missing.status_code == 404
    assert missing.json()["detail"] == "Address not found"

    centers = api_client.get("/centers").json()
    assert [(center["name"], center["address"]) for center in centers] == [("Keep", "x|||Nepal|||Bagmati")]


def test_site_feedback_flow(api_client) -> None:
    """Visitors leave site feedback; moderators list and star it."""

    created = api_client.post(
        "/feedback", json={"feedback": "  Please add a map legend. ", "name": "", "email": "  "}
    )
    assert created.status_code == 201
    body = created.json()
    assert body["feedback"] == "Please add a map legend."
    assert body["name"] is None
    assert body["email"] is None
    assert body["starred"] is False

    assert api_client.post("/feedback", json={"feedback": "   "}).status_code == 422
    assert api_client.post("/feedback", json={"feedback": "hi", "email": "nope"}).status_code == 422

    starred = api_client.put(f"/admin/site-feedback/{body['id']}/starred", json={"starred": True})
    assert starred.status_code == 200
    assert starred.json()["starred"] is True

    assert len(api_client.get("/admin/site-feedback").json()) == 1
    assert len(api_client.get("/admin/site-feedback", params={"starred": True}).json()) == 1
    assert api_client.get("/admin/site-feedback", params={"starred": False}).json() == []
    assert (
        api_client.put(f"/admin/site-feedback/{uuid.uuid4()}/starred", json={"starred": True}).status_code
        == 404
    )
