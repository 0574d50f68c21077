"""Shared fixtures: a throwaway SQLite database and a scripted geocoder."""
from __future__ import annotations

import importlib
from typing import Any, Callable

import pytest

from dharma_gates.geocoding.models import GeocodeResult


class StubGeocoder:
    """Geocoder double returning a fixed result or raising a fixed error."""

    def __init__(self) -> None:
        self.result = GeocodeResult(
            latitude=39.2,
            longitude=-123.2,
            display_name="Abhayagiri, Tomki Road, Redwood Valley, California, 95470, United States",
            country="United States",
            state="California",
        )
        self.error: Exception | None = None
        self.calls: list[tuple[Any, ...]] = []

    async def forward(self, address: str) -> GeocodeResult:
        self.calls.append(("forward", address))
        if self.error is not None:
            raise self.error
        return self.result

    async def reverse(self, latitude: float, longitude: float) -> GeocodeResult:
        self.calls.append(("reverse", latitude, longitude))
        if self.error is not None:
            raise self.error
        return self.result


@pytest.fixture
def geocoder() -> StubGeocoder:
    return StubGeocoder()


@pytest.fixture
def session_module(tmp_path, monkeypatch):
    """Point the session module at a fresh SQLite file with tables created."""

    pytest.importorskip("sqlalchemy")
    from dharma_gates.core import settings as settings_module

    monkeypatch.setenv("DATABASE_URL", f"sqlite:///{tmp_path / 'dharma_gates.db'}")
    settings_module._get_settings.cache_clear()
    module = importlib.import_module("dharma_gates.db.session")
    importlib.reload(module)
    module.init_db()
    yield module
    module.get_engine().dispose()
    settings_module._get_settings.cache_clear()


@pytest.fixture
def seed_centers(session_module) -> Callable[..., list[Any]]:
    """Insert center rows, published unless ``pending=True`` is given."""

    from dharma_gates.db.models import Center

    def _seed(*records: dict[str, Any]) -> list[Any]:
        ids: list[Any] = []
        with session_module.session_scope() as session:
            for record in records:
                values: dict[str, Any] = {
                    "center_type": "Monastery",
                    "vehicle": "Theravada",
                    "pending": False,
                }
                values.update(record)
                center = Center(**values)
                session.add(center)
                session.flush()
                ids.append(center.id)
        return ids

    return _seed


@pytest.fixture
def api_client(session_module, geocoder):
    """FastAPI test client with the geocoder replaced by :class:`StubGeocoder`."""

    pytest.importorskip("fastapi")
    from fastapi.testclient import TestClient

    from dharma_gates.api.deps import get_geocode_client
    from dharma_gates.api.main import app

    app.dependency_overrides[get_geocode_client] = lambda: geocoder
    with TestClient(app) as client:
        yield client
    app.dependency_overrides.clear()
