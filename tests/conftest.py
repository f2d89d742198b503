"""
Pytest configuration and fixtures for the Perks API tests.

Every test gets its own SQLite file under pytest's ``tmp_path`` so
tests never share state.
"""
import pathlib
import sys

import pytest
from fastapi.testclient import TestClient

ROOT = pathlib.Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from perks_api.app.core.config import settings  # noqa: E402
from perks_api.app.core.db import init_db  # noqa: E402
from perks_api.app.main import app  # noqa: E402
from perks_api.app.repositories.perk_repository import PerkRepository  # noqa: E402
from perks_api.app.services.perk_service import PerkService  # noqa: E402


@pytest.fixture(autouse=True)
def database(tmp_path, monkeypatch):
    """Point the app at a fresh database file and migrate it."""
    db_path = tmp_path / "perks_test.db"
    monkeypatch.setattr(settings, "database_url", str(db_path))
    init_db()
    return db_path


@pytest.fixture
def repository():
    return PerkRepository()


@pytest.fixture
def service(repository):
    return PerkService(repository)


@pytest.fixture
def client():
    with TestClient(app) as test_client:
        yield test_client
