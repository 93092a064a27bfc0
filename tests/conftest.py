"""Pytest configuration and shared fixtures for cabinet-wms tests."""

from __future__ import annotations

from pathlib import Path
from typing import Any

import pytest
from fastapi.testclient import TestClient

from cabinet_wms.application.config import AppSettings
from cabinet_wms.infrastructure import Database, UserRepository
from cabinet_wms.web.app import create_app

FIXTURES_PATH = Path(__file__).parent / "fixtures"


def pytest_configure(config: pytest.Config) -> None:
    """Configure pytest with custom markers."""
    config.addinivalue_line("markers", "slow: tests that take a long time to run")


# =============================================================================
# Cutting lists
# =============================================================================


@pytest.fixture
def cutting_list() -> list[dict[str, Any]]:
    """A small kitchen cutting list in the API's camelCase shape."""
    return [
        {
            "id": "side",
            "materialType": "Plywood",
            "thickness": 18,
            "length": 720,
            "width": 560,
            "quantity": 2,
            "grain": "length",
        },
        {
            "id": "shelf",
            "materialType": "Plywood",
            "thickness": 18,
            "length": 564,
            "width": 540,
            "quantity": 1,
            "grain": "width",
        },
        {
            "id": "back",
            "materialType": "MDF",
            "thickness": 6,
            "length": 720,
            "width": 600,
            "quantity": 1,
        },
    ]


# =============================================================================
# Store
# =============================================================================


@pytest.fixture
def db(tmp_path: Path) -> Database:
    """An initialized SQLite database in a temporary directory."""
    database = Database(tmp_path / "wms.db")
    database.init_schema()
    return database


@pytest.fixture
def offline_db() -> Database:
    """A database that is never connected, so mock data is served."""
    return Database(None)


@pytest.fixture
def admin_headers(db: Database) -> dict[str, str]:
    _, token = UserRepository(db).create("admin", "admin", [])
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def viewer_headers(db: Database) -> dict[str, str]:
    _, token = UserRepository(db).create("viewer", "user", ["cabinet_calc.view"])
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def editor_headers(db: Database) -> dict[str, str]:
    _, token = UserRepository(db).create("editor", "user", ["cabinet_calc.*"])
    return {"Authorization": f"Bearer {token}"}


# =============================================================================
# API clients
# =============================================================================


@pytest.fixture
def client(db: Database) -> TestClient:
    """API client backed by the temporary database."""
    return TestClient(create_app(AppSettings(database=db.path)))


@pytest.fixture
def offline_client(offline_db: Database) -> TestClient:
    """API client whose database is unavailable."""
    return TestClient(create_app(AppSettings(database=offline_db.path)))
