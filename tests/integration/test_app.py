"""Integration tests for the application factory."""

from __future__ import annotations

from pathlib import Path

from fastapi.testclient import TestClient

from cabinet_wms.application.config import AppSettings
from cabinet_wms.infrastructure import Database, UserRepository
from cabinet_wms.web.app import create_app

CONFIGURATIONS_URL = "/api/v1/cabinet-calculator/configurations"


class TestCreateApp:
    """Tests for binding the app to the database named in its settings."""

    def test_uses_database_from_settings(self, db: Database) -> None:
        client = TestClient(create_app(AppSettings(database=db.path)))

        assert client.get("/health").json() == {"status": "OK", "database": "connected"}

    def test_creates_missing_database(self, tmp_path: Path) -> None:
        path = tmp_path / "data" / "wms.db"

        client = TestClient(create_app(AppSettings(database=path)))

        assert path.exists()
        assert client.get("/health").json()["database"] == "connected"

    def test_writes_reach_settings_database(self, db: Database) -> None:
        _, token = UserRepository(db).create("editor", "user", ["cabinet_calc.*"])
        client = TestClient(create_app(AppSettings(database=db.path)))

        response = client.post(
            CONFIGURATIONS_URL,
            json={"name": "Pantry"},
            headers={"Authorization": f"Bearer {token}"},
        )

        assert response.status_code == 201
        row = db.fetch_one("SELECT name FROM cabinet_configurations WHERE id = ?", (response.json()["id"],))
        assert row["name"] == "Pantry"

    def test_apps_keep_separate_databases(self, tmp_path: Path) -> None:
        first = TestClient(create_app(AppSettings(database=tmp_path / "first.db")))
        second = TestClient(create_app(AppSettings()))

        assert first.get("/health").json()["database"] == "connected"
        assert second.get("/health").json()["database"] == "disconnected"
