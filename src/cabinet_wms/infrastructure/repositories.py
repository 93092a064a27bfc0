"""Repositories for saved cabinet records and API users.

Templates, configurations and projects share one storage shape: scalar
columns plus structured columns held as JSON text. Every repository degrades
to fixed mock data when the database is not connected: reads are served from
the mocks and writes raise StoreUnavailableError.
"""

from __future__ import annotations

import copy
import hashlib
import json
import logging
import secrets
from collections.abc import Iterable, Mapping
from typing import Any, ClassVar

from pydantic.alias_generators import to_camel

from cabinet_wms.domain.entities import User
from cabinet_wms.infrastructure.database import Database, StoreUnavailableError

logger = logging.getLogger(__name__)


def hash_token(token: str) -> str:
    """SHA-256 hex digest stored in place of an API token."""
    return hashlib.sha256(token.encode("utf-8")).hexdigest()


MOCK_USERS: dict[str, User] = {
    hash_token("admin-token"): User(
        id=1,
        username="admin",
        email="admin@example.com",
        role="admin",
        permissions=("*",),
    ),
    hash_token("manager-token"): User(
        id=2,
        username="manager",
        email="manager@example.com",
        role="manager",
        permissions=(
            "dashboard.view",
            "inventory.view",
            "requisitions.*",
            "purchase_orders.*",
        ),
    ),
}

MOCK_TEMPLATES: list[dict[str, Any]] = [
    {
        "id": 1,
        "name": "Standard Base Cabinet",
        "description": "Floor-standing base cabinet with one shelf",
        "category": "base",
        "defaultDimensions": {"width": 600, "height": 720, "depth": 560},
        "minDimensions": {"width": 300, "height": 720, "depth": 300},
        "maxDimensions": {"width": 1200, "height": 900, "depth": 600},
        "panels": ["side", "side", "bottom", "shelf", "back"],
        "hardware": ["HNG-CONC-35"],
        "materials": [{"type": "Plywood", "thickness": 18}, {"type": "MDF", "thickness": 6}],
        "construction": {"joinery": "dado", "backInset": 6},
        "createdBy": 1,
        "createdAt": "2024-01-01 00:00:00",
        "updatedAt": "2024-01-01 00:00:00",
    },
    {
        "id": 2,
        "name": "Standard Wall Cabinet",
        "description": "Wall-hung cabinet",
        "category": "wall",
        "defaultDimensions": {"width": 600, "height": 720, "depth": 320},
        "minDimensions": {"width": 300, "height": 300, "depth": 250},
        "maxDimensions": {"width": 1200, "height": 1000, "depth": 400},
        "panels": ["side", "side", "top", "bottom", "back"],
        "hardware": ["HNG-CONC-35"],
        "materials": [{"type": "Plywood", "thickness": 18}, {"type": "MDF", "thickness": 6}],
        "construction": {"joinery": "dado", "backInset": 6},
        "createdBy": 1,
        "createdAt": "2024-01-01 00:00:00",
        "updatedAt": "2024-01-01 00:00:00",
    },
]

MOCK_CONFIGURATIONS: list[dict[str, Any]] = [
    {
        "id": 1,
        "name": "Base Cabinet 600",
        "templateId": "base-cabinet",
        "dimensions": {"width": 600, "height": 720, "depth": 560},
        "materials": [{"type": "Plywood", "thickness": 18}],
        "cuttingList": [
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
                "id": "bottom",
                "materialType": "Plywood",
                "thickness": 18,
                "length": 564,
                "width": 560,
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
                "grain": "none",
            },
        ],
        "createdBy": 1,
        "createdAt": "2024-01-01 00:00:00",
        "updatedAt": "2024-01-01 00:00:00",
    },
]

MOCK_PROJECTS: list[dict[str, Any]] = [
    {
        "id": 1,
        "name": "Modern Kitchen Renovation",
        "description": "Complete kitchen cabinet set for residential project",
        "configurations": [1],
        "createdBy": 1,
        "createdAt": "2024-01-01 00:00:00",
        "updatedAt": "2024-01-01 00:00:00",
    },
]


class RecordNotFoundError(Exception):
    """Raised when a stored record does not exist.

    Attributes:
        kind: Record kind used in messages, e.g. "Configuration".
        record_id: The id that was looked up.
    """

    kind: ClassVar[str] = "Record"

    def __init__(self, record_id: int) -> None:
        self.record_id = record_id
        super().__init__(f"{self.kind} not found: {record_id}")


class TemplateNotFoundError(RecordNotFoundError):
    kind = "Template"


class ConfigurationNotFoundError(RecordNotFoundError):
    kind = "Configuration"


class ProjectNotFoundError(RecordNotFoundError):
    kind = "Project"


class UserRepository:
    """Looks up API users by token."""

    def __init__(self, db: Database) -> None:
        self.db = db

    def get_by_token(self, token: str) -> User | None:
        token_hash = hash_token(token)
        if not self.db.is_connected():
            return MOCK_USERS.get(token_hash)

        row = self.db.fetch_one(
            "SELECT id, username, email, role, permissions FROM users WHERE token_hash = ?",
            (token_hash,),
        )
        if row is None:
            return None
        return User(
            id=row["id"],
            username=row["username"],
            email=row["email"],
            role=row["role"],
            permissions=tuple(json.loads(row["permissions"] or "[]")),
        )

    def create(
        self,
        username: str,
        role: str,
        permissions: Iterable[str],
        email: str | None = None,
    ) -> tuple[User, str]:
        """Create a user and issue a new API token.

        The plain token is returned once; only its hash is stored.

        Raises:
            StoreUnavailableError: If the database is not connected.
        """
        if not self.db.is_connected():
            raise StoreUnavailableError("create user")

        token = secrets.token_urlsafe(32)
        granted = tuple(permissions)
        user_id, _ = self.db.execute(
            "INSERT INTO users (username, email, role, permissions, token_hash) "
            "VALUES (?, ?, ?, ?, ?)",
            (username, email, role, json.dumps(list(granted)), hash_token(token)),
        )
        logger.info("Created user %s with role %s", username, role)
        user = User(id=user_id, username=username, email=email, role=role, permissions=granted)
        return user, token


class JsonRecordRepository:
    """CRUD for one table of named records with JSON-text columns.

    Subclasses name the table, the writable columns and which of them hold
    JSON. Rows are returned as camelCase dicts with their JSON columns
    parsed, the shape the REST API serves. Mock records are returned as deep
    copies so callers cannot alter them.
    """

    table: ClassVar[str]
    noun: ClassVar[str]
    not_found: ClassVar[type[RecordNotFoundError]]
    # Writable columns in insert order
    columns: ClassVar[tuple[str, ...]]
    # JSON column -> factory for its empty value
    json_columns: ClassVar[dict[str, type]]
    mocks: ClassVar[list[dict[str, Any]]]

    def __init__(self, db: Database) -> None:
        self.db = db

    def list_all(self) -> list[dict[str, Any]]:
        if not self.db.is_connected():
            logger.info("Database not connected, serving mock %ss", self.noun)
            return copy.deepcopy(self.mocks)

        rows = self.db.fetch_all(f"SELECT * FROM {self.table} ORDER BY name ASC, id ASC")
        return [self._from_row(row) for row in rows]

    def get(self, record_id: int) -> dict[str, Any]:
        """Fetch one record.

        Raises:
            RecordNotFoundError: If no record has this id (the subclass's
                ``not_found`` type).
        """
        if not self.db.is_connected():
            for record in self.mocks:
                if record["id"] == record_id:
                    return copy.deepcopy(record)
            raise self.not_found(record_id)

        row = self.db.fetch_one(f"SELECT * FROM {self.table} WHERE id = ?", (record_id,))
        if row is None:
            raise self.not_found(record_id)
        return self._from_row(row)

    def create(self, data: Mapping[str, Any], user_id: int | str | None = None) -> int:
        """Insert a record and return its id.

        ``data`` uses the API's camelCase keys.
        """
        if not self.db.is_connected():
            raise StoreUnavailableError(f"save {self.noun}")

        params = [self._to_column(column, data.get(to_camel(column))) for column in self.columns]
        placeholders = ", ".join("?" for _ in range(len(self.columns) + 1))
        record_id, _ = self.db.execute(
            f"INSERT INTO {self.table} ({', '.join(self.columns)}, created_by) "
            f"VALUES ({placeholders})",
            (*params, user_id),
        )
        logger.info("Saved %s %s (%s)", self.noun, record_id, data["name"])
        return record_id

    def update(self, record_id: int, data: Mapping[str, Any]) -> None:
        """Overwrite the fields present in ``data``.

        Raises:
            RecordNotFoundError: If no record has this id.
        """
        if not self.db.is_connected():
            raise StoreUnavailableError(f"update {self.noun}")

        assignments: list[str] = []
        params: list[Any] = []
        for column in self.columns:
            key = to_camel(column)
            if key not in data:
                continue
            assignments.append(f"{column} = ?")
            params.append(self._to_column(column, data[key]))
        assignments.append("updated_at = datetime('now')")

        _, rowcount = self.db.execute(
            f"UPDATE {self.table} SET {', '.join(assignments)} WHERE id = ?",
            (*params, record_id),
        )
        if rowcount == 0:
            raise self.not_found(record_id)
        logger.info("Updated %s %s", self.noun, record_id)

    def delete(self, record_id: int) -> None:
        """Remove a record.

        Raises:
            RecordNotFoundError: If no record has this id.
        """
        if not self.db.is_connected():
            raise StoreUnavailableError(f"delete {self.noun}")

        _, rowcount = self.db.execute(f"DELETE FROM {self.table} WHERE id = ?", (record_id,))
        if rowcount == 0:
            raise self.not_found(record_id)
        logger.info("Deleted %s %s", self.noun, record_id)

    def _to_column(self, column: str, value: Any) -> Any:
        if column in self.json_columns:
            return json.dumps(value if value is not None else self.json_columns[column]())
        return value

    def _from_row(self, row: Mapping[str, Any]) -> dict[str, Any]:
        record: dict[str, Any] = {}
        for column, value in row.items():
            if column in self.json_columns:
                value = json.loads(value) if value else self.json_columns[column]()
            record[to_camel(column)] = value
        return record


class TemplateRepository(JsonRecordRepository):
    """Custom cabinet templates: default and limiting dimensions, panels, hardware."""

    table = "cabinet_templates"
    noun = "template"
    not_found = TemplateNotFoundError
    columns = (
        "name",
        "description",
        "category",
        "default_dimensions",
        "min_dimensions",
        "max_dimensions",
        "panels",
        "hardware",
        "materials",
        "construction",
    )
    json_columns = {
        "default_dimensions": dict,
        "min_dimensions": dict,
        "max_dimensions": dict,
        "panels": list,
        "hardware": list,
        "materials": list,
        "construction": dict,
    }
    mocks = MOCK_TEMPLATES


class ConfigurationRepository(JsonRecordRepository):
    """Saved cabinet configurations and the cutting lists derived from them."""

    table = "cabinet_configurations"
    noun = "configuration"
    not_found = ConfigurationNotFoundError
    columns = ("name", "template_id", "dimensions", "materials", "cutting_list")
    json_columns = {"dimensions": dict, "materials": list, "cutting_list": list}
    mocks = MOCK_CONFIGURATIONS


class ProjectRepository(JsonRecordRepository):
    """Customer projects grouping saved configurations by id."""

    table = "cabinet_projects"
    noun = "project"
    not_found = ProjectNotFoundError
    columns = ("name", "description", "configurations")
    json_columns = {"configurations": list}
    mocks = MOCK_PROJECTS
