"""FastAPI dependency injection for nesting and storage services."""

import logging
import sqlite3
from functools import lru_cache
from typing import Annotated

from fastapi import Depends, Request

from cabinet_wms.application.commands import ComputeNestingCommand
from cabinet_wms.application.config import AppSettings, load_settings
from cabinet_wms.infrastructure.database import Database
from cabinet_wms.infrastructure.repositories import (
    ConfigurationRepository,
    ProjectRepository,
    TemplateRepository,
    UserRepository,
)

logger = logging.getLogger(__name__)


@lru_cache(maxsize=1)
def get_settings() -> AppSettings:
    """Get cached settings read from the environment."""
    return load_settings()


def open_database(settings: AppSettings) -> Database:
    """Open the configured Database, creating its schema if needed.

    A database that cannot be initialized is still returned; it reports
    itself as disconnected and the repositories serve mock data.
    """
    db = Database(settings.database)
    if settings.database is None:
        logger.warning("CABINET_WMS_DATABASE not set, serving mock data")
        return db
    try:
        db.init_schema()
    except (sqlite3.Error, OSError) as e:
        logger.error("Could not initialize database %s: %s", settings.database, e)
    return db


def get_database(request: Request) -> Database:
    """Get the Database bound to the running application."""
    return request.app.state.database


def get_nesting_command() -> ComputeNestingCommand:
    """Dependency for ComputeNestingCommand."""
    return ComputeNestingCommand()


def get_configuration_repository(
    db: Annotated[Database, Depends(get_database)],
) -> ConfigurationRepository:
    return ConfigurationRepository(db)


def get_template_repository(
    db: Annotated[Database, Depends(get_database)],
) -> TemplateRepository:
    return TemplateRepository(db)


def get_project_repository(
    db: Annotated[Database, Depends(get_database)],
) -> ProjectRepository:
    return ProjectRepository(db)


def get_user_repository(
    db: Annotated[Database, Depends(get_database)],
) -> UserRepository:
    return UserRepository(db)


# Type aliases for cleaner endpoint signatures
DatabaseDep = Annotated[Database, Depends(get_database)]
NestingCommandDep = Annotated[ComputeNestingCommand, Depends(get_nesting_command)]
ConfigurationRepositoryDep = Annotated[
    ConfigurationRepository, Depends(get_configuration_repository)
]
TemplateRepositoryDep = Annotated[TemplateRepository, Depends(get_template_repository)]
ProjectRepositoryDep = Annotated[ProjectRepository, Depends(get_project_repository)]
UserRepositoryDep = Annotated[UserRepository, Depends(get_user_repository)]
