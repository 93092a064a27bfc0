"""Application settings read from the environment."""

import os
from collections.abc import Mapping
from pathlib import Path

from pydantic import BaseModel, Field, ValidationError as PydanticValidationError, field_validator

from cabinet_wms.application.config.loader import ConfigError

ENV_PREFIX = "CABINET_WMS_"

LOG_LEVELS = ("CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG")


class AppSettings(BaseModel):
    """Runtime settings for the API and CLI.

    Attributes:
        database: SQLite file for configurations and users. None runs the
            service on mock data.
        log_level: Root log level name.
        cors_origins: Origins allowed by the CORS middleware.
    """

    database: Path | None = Field(default=None, description="SQLite database file")
    log_level: str = Field(default="INFO", description="Logging level name")
    cors_origins: list[str] = Field(default_factory=lambda: ["*"])

    @field_validator("log_level")
    @classmethod
    def _known_level(cls, value: str) -> str:
        if value not in LOG_LEVELS:
            raise ValueError(f"log level must be one of {', '.join(LOG_LEVELS)}")
        return value


def load_settings(environ: Mapping[str, str] | None = None) -> AppSettings:
    """Build settings from ``CABINET_WMS_*`` environment variables.

    CABINET_WMS_CORS_ORIGINS is a comma-separated list.

    Raises:
        ConfigError: If a variable holds an invalid value.
    """
    env = os.environ if environ is None else environ
    data: dict[str, object] = {}

    database = env.get(f"{ENV_PREFIX}DATABASE")
    if database:
        data["database"] = database
    log_level = env.get(f"{ENV_PREFIX}LOG_LEVEL")
    if log_level:
        data["log_level"] = log_level.upper()
    origins = env.get(f"{ENV_PREFIX}CORS_ORIGINS")
    if origins:
        data["cors_origins"] = [o.strip() for o in origins.split(",") if o.strip()]

    try:
        return AppSettings.model_validate(data)
    except PydanticValidationError as e:
        raise ConfigError(
            message=f"Invalid environment settings: {e}",
            error_type="settings",
        ) from e
