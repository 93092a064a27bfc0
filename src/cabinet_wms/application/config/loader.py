"""Cutting-list file loader with error reporting.

Loads a JSON cutting-list file into a NestingInput. File system errors, JSON
syntax errors and schema violations are all raised as ConfigError with a
message suitable for the terminal and structured details for callers.
"""

import json
from pathlib import Path
from typing import Any

from pydantic import ValidationError as PydanticValidationError

from cabinet_wms.application.config.schema import NestingInput


class ConfigError(Exception):
    """Exception raised when a cutting-list file or payload cannot be used.

    Attributes:
        message: The primary error message
        error_type: Category of error (file_not_found, json_parse, validation, ...)
        path: Path to the file (if applicable)
        details: Additional error details (line/column for JSON, validation errors)
    """

    def __init__(
        self,
        message: str,
        error_type: str = "unknown",
        path: Path | None = None,
        details: list[dict[str, Any]] | None = None,
    ) -> None:
        self.message = message
        self.error_type = error_type
        self.path = path
        self.details = details or []
        super().__init__(message)

    def __str__(self) -> str:
        return self.message


def format_json_path(loc: tuple[str | int, ...]) -> str:
    """Format a Pydantic location tuple as a JSON path string.

    Examples:
        >>> format_json_path(("cuttingList", 0, "length"))
        'cuttingList[0].length'
    """
    parts: list[str] = []
    for segment in loc:
        if isinstance(segment, int):
            if parts:
                parts[-1] = f"{parts[-1]}[{segment}]"
            else:
                parts.append(f"[{segment}]")
        else:
            parts.append(str(segment))
    return ".".join(parts)


def _extract_validation_errors(
    error: PydanticValidationError,
) -> list[dict[str, Any]]:
    details: list[dict[str, Any]] = []
    for err in error.errors():
        details.append(
            {
                "path": format_json_path(err["loc"]),
                "message": err["msg"],
                "value": err.get("input"),
                "error_type": err["type"],
            }
        )
    return details


def _format_validation_error_message(details: list[dict[str, Any]]) -> str:
    lines = ["Cutting list validation failed:"]
    for detail in details:
        value = detail.get("value")
        if value is not None and not isinstance(value, (dict, list)):
            lines.append(f"  - {detail['path']}: {detail['message']} (got: {value!r})")
        else:
            lines.append(f"  - {detail['path']}: {detail['message']}")
    return "\n".join(lines)


def load_nesting_input_from_dict(data: Any) -> NestingInput:
    """Validate a cutting-list payload.

    A bare JSON array is treated as the cutting list itself.

    Raises:
        ConfigError: If the data fails validation.
    """
    if isinstance(data, list):
        data = {"cuttingList": data}
    try:
        return NestingInput.model_validate(data)
    except PydanticValidationError as e:
        details = _extract_validation_errors(e)
        raise ConfigError(
            message=_format_validation_error_message(details),
            error_type="validation",
            details=details,
        ) from e


def load_nesting_input(path: Path) -> NestingInput:
    """Load and validate a cutting-list JSON file.

    Args:
        path: Path to a JSON file holding ``{"cuttingList": [...], ...}`` or
            a bare array of cutting-list items.

    Returns:
        The validated NestingInput.

    Raises:
        ConfigError: If the file cannot be read, parsed or validated. The
            error_type is one of "file_not_found", "file_read_error",
            "json_parse" or "validation".
    """
    if not path.exists():
        raise ConfigError(
            message=f"Cutting list file not found: {path}",
            error_type="file_not_found",
            path=path,
        )

    try:
        content = path.read_text(encoding="utf-8")
    except OSError as e:
        raise ConfigError(
            message=f"Error reading cutting list file: {path}: {e}",
            error_type="file_read_error",
            path=path,
        ) from e

    try:
        data = json.loads(content)
    except json.JSONDecodeError as e:
        raise ConfigError(
            message=(
                f"Invalid JSON in cutting list file: {path} "
                f"(line {e.lineno}, column {e.colno}): {e.msg}"
            ),
            error_type="json_parse",
            path=path,
            details=[{"line": e.lineno, "column": e.colno, "message": e.msg}],
        ) from e

    try:
        return load_nesting_input_from_dict(data)
    except ConfigError as e:
        e.path = path
        raise
