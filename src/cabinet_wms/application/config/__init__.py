"""Input schemas, cutting-list loading and application settings.

Public API:
    - NestingInput: Cutting list plus sheet size and material filter
    - NestingOptions: Sheet size and material filter only
    - CuttingListItemInput: One cutting-list entry
    - load_nesting_input: Load a cutting list from a JSON file
    - load_nesting_input_from_dict: Validate a cutting-list payload
    - ConfigError: Exception for input and settings errors
    - AppSettings / load_settings: Environment-driven settings

Example:
    >>> from pathlib import Path
    >>> from cabinet_wms.application.config import load_nesting_input, ConfigError
    >>>
    >>> try:
    ...     request = load_nesting_input(Path("kitchen.json"))
    ... except ConfigError as e:
    ...     print(f"Error: {e}")
"""

from cabinet_wms.application.config.loader import (
    ConfigError,
    load_nesting_input,
    load_nesting_input_from_dict,
)
from cabinet_wms.application.config.schema import (
    CamelModel,
    CuttingListItemInput,
    NestingInput,
    NestingOptions,
)
from cabinet_wms.application.config.settings import AppSettings, load_settings

__all__ = [
    "AppSettings",
    "CamelModel",
    "ConfigError",
    "CuttingListItemInput",
    "NestingInput",
    "NestingOptions",
    "load_nesting_input",
    "load_nesting_input_from_dict",
    "load_settings",
]
