"""Application layer - use cases and orchestration."""

from .commands import ComputeNestingCommand
from .config import ConfigError, NestingInput, NestingOptions

__all__ = [
    "ComputeNestingCommand",
    "ConfigError",
    "NestingInput",
    "NestingOptions",
]
