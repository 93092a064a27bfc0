"""Cabinet shop warehouse backend: cutting-list nesting and cabinet calculator API."""

__version__ = "1.0.0"
