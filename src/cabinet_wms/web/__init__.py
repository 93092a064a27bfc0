"""FastAPI REST API for cutting-list nesting.

Usage:
    uvicorn cabinet_wms.web:app --reload
"""

from cabinet_wms.web.app import app, create_app

__all__ = ["app", "create_app"]
