"""API routers for the REST API."""

from cabinet_wms.web.routers.configurations import router as configurations_router
from cabinet_wms.web.routers.nesting import router as nesting_router
from cabinet_wms.web.routers.projects import router as projects_router
from cabinet_wms.web.routers.templates import router as templates_router

__all__ = ["configurations_router", "nesting_router", "projects_router", "templates_router"]
