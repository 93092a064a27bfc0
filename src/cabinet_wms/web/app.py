"""FastAPI application factory."""

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from cabinet_wms import __version__
from cabinet_wms.application.config import AppSettings
from cabinet_wms.web.dependencies import DatabaseDep, get_settings, open_database
from cabinet_wms.web.exceptions import register_exception_handlers
from cabinet_wms.web.routers import (
    configurations_router,
    nesting_router,
    projects_router,
    templates_router,
)
from cabinet_wms.web.schemas.responses import HealthSchema


def create_app(settings: AppSettings | None = None) -> FastAPI:
    """Create and configure the FastAPI application.

    Args:
        settings: Settings to use; read from the environment when omitted.
            The database they name is opened here and shared by all requests.

    Returns:
        Configured FastAPI application instance.
    """
    settings = settings or get_settings()

    app = FastAPI(
        title="Cabinet WMS API",
        description="Cutting-list nesting and saved cabinet records",
        version=__version__,
        docs_url="/docs",
        redoc_url="/redoc",
    )
    app.state.database = open_database(settings)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_exception_handlers(app)

    app.include_router(nesting_router, prefix="/api/v1")
    app.include_router(templates_router, prefix="/api/v1")
    app.include_router(configurations_router, prefix="/api/v1")
    app.include_router(projects_router, prefix="/api/v1")

    @app.get("/health", response_model=HealthSchema)
    def health_check(db: DatabaseDep) -> HealthSchema:
        """Health check endpoint."""
        return HealthSchema(
            status="OK",
            database="connected" if db.is_connected() else "disconnected",
        )

    return app


# Application instance for ASGI servers (uvicorn)
app = create_app()
