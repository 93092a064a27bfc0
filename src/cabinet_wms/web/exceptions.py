"""Custom exceptions and error handlers for the REST API."""

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from cabinet_wms.domain.services.nesting import NestingError
from cabinet_wms.infrastructure.database import StoreUnavailableError
from cabinet_wms.infrastructure.repositories import RecordNotFoundError


class ExportError(Exception):
    """Raised when an export operation fails."""

    def __init__(self, message: str, format_name: str) -> None:
        self.message = message
        self.format_name = format_name
        super().__init__(message)


class UnsupportedFormatError(Exception):
    """Raised when the requested export format is not supported."""

    def __init__(self, format_name: str, available: list[str]) -> None:
        self.format_name = format_name
        self.available = available
        super().__init__(
            f"Unsupported format: {format_name}. Available: {', '.join(available)}"
        )


def register_exception_handlers(app: FastAPI) -> None:
    """Register custom exception handlers with the FastAPI app."""

    @app.exception_handler(NestingError)
    async def nesting_error_handler(request: Request, exc: NestingError) -> JSONResponse:
        return JSONResponse(
            status_code=500,
            content={
                "error": "Failed to perform nesting optimization",
                "error_type": "nesting",
                "details": [{"message": e} for e in exc.errors],
            },
        )

    @app.exception_handler(StoreUnavailableError)
    async def store_unavailable_handler(
        request: Request, exc: StoreUnavailableError
    ) -> JSONResponse:
        return JSONResponse(
            status_code=503,
            content={
                "error": str(exc),
                "error_type": "store_unavailable",
                "details": {"operation": exc.operation},
            },
        )

    @app.exception_handler(RecordNotFoundError)
    async def record_not_found_handler(
        request: Request, exc: RecordNotFoundError
    ) -> JSONResponse:
        return JSONResponse(
            status_code=404,
            content={
                "error": f"{exc.kind} not found",
                "error_type": "not_found",
                "details": {"id": exc.record_id},
            },
        )

    @app.exception_handler(ExportError)
    async def export_error_handler(request: Request, exc: ExportError) -> JSONResponse:
        return JSONResponse(
            status_code=400,
            content={
                "error": exc.message,
                "error_type": "export",
                "details": [{"format": exc.format_name}],
            },
        )

    @app.exception_handler(UnsupportedFormatError)
    async def unsupported_format_handler(
        request: Request, exc: UnsupportedFormatError
    ) -> JSONResponse:
        return JSONResponse(
            status_code=400,
            content={
                "error": str(exc),
                "error_type": "unsupported_format",
                "details": {"format": exc.format_name, "available": exc.available},
            },
        )
