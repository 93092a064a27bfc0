"""Cutting-list nesting endpoints."""

import logging
from collections.abc import Callable, Coroutine
from typing import Any

from fastapi import APIRouter, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import Response
from fastapi.routing import APIRoute

from cabinet_wms.application.config.loader import format_json_path
from cabinet_wms.domain.services.nesting import NestingError
from cabinet_wms.infrastructure.exporters import ExporterRegistry
from cabinet_wms.web.auth import ViewerDep
from cabinet_wms.web.dependencies import NestingCommandDep
from cabinet_wms.web.exceptions import ExportError, UnsupportedFormatError
from cabinet_wms.web.schemas.requests import NestingRequest
from cabinet_wms.web.schemas.responses import ExportFormatsSchema, NestingResultSchema

logger = logging.getLogger(__name__)


class NestingRoute(APIRoute):
    """Route that reports an invalid request body as a failed nesting run.

    A malformed cutting list fails the whole request with the same 500
    response as an engine failure, listing every problem found.
    """

    def get_route_handler(self) -> Callable[[Request], Coroutine[Any, Any, Response]]:
        handler = super().get_route_handler()

        async def nesting_route_handler(request: Request) -> Response:
            try:
                return await handler(request)
            except RequestValidationError as e:
                errors = [_describe(error) for error in e.errors()]
                logger.info("Rejected nesting request: %s", errors)
                raise NestingError(errors) from e

        return nesting_route_handler


def _describe(error: dict[str, Any]) -> str:
    loc = tuple(error.get("loc", ()))
    if loc[:1] == ("body",):
        loc = loc[1:]
    path = format_json_path(loc)
    return f"{path}: {error['msg']}" if path else error["msg"]


router = APIRouter(prefix="/cabinet-calculator", tags=["nesting"], route_class=NestingRoute)


@router.post(
    "/nesting",
    response_model=list[NestingResultSchema],
    response_model_exclude_none=True,
)
def compute_nesting(
    request: NestingRequest,
    command: NestingCommandDep,
    user: ViewerDep,
) -> list[dict]:
    """Nest a cutting list on sheet stock.

    Parts are grouped by material and thickness; one result is returned per
    group, in the order the groups first appear in the cutting list.
    """
    logger.debug("Nesting %d items for %s", len(request.cutting_list), user.username)
    return [result.to_dict() for result in command.execute(request)]


@router.get("/nesting/export/formats", response_model=ExportFormatsSchema)
def list_export_formats(user: ViewerDep) -> ExportFormatsSchema:
    """List the formats accepted by the export endpoint."""
    return ExportFormatsSchema(formats=ExporterRegistry.available_formats())


@router.post("/nesting/export/{format_name}")
def export_nesting(
    format_name: str,
    request: NestingRequest,
    command: NestingCommandDep,
    user: ViewerDep,
) -> Response:
    """Nest a cutting list and return the layout as a json, svg or dxf document."""
    if not ExporterRegistry.is_registered(format_name):
        raise UnsupportedFormatError(format_name, ExporterRegistry.available_formats())

    results = command.execute(request)
    exporter = ExporterRegistry.get(format_name)()
    try:
        content = exporter.export_string(results)
    except (ValueError, OSError) as e:
        logger.error("Export to %s failed: %s", format_name, e)
        raise ExportError(f"Failed to export nesting as {format_name}", format_name) from e

    filename = f"nesting.{exporter.file_extension}"
    return Response(
        content=content,
        media_type=exporter.media_type,
        headers={"Content-Disposition": f"attachment; filename={filename}"},
    )
