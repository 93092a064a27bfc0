"""Saved cabinet configuration endpoints."""

from fastapi import APIRouter, status

from cabinet_wms.web.auth import EditorDep, ViewerDep
from cabinet_wms.web.dependencies import ConfigurationRepositoryDep, NestingCommandDep
from cabinet_wms.web.schemas.requests import (
    ConfigurationCreateRequest,
    ConfigurationNestingRequest,
    ConfigurationUpdateRequest,
)
from cabinet_wms.web.schemas.responses import (
    CreatedSchema,
    ConfigurationSchema,
    MessageSchema,
    NestingResultSchema,
)

router = APIRouter(prefix="/cabinet-calculator/configurations", tags=["configurations"])


@router.get("", response_model=list[ConfigurationSchema])
def list_configurations(repo: ConfigurationRepositoryDep, user: ViewerDep) -> list[dict]:
    """List saved configurations by name."""
    return repo.list_all()


@router.get("/{config_id}", response_model=ConfigurationSchema)
def get_configuration(
    config_id: int, repo: ConfigurationRepositoryDep, user: ViewerDep
) -> dict:
    return repo.get(config_id)


@router.post(
    "",
    response_model=CreatedSchema,
    status_code=status.HTTP_201_CREATED,
)
def create_configuration(
    request: ConfigurationCreateRequest,
    repo: ConfigurationRepositoryDep,
    user: EditorDep,
) -> CreatedSchema:
    config_id = repo.create(request.model_dump(by_alias=True), user_id=user.id)
    return CreatedSchema(
        id=config_id, message="Configuration created successfully"
    )


@router.put("/{config_id}", response_model=MessageSchema)
def update_configuration(
    config_id: int,
    request: ConfigurationUpdateRequest,
    repo: ConfigurationRepositoryDep,
    user: EditorDep,
) -> MessageSchema:
    repo.update(config_id, request.model_dump(by_alias=True, exclude_none=True))
    return MessageSchema(message="Configuration updated successfully")


@router.delete("/{config_id}", response_model=MessageSchema)
def delete_configuration(
    config_id: int, repo: ConfigurationRepositoryDep, user: EditorDep
) -> MessageSchema:
    repo.delete(config_id)
    return MessageSchema(message="Configuration deleted successfully")


@router.post(
    "/{config_id}/nesting",
    response_model=list[NestingResultSchema],
    response_model_exclude_none=True,
)
def nest_configuration(
    config_id: int,
    repo: ConfigurationRepositoryDep,
    command: NestingCommandDep,
    user: ViewerDep,
    request: ConfigurationNestingRequest | None = None,
) -> list[dict]:
    """Nest the cutting list stored with a configuration.

    The body is optional and only carries the sheet size and material filter.
    """
    config = repo.get(config_id)
    results = command.execute_stored(config.get("cuttingList") or [], request)
    return [result.to_dict() for result in results]
