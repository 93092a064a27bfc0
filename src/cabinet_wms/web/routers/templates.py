"""Custom cabinet template endpoints."""

from fastapi import APIRouter, status

from cabinet_wms.web.auth import EditorDep, ViewerDep
from cabinet_wms.web.dependencies import TemplateRepositoryDep
from cabinet_wms.web.schemas.requests import TemplateCreateRequest, TemplateUpdateRequest
from cabinet_wms.web.schemas.responses import CreatedSchema, MessageSchema, TemplateSchema

router = APIRouter(prefix="/cabinet-calculator/templates", tags=["templates"])


@router.get("", response_model=list[TemplateSchema])
def list_templates(repo: TemplateRepositoryDep, user: ViewerDep) -> list[dict]:
    """List custom templates by name."""
    return repo.list_all()


@router.get("/{template_id}", response_model=TemplateSchema)
def get_template(template_id: int, repo: TemplateRepositoryDep, user: ViewerDep) -> dict:
    return repo.get(template_id)


@router.post("", response_model=CreatedSchema, status_code=status.HTTP_201_CREATED)
def create_template(
    request: TemplateCreateRequest,
    repo: TemplateRepositoryDep,
    user: EditorDep,
) -> CreatedSchema:
    template_id = repo.create(request.model_dump(by_alias=True), user_id=user.id)
    return CreatedSchema(id=template_id, message="Template created successfully")


@router.put("/{template_id}", response_model=MessageSchema)
def update_template(
    template_id: int,
    request: TemplateUpdateRequest,
    repo: TemplateRepositoryDep,
    user: EditorDep,
) -> MessageSchema:
    repo.update(template_id, request.model_dump(by_alias=True, exclude_none=True))
    return MessageSchema(message="Template updated successfully")


@router.delete("/{template_id}", response_model=MessageSchema)
def delete_template(
    template_id: int, repo: TemplateRepositoryDep, user: EditorDep
) -> MessageSchema:
    repo.delete(template_id)
    return MessageSchema(message="Template deleted successfully")
