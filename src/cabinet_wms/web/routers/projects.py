"""Customer project endpoints.

A project lists saved configurations by id; the ids are stored as given and
not checked against the configurations table.
"""

from fastapi import APIRouter, status

from cabinet_wms.web.auth import EditorDep, ViewerDep
from cabinet_wms.web.dependencies import ProjectRepositoryDep
from cabinet_wms.web.schemas.requests import ProjectCreateRequest, ProjectUpdateRequest
from cabinet_wms.web.schemas.responses import CreatedSchema, MessageSchema, ProjectSchema

router = APIRouter(prefix="/cabinet-calculator/projects", tags=["projects"])


@router.get("", response_model=list[ProjectSchema])
def list_projects(repo: ProjectRepositoryDep, user: ViewerDep) -> list[dict]:
    """List projects by name."""
    return repo.list_all()


@router.get("/{project_id}", response_model=ProjectSchema)
def get_project(project_id: int, repo: ProjectRepositoryDep, user: ViewerDep) -> dict:
    return repo.get(project_id)


@router.post("", response_model=CreatedSchema, status_code=status.HTTP_201_CREATED)
def create_project(
    request: ProjectCreateRequest,
    repo: ProjectRepositoryDep,
    user: EditorDep,
) -> CreatedSchema:
    project_id = repo.create(request.model_dump(by_alias=True), user_id=user.id)
    return CreatedSchema(id=project_id, message="Project created successfully")


@router.put("/{project_id}", response_model=MessageSchema)
def update_project(
    project_id: int,
    request: ProjectUpdateRequest,
    repo: ProjectRepositoryDep,
    user: EditorDep,
) -> MessageSchema:
    repo.update(project_id, request.model_dump(by_alias=True, exclude_none=True))
    return MessageSchema(message="Project updated successfully")


@router.delete("/{project_id}", response_model=MessageSchema)
def delete_project(project_id: int, repo: ProjectRepositoryDep, user: EditorDep) -> MessageSchema:
    repo.delete(project_id)
    return MessageSchema(message="Project deleted successfully")
