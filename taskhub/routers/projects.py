from fastapi import APIRouter, Depends, Request, status
from sqlalchemy.ext.asyncio import AsyncSession

from taskhub.dependencies import (
    get_db,
    get_current_user,
    read_json,
    require_project_member,
    require_project_owner,
)
from taskhub.models.project import ProjectMember
from taskhub.models.user import User as UserModel
from taskhub.schemas.project import ProjectResponse, ProjectDetail
from taskhub.services import projects as project_service
from taskhub.services.validation import ResourceKind, validate_or_raise

router = APIRouter(prefix="/projects", tags=["projects"])


def _detail(project, role) -> ProjectDetail:
    detail = ProjectDetail.model_validate(project)
    detail.role = role
    return detail


@router.get("", response_model=list[ProjectResponse])
async def list_projects(
    db: AsyncSession = Depends(get_db),
    current_user: UserModel = Depends(get_current_user),
):
    rows = await project_service.list_projects(db, current_user.id)
    items = []
    for project, role in rows:
        item = ProjectResponse.model_validate(project)
        item.role = role
        items.append(item)
    return items


@router.post("", response_model=ProjectDetail, status_code=status.HTTP_201_CREATED)
async def create_project(
    request: Request,
    db: AsyncSession = Depends(get_db),
    current_user: UserModel = Depends(get_current_user),
):
    project_data = validate_or_raise(ResourceKind.CREATE_PROJECT, await read_json(request))
    project = await project_service.create_project(db, project_data, current_user.id)
    project = await project_service.get_project(db, project.id)
    owner = next(m for m in project.members if m.user_id == current_user.id)
    return _detail(project, owner.role)


@router.get("/{project_id}", response_model=ProjectDetail)
async def get_project(
    project_id: str,
    db: AsyncSession = Depends(get_db),
    member: ProjectMember = Depends(require_project_member),
):
    project = await project_service.get_project(db, project_id)
    return _detail(project, member.role)


@router.patch("/{project_id}", response_model=ProjectDetail)
async def update_project(
    project_id: str,
    request: Request,
    db: AsyncSession = Depends(get_db),
    member: ProjectMember = Depends(require_project_member),
):
    update_data = validate_or_raise(ResourceKind.UPDATE_PROJECT, await read_json(request))
    await project_service.update_project(db, project_id, update_data)
    project = await project_service.get_project(db, project_id)
    return _detail(project, member.role)


@router.delete("/{project_id}")
async def delete_project(
    project_id: str,
    db: AsyncSession = Depends(get_db),
    current_user: UserModel = Depends(require_project_owner),
):
    await project_service.delete_project(db, project_id)
    return {"message": "Project deleted"}
