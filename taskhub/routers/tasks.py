from fastapi import APIRouter, Depends, Request, status
from sqlalchemy.ext.asyncio import AsyncSession

from taskhub.dependencies import get_db, read_json, require_project_member
from taskhub.models.project import ProjectMember
from taskhub.schemas.task import TaskListItem, TaskDetail
from taskhub.services import tasks as task_service
from taskhub.services.validation import ResourceKind, validate_or_raise

router = APIRouter(prefix="/projects/{project_id}/tasks", tags=["tasks"])


@router.get("", response_model=list[TaskListItem])
async def list_tasks(
    project_id: str,
    db: AsyncSession = Depends(get_db),
    member: ProjectMember = Depends(require_project_member),
):
    return await task_service.list_tasks(db, project_id)


@router.post("", response_model=TaskDetail, status_code=status.HTTP_201_CREATED)
async def create_task(
    project_id: str,
    request: Request,
    db: AsyncSession = Depends(get_db),
    member: ProjectMember = Depends(require_project_member),
):
    task_data = validate_or_raise(ResourceKind.CREATE_TASK, await read_json(request))
    task = await task_service.create_task(db, project_id, task_data, member.user_id)
    return await task_service.get_task(db, project_id, task.id)


@router.get("/{task_id}", response_model=TaskDetail)
async def get_task(
    project_id: str,
    task_id: str,
    db: AsyncSession = Depends(get_db),
    member: ProjectMember = Depends(require_project_member),
):
    return await task_service.get_task(db, project_id, task_id)


@router.patch("/{task_id}", response_model=TaskDetail)
async def update_task(
    project_id: str,
    task_id: str,
    request: Request,
    db: AsyncSession = Depends(get_db),
    member: ProjectMember = Depends(require_project_member),
):
    update_data = validate_or_raise(ResourceKind.UPDATE_TASK, await read_json(request))
    await task_service.update_task(db, project_id, task_id, update_data)
    return await task_service.get_task(db, project_id, task_id)


@router.delete("/{task_id}")
async def delete_task(
    project_id: str,
    task_id: str,
    db: AsyncSession = Depends(get_db),
    member: ProjectMember = Depends(require_project_member),
):
    await task_service.delete_task(db, project_id, task_id)
    return {"message": "Task deleted"}
