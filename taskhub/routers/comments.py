from fastapi import APIRouter, Depends, Request, status
from sqlalchemy.ext.asyncio import AsyncSession

from taskhub.dependencies import get_db, read_json, require_project_member
from taskhub.models.project import ProjectMember
from taskhub.schemas.task import CommentResponse
from taskhub.services import comments as comment_service
from taskhub.services.validation import ResourceKind, validate_or_raise

router = APIRouter(prefix="/projects/{project_id}/tasks/{task_id}/comments", tags=["comments"])


@router.get("", response_model=list[CommentResponse])
async def list_comments(
    project_id: str,
    task_id: str,
    db: AsyncSession = Depends(get_db),
    member: ProjectMember = Depends(require_project_member),
):
    return await comment_service.list_comments(db, project_id, task_id)


@router.post("", response_model=CommentResponse, status_code=status.HTTP_201_CREATED)
async def create_comment(
    project_id: str,
    task_id: str,
    request: Request,
    db: AsyncSession = Depends(get_db),
    member: ProjectMember = Depends(require_project_member),
):
    comment_data = validate_or_raise(ResourceKind.CREATE_COMMENT, await read_json(request))
    return await comment_service.create_comment(db, project_id, task_id, comment_data, member.user_id)


@router.delete("/{comment_id}")
async def delete_comment(
    project_id: str,
    task_id: str,
    comment_id: str,
    db: AsyncSession = Depends(get_db),
    member: ProjectMember = Depends(require_project_member),
):
    await comment_service.delete_comment(db, project_id, task_id, comment_id)
    return {"message": "Comment deleted"}
