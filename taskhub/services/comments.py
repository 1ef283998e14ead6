from sqlalchemy import delete
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.future import select
from sqlalchemy.orm import selectinload

from taskhub.errors import StoreError, StoreErrorKind, store_operation
from taskhub.models.base import generate_id
from taskhub.models.tasks import Task, Comment
from taskhub.schemas.task import CommentCreate


async def _ensure_task(db: AsyncSession, project_id: str, task_id: str):
    result = await db.execute(
        select(Task.id).filter(Task.id == task_id, Task.project_id == project_id)
    )
    if result.scalar() is None:
        raise StoreError(StoreErrorKind.NOT_FOUND, "Task not found")


@store_operation
async def list_comments(db: AsyncSession, project_id: str, task_id: str) -> list[Comment]:
    """Comments on a task, newest first."""
    await _ensure_task(db, project_id, task_id)
    result = await db.execute(
        select(Comment)
        .options(selectinload(Comment.author))
        .filter(Comment.task_id == task_id)
        .order_by(Comment.created_at.desc())
    )
    return list(result.scalars().all())


@store_operation
async def create_comment(
    db: AsyncSession, project_id: str, task_id: str, comment_data: CommentCreate, author_id: str
) -> Comment:
    await _ensure_task(db, project_id, task_id)

    comment = Comment(id=generate_id(), content=comment_data.content, task_id=task_id, author_id=author_id)
    db.add(comment)
    await db.commit()

    result = await db.execute(
        select(Comment).options(selectinload(Comment.author)).filter(Comment.id == comment.id)
    )
    return result.scalars().one()


@store_operation
async def delete_comment(db: AsyncSession, project_id: str, task_id: str, comment_id: str):
    await _ensure_task(db, project_id, task_id)
    result = await db.execute(
        delete(Comment).where(Comment.id == comment_id, Comment.task_id == task_id)
    )
    if result.rowcount == 0:
        raise StoreError(StoreErrorKind.NOT_FOUND, "Comment not found")
    await db.commit()
