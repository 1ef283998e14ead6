from sqlalchemy import delete
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.future import select
from sqlalchemy.orm import selectinload

from taskhub.errors import StoreError, StoreErrorKind, store_operation
from taskhub.models.base import generate_id
from taskhub.models.tasks import Task, Tag, TaskTag, Comment
from taskhub.models.user import User
from taskhub.schemas.task import TaskCreate, TaskUpdate


def _summary_options():
    return (
        selectinload(Task.assignee),
        selectinload(Task.creator),
        selectinload(Task.tags),
    )


async def _ensure_references(db: AsyncSession, assignee_id: str | None = None, tag_ids: list[str] | None = None):
    if assignee_id is not None:
        result = await db.execute(select(User.id).filter(User.id == assignee_id))
        if result.scalar() is None:
            raise StoreError(StoreErrorKind.NOT_FOUND, "Assignee not found")

    if tag_ids:
        result = await db.execute(select(Tag.id).filter(Tag.id.in_(set(tag_ids))))
        found = set(result.scalars().all())
        if found != set(tag_ids):
            raise StoreError(StoreErrorKind.NOT_FOUND, "Tag not found")


async def _replace_tags(db: AsyncSession, task_id: str, tag_ids: list[str]):
    """Full overwrite of a task's tag links, keeping the caller's order."""
    await db.execute(delete(TaskTag).where(TaskTag.task_id == task_id))

    # A repeated id collapses to its first occurrence, as the (task, tag) key would
    for position, tag_id in enumerate(dict.fromkeys(tag_ids)):
        db.add(TaskTag(task_id=task_id, tag_id=tag_id, position=position))


@store_operation
async def list_tasks(db: AsyncSession, project_id: str) -> list[Task]:
    result = await db.execute(
        select(Task)
        .options(*_summary_options())
        .filter(Task.project_id == project_id)
        .order_by(Task.created_at.desc())
        .execution_options(populate_existing=True)
    )
    return list(result.scalars().all())


@store_operation
async def get_task(db: AsyncSession, project_id: str, task_id: str) -> Task:
    result = await db.execute(
        select(Task)
        .options(
            *_summary_options(),
            selectinload(Task.comments).selectinload(Comment.author),
        )
        .filter(Task.id == task_id, Task.project_id == project_id)
        .execution_options(populate_existing=True)
    )
    task = result.scalars().first()
    if not task:
        raise StoreError(StoreErrorKind.NOT_FOUND, "Task not found")
    return task


@store_operation
async def create_task(db: AsyncSession, project_id: str, task_data: TaskCreate, creator_id: str) -> Task:
    await _ensure_references(db, task_data.assignee_id, task_data.tag_ids)

    new_task = Task(
        id=generate_id(),
        title=task_data.title,
        description=task_data.description,
        status=task_data.status,
        priority=task_data.priority,
        due_date=task_data.due_date,
        project_id=project_id,
        creator_id=creator_id,
        assignee_id=task_data.assignee_id,
    )
    db.add(new_task)
    await db.flush()

    if task_data.tag_ids:
        await _replace_tags(db, new_task.id, task_data.tag_ids)

    await db.commit()
    return new_task


@store_operation
async def update_task(db: AsyncSession, project_id: str, task_id: str, update_data: TaskUpdate) -> Task:
    result = await db.execute(
        select(Task).filter(Task.id == task_id, Task.project_id == project_id)
    )
    task = result.scalars().first()
    if not task:
        raise StoreError(StoreErrorKind.NOT_FOUND, "Task not found")

    changes = update_data.model_dump(exclude_unset=True, exclude={"tag_ids"})
    replace_tags = "tag_ids" in update_data.model_fields_set

    await _ensure_references(
        db,
        assignee_id=changes.get("assignee_id"),
        tag_ids=update_data.tag_ids if replace_tags else None,
    )

    for key, value in changes.items():
        setattr(task, key, value)

    if replace_tags:
        await _replace_tags(db, task.id, update_data.tag_ids)

    await db.commit()
    return task


@store_operation
async def delete_task(db: AsyncSession, project_id: str, task_id: str):
    result = await db.execute(
        delete(Task).where(Task.id == task_id, Task.project_id == project_id)
    )
    if result.rowcount == 0:
        raise StoreError(StoreErrorKind.NOT_FOUND, "Task not found")
    await db.commit()
