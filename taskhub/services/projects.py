from sqlalchemy import delete
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.future import select
from sqlalchemy.orm import selectinload

from taskhub.errors import StoreError, StoreErrorKind, store_operation
from taskhub.models.base import generate_id
from taskhub.models.project import Project, ProjectMember, MemberRole
from taskhub.schemas.project import ProjectCreate, ProjectUpdate


@store_operation
async def list_projects(db: AsyncSession, user_id: str) -> list[tuple[Project, MemberRole]]:
    """Projects the user is a member of, newest first, paired with the user's role."""
    result = await db.execute(
        select(Project, ProjectMember.role)
        .join(ProjectMember, ProjectMember.project_id == Project.id)
        .filter(ProjectMember.user_id == user_id)
        .order_by(Project.created_at.desc())
    )
    return [(project, role) for project, role in result.all()]


@store_operation
async def get_project(db: AsyncSession, project_id: str) -> Project:
    result = await db.execute(
        select(Project)
        .options(selectinload(Project.members).selectinload(ProjectMember.user))
        .filter(Project.id == project_id)
        .execution_options(populate_existing=True)
    )
    project = result.scalars().first()
    if not project:
        raise StoreError(StoreErrorKind.NOT_FOUND, "Project not found")
    return project


@store_operation
async def create_project(db: AsyncSession, project_data: ProjectCreate, owner_id: str) -> Project:
    """Create the project and make its creator the OWNER, in one transaction."""
    project = Project(
        id=generate_id(),
        name=project_data.name,
        description=project_data.description,
    )
    db.add(project)
    await db.flush()

    db.add(ProjectMember(project_id=project.id, user_id=owner_id, role=MemberRole.OWNER))
    await db.commit()
    return project


@store_operation
async def update_project(db: AsyncSession, project_id: str, update_data: ProjectUpdate) -> Project:
    result = await db.execute(select(Project).filter(Project.id == project_id))
    project = result.scalars().first()
    if not project:
        raise StoreError(StoreErrorKind.NOT_FOUND, "Project not found")

    for key, value in update_data.model_dump(exclude_unset=True).items():
        setattr(project, key, value)

    await db.commit()
    return project


@store_operation
async def delete_project(db: AsyncSession, project_id: str):
    # Members, tasks, tag links and comments go with it via ON DELETE CASCADE
    result = await db.execute(delete(Project).where(Project.id == project_id))
    if result.rowcount == 0:
        raise StoreError(StoreErrorKind.NOT_FOUND, "Project not found")
    await db.commit()
