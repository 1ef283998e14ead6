"""
Project-scoped authorization.

Membership in a project is the only access boundary: any member may read and
modify the project and everything under it. The OWNER role is consulted only
for deleting the project itself.
"""
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.future import select

from taskhub.errors import translate_store_errors
from taskhub.models.project import ProjectMember, MemberRole


async def get_membership(db: AsyncSession, project_id: str, user_id: str) -> ProjectMember | None:
    with translate_store_errors():
        result = await db.execute(
            select(ProjectMember).filter(
                ProjectMember.project_id == project_id,
                ProjectMember.user_id == user_id,
            )
        )
    return result.scalars().first()


async def has_project_access(db: AsyncSession, project_id: str, user_id: str) -> bool:
    return await get_membership(db, project_id, user_id) is not None


async def is_project_owner(db: AsyncSession, project_id: str, user_id: str) -> bool:
    member = await get_membership(db, project_id, user_id)
    return member is not None and member.role == MemberRole.OWNER
