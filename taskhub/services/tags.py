from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.future import select

from taskhub.errors import store_operation
from taskhub.models.base import generate_id
from taskhub.models.tasks import Tag
from taskhub.schemas.task import TagCreate


@store_operation
async def list_tags(db: AsyncSession) -> list[Tag]:
    result = await db.execute(select(Tag).order_by(Tag.name))
    return list(result.scalars().all())


@store_operation
async def create_tag(db: AsyncSession, tag_data: TagCreate) -> Tag:
    tag = Tag(id=generate_id(), name=tag_data.name, color=tag_data.color)
    db.add(tag)
    await db.commit()
    return tag
