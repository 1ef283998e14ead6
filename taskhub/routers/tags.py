from fastapi import APIRouter, Depends, Request, status
from sqlalchemy.ext.asyncio import AsyncSession

from taskhub.dependencies import get_db, get_current_user, read_json
from taskhub.models.user import User as UserModel
from taskhub.schemas.task import TagResponse
from taskhub.services import tags as tag_service
from taskhub.services.validation import ResourceKind, validate_or_raise

router = APIRouter(prefix="/tags", tags=["tags"])


@router.get("", response_model=list[TagResponse])
async def list_tags(
    db: AsyncSession = Depends(get_db),
    current_user: UserModel = Depends(get_current_user),
):
    return await tag_service.list_tags(db)


@router.post("", response_model=TagResponse, status_code=status.HTTP_201_CREATED)
async def create_tag(
    request: Request,
    db: AsyncSession = Depends(get_db),
    current_user: UserModel = Depends(get_current_user),
):
    tag_data = validate_or_raise(ResourceKind.CREATE_TAG, await read_json(request))
    return await tag_service.create_tag(db, tag_data)
