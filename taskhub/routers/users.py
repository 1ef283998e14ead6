from fastapi import APIRouter, Depends

from taskhub.dependencies import get_current_user
from taskhub.models.user import User as UserModel
from taskhub.schemas.user import UserResponse

router = APIRouter(prefix="/users", tags=["users"])


@router.get("/me", response_model=UserResponse)
async def get_me(current_user: UserModel = Depends(get_current_user)):
    return current_user
