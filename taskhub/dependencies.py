import json
import logging

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from jose import JWTError
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.future import select

from taskhub.database import get_db
from taskhub.errors import Unauthenticated, Forbidden, InvalidInput, translate_store_errors
from taskhub.models.user import User as UserModel
from taskhub.models.project import ProjectMember
from taskhub.services.access import get_membership, is_project_owner
from taskhub.utils.security import decode_access_token

logger = logging.getLogger(__name__)

bearer_scheme = HTTPBearer(auto_error=False)


async def _provision_user(db: AsyncSession, user_id: str, claims: dict) -> UserModel | None:
    """Create the user on first sign-in when the token carries an email claim."""
    email = claims.get("email")
    if not email:
        return None

    with translate_store_errors():
        result = await db.execute(select(UserModel).filter(UserModel.email == email))
        if result.scalars().first() is not None:
            # Email already belongs to another identity
            return None

        user = UserModel(id=user_id, email=email, name=claims.get("name"), image=claims.get("picture"))
        db.add(user)
        try:
            await db.commit()
        except IntegrityError:
            # A concurrent first sign-in inserted the row first
            await db.rollback()
            result = await db.execute(select(UserModel).filter(UserModel.id == user_id))
            user = result.scalars().first()
            if user is None:
                raise Unauthenticated()
            return user
    logger.info("[AUTH] Provisioned user %s on first sign-in", user_id)
    return user


async def get_current_user(
    db: AsyncSession = Depends(get_db),
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),
) -> UserModel:
    if credentials is None:
        raise Unauthenticated()

    try:
        claims = decode_access_token(credentials.credentials)
    except JWTError:
        raise Unauthenticated()

    user_id = claims.get("sub")
    if not user_id:
        raise Unauthenticated()

    with translate_store_errors():
        result = await db.execute(select(UserModel).filter(UserModel.id == user_id))
    user = result.scalars().first()
    if user is None:
        user = await _provision_user(db, user_id, claims)
    if user is None:
        raise Unauthenticated()
    return user


async def require_project_member(
    project_id: str,
    db: AsyncSession = Depends(get_db),
    current_user: UserModel = Depends(get_current_user),
) -> ProjectMember:
    member = await get_membership(db, project_id, current_user.id)
    if member is None:
        raise Forbidden()
    return member


async def require_project_owner(
    project_id: str,
    db: AsyncSession = Depends(get_db),
    current_user: UserModel = Depends(get_current_user),
) -> UserModel:
    if not await is_project_owner(db, project_id, current_user.id):
        raise Forbidden("You do not have permission to delete this project")
    return current_user


async def read_json(request: Request):
    """Raw request body; validation happens in the handler after authorization."""
    body = await request.body()
    if not body:
        return {}
    try:
        return json.loads(body)
    except ValueError:
        raise InvalidInput(details=[{"field": "body", "message": "Malformed JSON", "type": "json_invalid"}])
