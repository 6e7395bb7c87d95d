# medicall/auth/dependencies.py

from typing import Optional
from uuid import UUID

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.future import select
import jwt

from medicall.common.config import settings
from medicall.common.database.database import get_db_session
from medicall.common.utils.exceptions import AuthError, ForbiddenError
from medicall.common.utils.global_messages import GlobalMessages
from medicall.models.models import User, UserRole

# auto_error is off so a missing header is answered with 401, not 403
bearer_scheme = HTTPBearer(auto_error=False)


async def get_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
    db: AsyncSession = Depends(get_db_session)
) -> User:
    """
    Dependency to retrieve the current user based on the JWT token provided in the Authorization header.
    """
    if credentials is None:
        raise AuthError()

    try:
        payload = jwt.decode(
            credentials.credentials, settings.JWT_SECRET, algorithms=[settings.JWT_ALGORITHM]
        )
        user_id = payload.get("sub")
        if user_id is None:
            raise AuthError()
    except jwt.InvalidTokenError as e:
        # ExpiredSignatureError and DecodeError are both InvalidTokenError
        raise AuthError() from e

    result = await db.execute(select(User).where(User.id == _parse_uuid(user_id)))
    user = result.scalars().first()
    if user is None or not user.is_active:
        raise AuthError()
    return user


async def require_admin(current_user: User = Depends(get_current_user)) -> User:
    """Gate a route to administrators."""
    if current_user.role != UserRole.ADMIN:
        raise ForbiddenError(GlobalMessages.ADMIN_REQUIRED)
    return current_user


def is_admin(user: User) -> bool:
    return user.role == UserRole.ADMIN


def _parse_uuid(value: str):
    try:
        return UUID(str(value))
    except ValueError as e:
        raise AuthError() from e
