# medicall/modules/user/user_service.py

import logging
from typing import List, Optional
from uuid import UUID

from sqlalchemy import desc, or_
from sqlalchemy.future import select
from sqlalchemy.ext.asyncio import AsyncSession

from medicall.auth.auth_service import hash_password
from medicall.auth.dependencies import is_admin
from medicall.common.database.database import contains_pattern
from medicall.common.utils.exceptions import ForbiddenError, NotFoundError, ValidationError
from medicall.common.utils.global_messages import GlobalMessages
from medicall.models.models import User, UserRole

logger = logging.getLogger(__name__)

# Fields only an administrator may change on an account
ADMIN_ONLY_FIELDS = ("role", "is_active")
NON_NULLABLE_FIELDS = {"name", "department", "avatar", "role", "is_active"}


async def list_users(
    db: AsyncSession,
    role: Optional[str] = None,
    department: Optional[str] = None,
    search: Optional[str] = None,
) -> List[User]:
    """List users, newest first, filtered by role, department and a name/email search."""
    query = select(User)

    if role and role != "all":
        try:
            query = query.where(User.role == UserRole(role))
        except ValueError:
            raise ValidationError(details=[{"field": "role", "message": f"Invalid role '{role}'"}])

    if department and department != "all":
        query = query.where(User.department == department)

    if search:
        pattern = contains_pattern(search)
        query = query.where(or_(
            User.name.ilike(pattern, escape="\\"),
            User.email.ilike(pattern, escape="\\"),
        ))

    result = await db.execute(query.order_by(desc(User.created_at)))
    return list(result.scalars().all())


def ensure_self_or_admin(caller: User, user_id: UUID) -> None:
    """Non-admins may only reach their own account."""
    if not is_admin(caller) and caller.id != user_id:
        raise ForbiddenError()


async def get_user(db: AsyncSession, user_id: UUID) -> User:
    result = await db.execute(select(User).where(User.id == user_id))
    user = result.scalars().first()
    if not user:
        raise NotFoundError(GlobalMessages.USER_NOT_FOUND)
    return user


async def update_user(db: AsyncSession, caller: User, user_id: UUID, update_data: dict) -> User:
    """
    Apply a partial update to an account.

    ``update_data`` holds only the fields the client sent. Role and active
    flag are silently dropped unless the caller is an administrator; the
    rest of the update still goes through.
    """
    ensure_self_or_admin(caller, user_id)
    user = await get_user(db, user_id)

    if not is_admin(caller):
        for field in ADMIN_ONLY_FIELDS:
            if update_data.pop(field, None) is not None:
                logger.info("Ignoring admin-only field %r in update from %s", field, caller.id)

    password = update_data.pop("password", None)
    if password:
        user.password_hash = hash_password(password)

    for key, value in update_data.items():
        # Required columns keep their value when the client sends null
        if value is None and key in NON_NULLABLE_FIELDS:
            continue
        setattr(user, key, value)

    db.add(user)
    await db.commit()
    await db.refresh(user)
    return user


async def delete_user(db: AsyncSession, caller: User, user_id: UUID) -> None:
    """Hard-delete an account. Administrators cannot remove themselves."""
    if caller.id == user_id:
        raise ValidationError(GlobalMessages.CANNOT_DELETE_SELF)

    user = await get_user(db, user_id)
    await db.delete(user)
    await db.commit()
    logger.info("User %s deleted by %s", user_id, caller.id)
