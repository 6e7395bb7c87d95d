# medicall/modules/user/user_controller.py

from typing import Optional
from uuid import UUID

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from medicall.auth import auth_service
from medicall.auth.dependencies import get_current_user, require_admin
from medicall.common.database.database import get_db_session
from medicall.common.schemas import MessageResponse
from medicall.common.utils.global_messages import GlobalMessages
from medicall.models.models import User
from medicall.modules.user import user_service, schemas

router = APIRouter(prefix="/users", tags=["users"])


@router.get("", response_model=schemas.UserListResponse)
async def list_users(
    role: Optional[str] = Query(None, description="agent, admin, supervisor or all"),
    department: Optional[str] = Query(None),
    search: Optional[str] = Query(None, description="Matches name or email"),
    admin: User = Depends(require_admin),
    db: AsyncSession = Depends(get_db_session)
):
    """List all users (admin only)."""
    users = await user_service.list_users(db, role, department, search)
    return schemas.UserListResponse(users=users)


@router.post("", response_model=schemas.UserEnvelope, status_code=status.HTTP_201_CREATED)
async def create_user(
    user_data: schemas.UserCreateRequest,
    admin: User = Depends(require_admin),
    db: AsyncSession = Depends(get_db_session)
):
    """Create a user with any role (admin only)."""
    user = await auth_service.create_user(
        name=user_data.name,
        email=user_data.email,
        password=user_data.password,
        role=user_data.role,
        department=user_data.department,
        phone_number=user_data.phone_number,
        is_active=user_data.is_active,
        db=db,
    )
    return schemas.UserEnvelope(user=user)


@router.get("/{user_id}", response_model=schemas.UserEnvelope)
async def get_user(
    user_id: UUID,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db_session)
):
    """Get a user. Non-admins can only read their own account."""
    user_service.ensure_self_or_admin(current_user, user_id)
    user = await user_service.get_user(db, user_id)
    return schemas.UserEnvelope(user=user)


@router.put("/{user_id}", response_model=schemas.UserEnvelope)
async def update_user(
    user_id: UUID,
    user_data: schemas.UserUpdateRequest,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db_session)
):
    """
    Update a user. Only the provided fields are changed.

    Role and active flag are applied for administrators only.
    """
    user = await user_service.update_user(
        db, current_user, user_id, user_data.model_dump(exclude_unset=True)
    )
    return schemas.UserEnvelope(user=user)


@router.delete("/{user_id}", response_model=MessageResponse)
async def delete_user(
    user_id: UUID,
    admin: User = Depends(require_admin),
    db: AsyncSession = Depends(get_db_session)
):
    """Delete a user (admin only, never the caller's own account)."""
    await user_service.delete_user(db, admin, user_id)
    return MessageResponse(message=GlobalMessages.USER_DELETED)
