# medicall/modules/user/schemas.py

from typing import List, Optional
from uuid import UUID
from datetime import datetime

from pydantic import EmailStr, Field, field_validator

from medicall.common.schemas import CamelModel, blank_to_none
from medicall.models.models import UserRole


class UserResponse(CamelModel):
    """A user as returned by the API. The password hash is never part of it."""
    id: UUID
    name: str
    email: EmailStr
    role: UserRole
    avatar: str = ""
    department: str
    phone_number: Optional[str] = None
    is_active: bool
    last_login: Optional[datetime] = None
    created_at: datetime
    updated_at: datetime


class UserEnvelope(CamelModel):
    user: UserResponse


class UserListResponse(CamelModel):
    users: List[UserResponse]


class UserCreateRequest(CamelModel):
    name: str = Field(..., min_length=1)
    email: EmailStr
    password: str = Field(..., min_length=6)
    role: UserRole = UserRole.AGENT
    department: str = "General"
    phone_number: Optional[str] = None
    is_active: bool = True

    @field_validator("email")
    @classmethod
    def lowercase_email(cls, value: str) -> str:
        return value.lower()

    @field_validator("phone_number", mode="before")
    @classmethod
    def empty_to_none(cls, value):
        return blank_to_none(value)


class UserUpdateRequest(CamelModel):
    """
    Fields a user may change on an account. ``role`` and ``is_active`` are
    only honoured for administrators; the service drops them otherwise.
    """
    name: Optional[str] = Field(None, min_length=1)
    department: Optional[str] = Field(None, min_length=1)
    phone_number: Optional[str] = None
    avatar: Optional[str] = None
    password: Optional[str] = Field(None, min_length=6)
    role: Optional[UserRole] = None
    is_active: Optional[bool] = None

    @field_validator("name", "department", "password", mode="before")
    @classmethod
    def empty_to_none(cls, value):
        return blank_to_none(value)
