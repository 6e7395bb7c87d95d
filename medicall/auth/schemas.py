# medicall/auth/schemas.py

from typing import Optional
from pydantic import EmailStr, Field, field_validator

from medicall.common.schemas import CamelModel
from medicall.common.utils.global_messages import GlobalMessages
from medicall.modules.user.schemas import UserResponse


class LoginRequest(CamelModel):
    email: EmailStr
    password: str = Field(..., min_length=1)

    @field_validator("email")
    @classmethod
    def lowercase_email(cls, value: str) -> str:
        return value.lower()


class LoginResponse(CamelModel):
    access_token: str
    token_type: str = "bearer"
    user: UserResponse


class SignupRequest(CamelModel):
    """Public self-registration. The role is not accepted here; new accounts are agents."""
    name: str = Field(..., min_length=1)
    email: EmailStr
    password: str = Field(..., min_length=6)
    department: str = "General"
    phone_number: Optional[str] = None

    @field_validator("email")
    @classmethod
    def lowercase_email(cls, value: str) -> str:
        return value.lower()

    @field_validator("phone_number", mode="before")
    @classmethod
    def empty_phone_is_none(cls, value):
        if isinstance(value, str) and not value.strip():
            return None
        return value

    @field_validator("department")
    @classmethod
    def default_department(cls, value: str) -> str:
        return value or "General"


class SignupResponse(CamelModel):
    message: str = GlobalMessages.ACCOUNT_CREATED
    user: UserResponse


class MeResponse(CamelModel):
    user: UserResponse


class LogoutResponse(CamelModel):
    message: str = GlobalMessages.LOGOUT_SUCCESS
    success: bool = True
