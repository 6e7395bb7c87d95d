# medicall/auth/auth_service.py

import logging
from datetime import datetime, timedelta, timezone
from typing import Optional, Tuple

import jwt
from sqlalchemy.future import select
from sqlalchemy.ext.asyncio import AsyncSession
from passlib.context import CryptContext

from medicall.common.config import settings
from medicall.common.utils.exceptions import AuthError, ConflictError, ForbiddenError
from medicall.common.utils.global_messages import GlobalMessages
from medicall.models.models import User, UserRole

logger = logging.getLogger(__name__)

# Initialize the password context (bcrypt)
pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Verify that the provided password matches the hashed password."""
    return pwd_context.verify(plain_password, hashed_password)


def hash_password(password: str) -> str:
    return pwd_context.hash(password)


def create_access_token(data: dict, expires_delta: Optional[timedelta] = None) -> str:
    """Create a JWT token including an expiration date."""
    to_encode = data.copy()
    expire = datetime.now(timezone.utc) + (expires_delta if expires_delta else timedelta(minutes=15))
    to_encode.update({"exp": expire})
    return jwt.encode(to_encode, settings.JWT_SECRET, algorithm=settings.JWT_ALGORITHM)


async def create_user(
    name: str,
    email: str,
    password: str,
    role: UserRole,
    db: AsyncSession,
    department: str = "General",
    phone_number: Optional[str] = None,
    is_active: bool = True,
) -> User:
    """Create a new user; the email must not be in use."""
    email = email.lower()
    result = await db.execute(select(User).where(User.email == email))
    if result.scalars().first():
        raise ConflictError(GlobalMessages.USER_EMAIL_EXISTS)

    new_user = User(
        name=name,
        email=email,
        password_hash=hash_password(password),
        role=role,
        department=department or "General",
        phone_number=phone_number,
        is_active=is_active,
    )
    db.add(new_user)
    await db.commit()
    await db.refresh(new_user)

    logger.info("Created %s account %s", role.value, new_user.id)
    return new_user


async def signup_user(
    name: str,
    email: str,
    password: str,
    db: AsyncSession,
    department: str = "General",
    phone_number: Optional[str] = None,
) -> User:
    """Public registration. Self-registered accounts are always agents."""
    return await create_user(
        name=name,
        email=email,
        password=password,
        role=UserRole.AGENT,
        department=department,
        phone_number=phone_number,
        db=db,
    )


async def authenticate_user(email: str, password: str, db: AsyncSession) -> User:
    """Attempt to retrieve the user by email and verify the password."""
    result = await db.execute(select(User).where(User.email == email.lower()))
    user = result.scalars().first()

    if not user or not verify_password(password, user.password_hash):
        raise AuthError(GlobalMessages.INVALID_CREDENTIALS)
    if not user.is_active:
        raise ForbiddenError(GlobalMessages.ACCOUNT_DEACTIVATED)
    return user


async def login_user(email: str, password: str, db: AsyncSession) -> Tuple[User, str]:
    """Authenticate a user and return user with JWT access token."""
    user = await authenticate_user(email, password, db)

    user.last_login = datetime.now(timezone.utc)
    await db.commit()
    await db.refresh(user)

    access_token = create_access_token(
        data={"sub": str(user.id), "role": user.role.value},
        expires_delta=timedelta(minutes=settings.JWT_EXPIRATION_MINUTES),
    )
    return user, access_token
