# medicall/auth/auth_controller.py

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from medicall.auth.dependencies import get_current_user
from medicall.common.database.database import get_db_session
from medicall.auth import auth_service, schemas
from medicall.models.models import User

router = APIRouter(prefix="/auth", tags=["auth"])


@router.post("/signup", response_model=schemas.SignupResponse, status_code=status.HTTP_201_CREATED)
async def signup(
    signup_data: schemas.SignupRequest,
    db: AsyncSession = Depends(get_db_session),
):
    """
    Register a new call-center account.

    - **name**: Full name
    - **email**: Email address (unique)
    - **password**: Password (minimum 6 characters)
    - **department**: Department, defaults to General
    - **phoneNumber**: Optional phone number
    """
    user = await auth_service.signup_user(
        name=signup_data.name,
        email=signup_data.email,
        password=signup_data.password,
        department=signup_data.department,
        phone_number=signup_data.phone_number,
        db=db,
    )
    return schemas.SignupResponse(user=user)


@router.post("/login", response_model=schemas.LoginResponse)
async def login(
    credentials: schemas.LoginRequest,
    db: AsyncSession = Depends(get_db_session)
):
    """
    Authenticate a user and return an access token.
    """
    user, access_token = await auth_service.login_user(
        email=credentials.email,
        password=credentials.password,
        db=db
    )
    return schemas.LoginResponse(access_token=access_token, user=user)


@router.post("/logout", response_model=schemas.LogoutResponse)
async def logout(current_user: User = Depends(get_current_user)):
    """Acknowledge a logout. Tokens are stateless; the client discards its copy."""
    return schemas.LogoutResponse()


@router.get("/me", response_model=schemas.MeResponse)
async def get_current_user_info(
    current_user: User = Depends(get_current_user)
):
    """
    Get the current authenticated user's information.
    """
    return schemas.MeResponse(user=current_user)
