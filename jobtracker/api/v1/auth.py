"""
Authentication API endpoints.

Handles registration, login, and profile updates with JWT token generation.
"""

from typing import Optional

from fastapi import APIRouter, Depends, status
from fastapi.security import OAuth2PasswordBearer
from sqlalchemy.orm import Session

from jobtracker.core.exceptions import AuthError
from jobtracker.core.security import get_token_user_id
from jobtracker.db.session import get_db
from jobtracker.models import User
from jobtracker.schemas.user import (
    AuthResponse,
    UserLogin,
    UserRegister,
    UserResponse,
    UserUpdate,
)
from jobtracker.services import accounts

router = APIRouter()

# Reads "Authorization: Bearer <token>"; missing headers are reported by get_current_user
oauth2_scheme = OAuth2PasswordBearer(tokenUrl="/api/v1/auth/login", auto_error=False)


# ============== Helper Functions ==============


def build_auth_response(user: User) -> AuthResponse:
    """Token plus public user fields, in the shape the client stores."""
    return AuthResponse(
        user=UserResponse.model_validate(user),
        token=accounts.issue_token(user),
        location=user.location,
    )


async def get_current_user(
    token: Optional[str] = Depends(oauth2_scheme),
    db: Session = Depends(get_db),
) -> User:
    """
    Dependency to get the current authenticated user from the bearer token.

    Raises AuthError if the token is missing, invalid, expired, or points at
    a user that no longer exists.
    """
    if not token:
        raise AuthError("Authentication invalid")

    user_id = get_token_user_id(token)
    if user_id is None:
        raise AuthError("Authentication invalid")

    user = accounts.get_user(db, user_id)
    if user is None:
        raise AuthError("Authentication invalid")

    return user


# ============== API Endpoints ==============


@router.post("/register", response_model=AuthResponse, status_code=status.HTTP_201_CREATED)
async def register(user_data: UserRegister, db: Session = Depends(get_db)):
    """
    Register a new user.

    Returns a token so the client is logged in straight away.
    """
    user = accounts.register_user(
        db,
        name=user_data.name,
        email=user_data.email,
        password=user_data.password,
    )
    return build_auth_response(user)


@router.post("/login", response_model=AuthResponse)
async def login(credentials: UserLogin, db: Session = Depends(get_db)):
    """Login with email and password and get a JWT access token."""
    user = accounts.authenticate_user(
        db,
        email=credentials.email,
        password=credentials.password,
    )
    return build_auth_response(user)


@router.patch("/update-user", response_model=AuthResponse)
async def update_user(
    user_data: UserUpdate,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    """
    Update the current user's profile.

    A fresh token is issued alongside the updated user.
    """
    user = accounts.update_user(
        db,
        current_user.id,
        email=user_data.email,
        name=user_data.name,
        last_name=user_data.last_name,
        location=user_data.location,
    )
    return build_auth_response(user)
