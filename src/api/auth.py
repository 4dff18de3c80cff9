"""Authentication API endpoints."""

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.orm import Session

from src.api.dependencies import get_current_user
from src.api.session import attach_access_token, clear_access_token
from src.database import get_db
from src.exceptions import Unauthorized
from src.models.user import User
from src.schemas.auth import AuthResponse, MessageResponse, UserLogin, UserRegister, UserResponse
from src.services.auth import authenticate_user, create_access_token, create_user

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/v1/auth", tags=["auth"])


@router.post("/register", response_model=AuthResponse, status_code=status.HTTP_201_CREATED)
async def register(
    user_data: UserRegister,
    response: Response,
    db: Annotated[Session, Depends(get_db)],
):
    """Register a new user and start a session."""
    user = create_user(db, user_data.email, user_data.password, user_data.name)

    attach_access_token(response, create_access_token(user.id, user.role))

    return AuthResponse(user=UserResponse.model_validate(user))


@router.post("/login", response_model=AuthResponse)
async def login(
    credentials: UserLogin,
    response: Response,
    db: Annotated[Session, Depends(get_db)],
):
    """Login with email and password."""
    user = authenticate_user(db, credentials.email, credentials.password)

    if not user:
        logger.info("Failed login attempt")
        raise Unauthorized("Invalid credentials")

    attach_access_token(response, create_access_token(user.id, user.role))
    logger.info(f"User {user.id} logged in")

    return AuthResponse(user=UserResponse.model_validate(user))


@router.get("/me", response_model=AuthResponse)
async def get_me(
    current_user: Annotated[User, Depends(get_current_user)],
):
    """Get current user information."""
    return AuthResponse(user=UserResponse.model_validate(current_user))


@router.post("/logout", response_model=MessageResponse)
async def logout(
    response: Response,
    current_user: Annotated[User, Depends(get_current_user)],
):
    """Logout by clearing the session cookie.

    The token itself stays valid until it expires; there is no server-side
    revocation.
    """
    clear_access_token(response)
    return MessageResponse(message="Logged out")
