"""FastAPI dependencies for authentication and services."""

import logging
from typing import Annotated

from fastapi import Depends, Request
from sqlalchemy.orm import Session

from src.api.session import extract_access_token
from src.database import get_db
from src.exceptions import Unauthorized
from src.models.user import User
from src.services.auth import CredentialError, decode_access_token, get_user_by_id
from src.services.task_service import TaskService

logger = logging.getLogger(__name__)


def get_current_user(
    request: Request,
    db: Annotated[Session, Depends(get_db)],
) -> User:
    """Resolve the request's access token to the live user record."""
    token = extract_access_token(request)
    if token is None:
        raise Unauthorized("Unauthorized")

    try:
        claims = decode_access_token(token)
    except CredentialError as e:
        # The reason stays server-side; clients only see a generic 401
        logger.debug(f"Rejected access token: {type(e).__name__}: {e}")
        raise Unauthorized("Invalid or expired token") from e

    # Role and every other field come from the row, not from the token
    user = get_user_by_id(db, claims.subject_id)
    if user is None:
        raise Unauthorized("User not found")

    return user


def get_task_service(
    db: Annotated[Session, Depends(get_db)],
) -> TaskService:
    """Get task service with dependencies."""
    return TaskService(db)
