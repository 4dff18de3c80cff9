"""Pydantic schemas for API requests and responses."""

from src.schemas.auth import AuthResponse, MessageResponse, UserLogin, UserRegister, UserResponse
from src.schemas.task import (
    TaskCreate,
    TaskEnvelope,
    TaskListResponse,
    TaskReplace,
    TaskResponse,
    TaskUpdate,
)

__all__ = [
    "UserRegister",
    "UserLogin",
    "UserResponse",
    "AuthResponse",
    "MessageResponse",
    "TaskCreate",
    "TaskUpdate",
    "TaskReplace",
    "TaskResponse",
    "TaskEnvelope",
    "TaskListResponse",
]
