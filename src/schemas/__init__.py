"""Pydantic schemas for API requests and responses."""

from src.schemas.auth import (
    AuthResponse,
    RegisterResponse,
    Token,
    UserLogin,
    UserRegister,
    UserResponse,
)
from src.schemas.task import (
    TaskCreate,
    TaskListMetadata,
    TaskListResponse,
    TaskResponse,
    TaskUpdate,
)

__all__ = [
    "UserRegister",
    "UserLogin",
    "Token",
    "AuthResponse",
    "RegisterResponse",
    "UserResponse",
    "TaskCreate",
    "TaskUpdate",
    "TaskResponse",
    "TaskListMetadata",
    "TaskListResponse",
]
