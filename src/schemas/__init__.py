"""Pydantic schemas for API requests and responses."""

from src.schemas.auth import LoginResponse, UserCredentials, UserResponse
from src.schemas.task import TaskCreate, TaskResponse, TaskUpdate

__all__ = [
    "UserCredentials",
    "LoginResponse",
    "UserResponse",
    "TaskCreate",
    "TaskUpdate",
    "TaskResponse",
]
