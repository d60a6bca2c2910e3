"""Pydantic request/response schemas."""

from app.schemas.auth import (
    LoginRequest,
    LoginResponse,
    RegisterRequest,
    RegisterResponse,
    UpdateCounts,
    UserOut,
    UserUpdateResponse,
)
from app.schemas.health import HealthResponse, LivenessResponse
from app.schemas.review import (
    DeleteResult,
    InsertResult,
    ReviewUpdateCounts,
    ReviewUpdateResponse,
)

__all__ = [
    "DeleteResult",
    "HealthResponse",
    "InsertResult",
    "LivenessResponse",
    "LoginRequest",
    "LoginResponse",
    "RegisterRequest",
    "RegisterResponse",
    "ReviewUpdateCounts",
    "ReviewUpdateResponse",
    "UpdateCounts",
    "UserOut",
    "UserUpdateResponse",
]
