"""Generic field-merge update for user records."""

from typing import Annotated, Any

from fastapi import APIRouter, Body, Depends

from app.api.v1.auth import get_auth_service
from app.core.errors import NotFoundError
from app.schemas.auth import UpdateCounts, UserUpdateResponse
from app.services.auth import AuthService

router = APIRouter()


@router.patch("/user/{email}", response_model=UserUpdateResponse)
def update_user(
    email: str,
    fields: Annotated[dict[str, Any], Body()],
    auth: Annotated[AuthService, Depends(get_auth_service)],
) -> UserUpdateResponse:
    """
    Merge the body into the user with this email. Returns 404 when no user
    matched or nothing changed. A 'password' field is stored hashed.
    """
    result = auth.update_user(email, fields)
    if not result.modified:
        raise NotFoundError("User not found or no changes made.")
    return UserUpdateResponse(
        message="User updated successfully!",
        data=UpdateCounts(**result.as_counts()),
    )
