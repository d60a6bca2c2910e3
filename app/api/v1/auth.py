"""Registration and login routes, plus the AuthService dependency."""

from typing import Annotated

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from app.core.config import Settings, get_settings
from app.core.database import get_db
from app.schemas.auth import (
    LoginRequest,
    LoginResponse,
    RegisterRequest,
    RegisterResponse,
    UserOut,
)
from app.services.auth import AuthService
from app.services.credential_store import CredentialStore

router = APIRouter()


def get_auth_service(
    db: Annotated[Session, Depends(get_db)],
    settings: Annotated[Settings, Depends(get_settings)],
) -> AuthService:
    """Dependency: AuthService bound to the request's DB session."""
    return AuthService(CredentialStore(db), settings)


@router.post(
    "/register",
    response_model=RegisterResponse,
    status_code=status.HTTP_201_CREATED,
)
def register(
    body: RegisterRequest,
    auth: Annotated[AuthService, Depends(get_auth_service)],
) -> RegisterResponse:
    """
    Create an account with role 'user'.
    Returns 400 if the email is already registered.
    """
    user = auth.register(body.username, body.email, body.password)
    return RegisterResponse(
        message="User registered successfully!",
        data=UserOut.model_validate(user),
    )


@router.post("/login", response_model=LoginResponse)
def login(
    body: LoginRequest,
    auth: Annotated[AuthService, Depends(get_auth_service)],
) -> LoginResponse:
    """
    Authenticate with email and password; returns a JWT access token.
    Include the token in the Authorization header as: Bearer <accessToken>
    """
    token = auth.login(body.email, body.password)
    return LoginResponse(message="User successfully logged in!", accessToken=token)
