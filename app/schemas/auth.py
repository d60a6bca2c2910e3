"""Request/response schemas for auth and user endpoints."""

from pydantic import BaseModel, ConfigDict, Field, field_validator

from app.core.security import (
    BCRYPT_MAX_BYTES,
    EMAIL_MAX_LEN,
    PASSWORD_MAX_LEN,
    USERNAME_MAX_LEN,
    password_fits_bcrypt,
)


def _check_password_bytes(v: str) -> str:
    if not password_fits_bcrypt(v):
        raise ValueError(f"password must be at most {BCRYPT_MAX_BYTES} bytes in UTF-8")
    return v


class RegisterRequest(BaseModel):
    """Body of POST /register."""

    username: str = Field(..., min_length=1, max_length=USERNAME_MAX_LEN, description="Display name")
    email: str = Field(..., min_length=1, max_length=EMAIL_MAX_LEN, description="Unique login email")
    password: str = Field(..., min_length=1, max_length=PASSWORD_MAX_LEN, description="Password")

    @field_validator("password")
    @classmethod
    def validate_password_bytes(cls, v: str) -> str:
        return _check_password_bytes(v)


class LoginRequest(BaseModel):
    """Credentials for login."""

    email: str = Field(..., min_length=1, max_length=EMAIL_MAX_LEN)
    password: str = Field(..., min_length=1, max_length=PASSWORD_MAX_LEN)

    @field_validator("password")
    @classmethod
    def validate_password_bytes(cls, v: str) -> str:
        return _check_password_bytes(v)


class UserOut(BaseModel):
    """Stored user as returned to clients (no password hash)."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    username: str
    email: str
    role: str


class RegisterResponse(BaseModel):
    success: bool = True
    message: str
    data: UserOut


class LoginResponse(BaseModel):
    """Access token returned after successful login. Send it as: Bearer <accessToken>."""

    success: bool = True
    message: str
    accessToken: str = Field(..., description="JWT access token")


class UpdateCounts(BaseModel):
    matchedCount: int
    modifiedCount: int


class UserUpdateResponse(BaseModel):
    success: bool = True
    message: str
    data: UpdateCounts
