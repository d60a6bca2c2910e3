"""Registration, login and user field-merge on top of the credential store."""

import logging
from datetime import timedelta
from typing import TYPE_CHECKING, Any

from app.core.errors import ConflictError, InvalidArgumentError, UnauthorizedError
from app.core.security import (
    BCRYPT_MAX_BYTES,
    create_access_token,
    hash_password,
    password_fits_bcrypt,
    verify_password,
)
from app.models import User
from app.services.credential_store import CredentialStore, DuplicateEmailError, UpdateResult

if TYPE_CHECKING:
    from app.core.config import Settings

logger = logging.getLogger(__name__)

DEFAULT_ROLE = "user"
USER_EXISTS_MESSAGE = "User already exist!!!"
INVALID_CREDENTIALS_MESSAGE = "Invalid email or password"


class AuthService:
    """
    Orchestrates the credential flow. The store and settings are injected so
    callers (routes, CLI, tests) decide the session lifetime.
    """

    def __init__(self, store: CredentialStore, settings: "Settings") -> None:
        self.store = store
        self.settings = settings

    def register(self, username: str, email: str, password: str) -> User:
        """
        Create a user with role 'user'. Raises ConflictError if the email is taken,
        either by the pre-insert lookup or by the unique index when two
        registrations race past the lookup.
        """
        email = self.settings.normalize_email(email)
        if self.store.find_by_email(email) is not None:
            logger.info("Registration rejected: email already registered")
            raise ConflictError(USER_EXISTS_MESSAGE)

        password_hash = hash_password(password, rounds=self.settings.BCRYPT_ROUNDS)
        try:
            user = self.store.insert(
                username=username,
                email=email,
                password_hash=password_hash,
                role=DEFAULT_ROLE,
            )
        except DuplicateEmailError as e:
            logger.warning("Registration lost uniqueness race for user email")
            raise ConflictError(USER_EXISTS_MESSAGE) from e
        logger.info("Registered user id=%s", user.id)
        return user

    def login(self, email: str, password: str) -> str:
        """Return a signed access token. Unknown email and wrong password raise the same error."""
        user = self.store.find_by_email(self.settings.normalize_email(email))
        if user is None or not verify_password(password, user.password_hash):
            logger.info("Login failed")
            raise UnauthorizedError(INVALID_CREDENTIALS_MESSAGE)

        token = create_access_token(
            {"id": user.id, "email": user.email, "role": user.role},
            secret=self.settings.JWT_SECRET.get_secret_value(),
            ttl=timedelta(minutes=self.settings.JWT_EXPIRE_MINUTES),
            algorithm=self.settings.JWT_ALGORITHM,
        )
        logger.info("Login succeeded for user id=%s", user.id)
        return token

    def update_user(self, email: str, fields: dict[str, Any]) -> UpdateResult:
        """
        Merge fields into the user with this email. A 'password' field is hashed
        before storage; 'password_hash' cannot be set directly.
        """
        if "password_hash" in fields:
            raise InvalidArgumentError("Field(s) cannot be updated: password_hash")

        changes = dict(fields)
        if "password" in changes:
            password = changes.pop("password")
            if not isinstance(password, str) or not password:
                raise InvalidArgumentError("Field 'password' must be a non-empty string")
            if not password_fits_bcrypt(password):
                raise InvalidArgumentError(
                    f"Field 'password' must be at most {BCRYPT_MAX_BYTES} bytes"
                )
            changes["password_hash"] = hash_password(password, rounds=self.settings.BCRYPT_ROUNDS)
        if isinstance(changes.get("email"), str):
            changes["email"] = self.settings.normalize_email(changes["email"])

        try:
            return self.store.update_by_email(self.settings.normalize_email(email), changes)
        except DuplicateEmailError as e:
            raise ConflictError(USER_EXISTS_MESSAGE) from e
