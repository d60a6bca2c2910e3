"""Credential store: user records keyed by email, backed by the users table."""

import logging
from dataclasses import dataclass
from typing import Any

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.core.errors import InvalidArgumentError
from app.models import User

logger = logging.getLogger(__name__)

# Columns a field-merge may set directly; every other key lands in User.profile.
UPDATABLE_COLUMNS = ("username", "email", "role", "password_hash")
IMMUTABLE_FIELDS = frozenset({"id", "_id"})

# Index names the users.email unique constraint reports under SQLite and PostgreSQL.
EMAIL_CONSTRAINT_MARKERS = ("UNIQUE constraint failed: users.email", "ix_users_email")


class DuplicateEmailError(Exception):
    """Raised when the unique index on users.email rejects a write."""

    def __init__(self, email: str) -> None:
        self.email = email
        super().__init__(f"email already present: {email}")


def _is_email_conflict(error: IntegrityError) -> bool:
    """True only when the violated constraint is the unique index on users.email."""
    message = str(error.orig)
    return any(marker in message for marker in EMAIL_CONSTRAINT_MARKERS)


@dataclass(frozen=True)
class UpdateResult:
    """Outcome of update_by_email, mirroring a document store's matched/modified counts."""

    matched: bool
    modified: bool

    def as_counts(self) -> dict[str, int]:
        return {
            "matchedCount": int(self.matched),
            "modifiedCount": int(self.modified),
        }


class CredentialStore:
    """Exact-match access to user records. Does not pre-check email uniqueness."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def find_by_email(self, email: str) -> User | None:
        return self.session.query(User).filter(User.email == email).first()

    def insert(
        self,
        username: str,
        email: str,
        password_hash: str,
        role: str = "user",
    ) -> User:
        """Insert a user and return it with its assigned id."""
        user = User(
            username=username,
            email=email,
            password_hash=password_hash,
            role=role,
            profile={},
        )
        self.session.add(user)
        try:
            self.session.commit()
        except IntegrityError as e:
            self.session.rollback()
            if not _is_email_conflict(e):
                raise
            raise DuplicateEmailError(email) from e
        self.session.refresh(user)
        logger.info("Inserted user id=%s", user.id)
        return user

    def update_by_email(self, email: str, fields: dict[str, Any]) -> UpdateResult:
        """
        Merge fields into the user with this email.

        Known columns are assigned directly; any other key is merged into profile.
        Raises InvalidArgumentError for immutable fields or a column value that is
        not a non-empty string, and DuplicateEmailError when the new email is taken.
        """
        immutable = IMMUTABLE_FIELDS.intersection(fields)
        if immutable:
            raise InvalidArgumentError(
                f"Field(s) cannot be updated: {', '.join(sorted(immutable))}"
            )
        for key in UPDATABLE_COLUMNS:
            if key in fields and not (isinstance(fields[key], str) and fields[key].strip()):
                raise InvalidArgumentError(f"Field '{key}' must be a non-empty string")

        user = self.find_by_email(email)
        if user is None:
            return UpdateResult(matched=False, modified=False)

        modified = False
        extra: dict[str, Any] = {}
        for key, value in fields.items():
            if key in UPDATABLE_COLUMNS:
                if getattr(user, key) != value:
                    setattr(user, key, value)
                    modified = True
            else:
                extra[key] = value

        profile = dict(user.profile or {})
        merged = {**profile, **extra}
        if merged != profile:
            # Reassign so the JSON column is flagged dirty.
            user.profile = merged
            modified = True

        if not modified:
            return UpdateResult(matched=True, modified=False)

        try:
            self.session.commit()
        except IntegrityError as e:
            self.session.rollback()
            if not _is_email_conflict(e):
                raise
            raise DuplicateEmailError(str(fields.get("email", email))) from e
        logger.info("Updated user id=%s", user.id)
        return UpdateResult(matched=True, modified=True)
