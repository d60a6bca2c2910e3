"""ORM model for application users (registration, login and role claim)."""

import uuid

from sqlalchemy import JSON, Column, String
from sqlalchemy.dialects.postgresql import JSONB

from app.models.base import Base


def new_id() -> str:
    """Opaque identifier assigned by the store on insert."""
    return str(uuid.uuid4())


class User(Base):
    """
    User account keyed by email.

    role: 'user' on registration; other values are only set out of band.
    profile: extra fields merged in by PATCH /user/{email}.
    """

    __tablename__ = "users"

    id = Column(String(36), primary_key=True, default=new_id)
    username = Column(String(255), nullable=False)
    email = Column(String(320), nullable=False, unique=True, index=True)
    password_hash = Column(String(255), nullable=False)
    role = Column(String(32), nullable=False, default="user")
    profile = Column(JSON().with_variant(JSONB(), "postgresql"), nullable=False, default=dict)
