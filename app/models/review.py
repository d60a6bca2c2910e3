"""ORM model for free-form review documents."""

from sqlalchemy import JSON, Column, DateTime, String, func
from sqlalchemy.dialects.postgresql import JSONB

from app.models.base import Base
from app.models.user import new_id


class Review(Base):
    """
    One review document. The client owns the shape of `document`;
    the store only assigns `id` and `created_at`.
    """

    __tablename__ = "reviews"

    id = Column(String(36), primary_key=True, default=new_id)
    document = Column(JSON().with_variant(JSONB(), "postgresql"), nullable=False, default=dict)
    created_at = Column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
    )
