"""Review documents: insert, fetch, merge-update, delete and list."""

import logging
import uuid
from typing import Any

from sqlalchemy.orm import Session

from app.core.errors import InvalidArgumentError
from app.models import Review
from app.services.credential_store import UpdateResult

logger = logging.getLogger(__name__)


def parse_review_id(raw: str) -> str:
    """Return the canonical id string, or raise InvalidArgumentError if raw is not a UUID."""
    try:
        return str(uuid.UUID(raw))
    except (ValueError, AttributeError, TypeError) as e:
        raise InvalidArgumentError("Invalid ID format") from e


def render_review(review: Review) -> dict[str, Any]:
    """Client representation: the stored document with its id under `_id`."""
    return {"_id": review.id, **(review.document or {})}


class ReviewStore:
    def __init__(self, session: Session) -> None:
        self.session = session

    def insert(self, document: dict[str, Any]) -> Review:
        # A client-supplied _id would shadow the assigned one on render.
        body = {k: v for k, v in document.items() if k != "_id"}
        review = Review(document=body)
        self.session.add(review)
        self.session.commit()
        self.session.refresh(review)
        logger.info("Inserted review id=%s", review.id)
        return review

    def get(self, review_id: str) -> Review | None:
        return self.session.get(Review, parse_review_id(review_id))

    def list_all(self) -> list[Review]:
        return self.session.query(Review).order_by(Review.created_at, Review.id).all()

    def update(self, review_id: str, fields: dict[str, Any]) -> UpdateResult:
        """Merge fields into the document (top-level keys replace, others are kept)."""
        review = self.get(review_id)
        if review is None:
            return UpdateResult(matched=False, modified=False)
        current = dict(review.document or {})
        merged = {**current, **{k: v for k, v in fields.items() if k != "_id"}}
        if merged == current:
            return UpdateResult(matched=True, modified=False)
        review.document = merged
        self.session.commit()
        logger.info("Updated review id=%s", review.id)
        return UpdateResult(matched=True, modified=True)

    def delete(self, review_id: str) -> int:
        """Delete by id and return the number of documents removed (0 or 1)."""
        deleted = (
            self.session.query(Review)
            .filter(Review.id == parse_review_id(review_id))
            .delete(synchronize_session=False)
        )
        self.session.commit()
        if deleted:
            logger.info("Deleted review id=%s", review_id)
        return deleted
