"""Review document routes. Errors are rendered as {"error": ...}."""

import logging
from typing import Annotated, Any

from fastapi import APIRouter, Body, Depends
from fastapi.responses import JSONResponse
from sqlalchemy.orm import Session

from app.core.database import get_db
from app.core.errors import InvalidArgumentError
from app.schemas.review import (
    DeleteResult,
    InsertResult,
    ReviewUpdateCounts,
    ReviewUpdateResponse,
)
from app.services.review_store import ReviewStore, parse_review_id, render_review

logger = logging.getLogger(__name__)
router = APIRouter(tags=["reviews"])


def get_review_store(db: Annotated[Session, Depends(get_db)]) -> ReviewStore:
    return ReviewStore(db)


def _error(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": message})


@router.post("/review", response_model=InsertResult)
def add_review(
    document: Annotated[dict[str, Any], Body()],
    store: Annotated[ReviewStore, Depends(get_review_store)],
) -> InsertResult:
    review = store.insert(document)
    return InsertResult(insertedId=review.id)


@router.get("/reviews")
def list_reviews(
    store: Annotated[ReviewStore, Depends(get_review_store)],
) -> list[dict[str, Any]]:
    """All review documents, oldest first. No pagination."""
    return [render_review(r) for r in store.list_all()]


@router.get("/reviews/{review_id}")
def get_review(
    review_id: str,
    store: Annotated[ReviewStore, Depends(get_review_store)],
):
    try:
        review = store.get(review_id)
    except InvalidArgumentError as e:
        return _error(400, e.message)
    except Exception:
        logger.exception("Error fetching review %s", review_id)
        return _error(500, "Internal server error")
    if review is None:
        return _error(404, "Review not found")
    return render_review(review)


@router.patch("/review/update/{review_id}")
def update_review(
    review_id: str,
    fields: Annotated[dict[str, Any], Body()],
    store: Annotated[ReviewStore, Depends(get_review_store)],
):
    """Merge fields into the review. Unchanged documents return 200 with a note."""
    try:
        parse_review_id(review_id)
    except InvalidArgumentError as e:
        return _error(400, e.message)
    try:
        result = store.update(review_id, fields)
    except Exception:
        logger.exception("Error updating review %s", review_id)
        return _error(500, "Internal server error")
    if not result.matched:
        return _error(404, "Review not found")
    if not result.modified:
        return {"message": "No changes made to the review"}
    return ReviewUpdateResponse(
        message="Review updated successfully",
        result=ReviewUpdateCounts(**result.as_counts()),
    )


@router.delete("/review/{review_id}", response_model=DeleteResult)
def delete_review(
    review_id: str,
    store: Annotated[ReviewStore, Depends(get_review_store)],
):
    try:
        deleted = store.delete(review_id)
    except InvalidArgumentError as e:
        return _error(400, e.message)
    except Exception:
        logger.exception("Error deleting review %s", review_id)
        return _error(500, "Internal server error")
    return DeleteResult(deletedCount=deleted)
