"""Response schemas for review endpoints. Review bodies themselves are free-form JSON."""

from pydantic import BaseModel


class InsertResult(BaseModel):
    acknowledged: bool = True
    insertedId: str


class DeleteResult(BaseModel):
    acknowledged: bool = True
    deletedCount: int


class ReviewUpdateCounts(BaseModel):
    acknowledged: bool = True
    matchedCount: int
    modifiedCount: int


class ReviewUpdateResponse(BaseModel):
    success: bool = True
    message: str
    result: ReviewUpdateCounts
