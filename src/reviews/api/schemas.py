"""Pydantic request/response schemas for the Reviews API.

These are separate from Protean commands (anti-corruption pattern).
Rating bounds and blank comments are checked by the domain, not here.
"""

from datetime import datetime

from pydantic import BaseModel


# ---------------------------------------------------------------------------
# Request Schemas
# ---------------------------------------------------------------------------
class SubmitReviewRequest(BaseModel):
    rating: int
    comment: str


class EditReviewRequest(BaseModel):
    rating: int | None = None
    comment: str | None = None


# ---------------------------------------------------------------------------
# Response Schemas
# ---------------------------------------------------------------------------
class ReviewResponse(BaseModel):
    review_id: str
    product_id: str
    reviewer_id: str
    reviewer_name: str | None = None
    rating: int
    comment: str
    helpful_count: int
    is_edited: bool
    created_at: datetime | None = None
    updated_at: datetime | None = None


class RatingResponse(BaseModel):
    product_id: str
    average_rating: float
    total_reviews: int
    rating_distribution: dict[str, int]


class ReviewListResponse(BaseModel):
    reviews: list[ReviewResponse]
    total: int
    total_pages: int
    current_page: int
    average_rating: float
    total_reviews: int
    rating_distribution: dict[str, int]


class HelpfulResponse(BaseModel):
    review_id: str
    helpful_count: int


class StatusResponse(BaseModel):
    status: str = "ok"
