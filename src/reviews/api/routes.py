"""FastAPI routes for the Reviews & Ratings bounded context.

Reading reviews and ratings is public. Writing needs a signed-in caller, and
edits and deletions are further limited to the review's author.
"""

from fastapi import APIRouter, Depends, Query
from protean.utils.globals import current_domain

from reviews.api.schemas import (
    EditReviewRequest,
    HelpfulResponse,
    RatingResponse,
    ReviewListResponse,
    ReviewResponse,
    StatusResponse,
    SubmitReviewRequest,
)
from reviews.projections.product_rating import rating_summary_for
from reviews.review.editing import EditReview
from reviews.review.removal import DeleteReview
from reviews.review.review import Review
from reviews.review.submission import SubmitReview
from reviews.review.voting import MarkReviewHelpful
from shared.auth.dependencies import current_identity
from shared.auth.port import Identity

product_router = APIRouter(prefix="/products", tags=["reviews"])
review_router = APIRouter(prefix="/reviews", tags=["reviews"])


def _review_response(review: Review) -> ReviewResponse:
    return ReviewResponse(
        review_id=str(review.id),
        product_id=str(review.product_id),
        reviewer_id=str(review.reviewer_id),
        reviewer_name=review.reviewer_name,
        rating=review.rating,
        comment=review.comment,
        helpful_count=review.helpful_count or 0,
        is_edited=bool(review.is_edited),
        created_at=review.created_at,
        updated_at=review.updated_at,
    )


# ---------------------------------------------------------------------------
# Product-scoped routes
# ---------------------------------------------------------------------------
@product_router.get("/{product_id}/reviews", response_model=ReviewListResponse)
async def list_product_reviews(
    product_id: str,
    page: int = Query(1, ge=1),
    limit: int = Query(10, ge=1, le=100),
    sort: str = "newest",
) -> ReviewListResponse:
    """A page of the product's reviews along with its rating summary."""
    results = current_domain.repository_for(Review).page_for_product(product_id, page=page, limit=limit, sort=sort)
    summary = rating_summary_for(product_id)
    return ReviewListResponse(
        reviews=[_review_response(review) for review in results.reviews],
        total=results.total,
        total_pages=results.total_pages,
        current_page=results.current_page,
        average_rating=summary.average_rating,
        total_reviews=summary.total_reviews,
        rating_distribution=summary.distribution,
    )


@product_router.get("/{product_id}/rating", response_model=RatingResponse)
async def get_product_rating(product_id: str) -> RatingResponse:
    summary = rating_summary_for(product_id)
    return RatingResponse(
        product_id=product_id,
        average_rating=summary.average_rating,
        total_reviews=summary.total_reviews,
        rating_distribution=summary.distribution,
    )


@product_router.post("/{product_id}/reviews", status_code=201, response_model=ReviewResponse)
async def submit_review(
    product_id: str,
    body: SubmitReviewRequest,
    identity: Identity = Depends(current_identity),
) -> ReviewResponse:
    """Review a product; each customer may review a product once."""
    command = SubmitReview(
        product_id=product_id,
        reviewer_id=identity.id,
        reviewer_name=identity.name,
        rating=body.rating,
        comment=body.comment,
    )
    review_id = current_domain.process(command, asynchronous=False)
    return _review_response(current_domain.repository_for(Review).get_review(review_id))


# ---------------------------------------------------------------------------
# Review-scoped routes
# ---------------------------------------------------------------------------
@review_router.put("/{review_id}", response_model=ReviewResponse)
async def edit_review(
    review_id: str,
    body: EditReviewRequest,
    identity: Identity = Depends(current_identity),
) -> ReviewResponse:
    command = EditReview(
        review_id=review_id,
        reviewer_id=identity.id,
        rating=body.rating,
        comment=body.comment,
    )
    current_domain.process(command, asynchronous=False)
    return _review_response(current_domain.repository_for(Review).get_review(review_id))


@review_router.delete("/{review_id}", response_model=StatusResponse)
async def delete_review(review_id: str, identity: Identity = Depends(current_identity)) -> StatusResponse:
    current_domain.process(DeleteReview(review_id=review_id, reviewer_id=identity.id), asynchronous=False)
    return StatusResponse(status="deleted")


@review_router.post("/{review_id}/helpful", response_model=HelpfulResponse)
async def mark_review_helpful(review_id: str, identity: Identity = Depends(current_identity)) -> HelpfulResponse:
    """Add one helpful mark to a review."""
    helpful_count = current_domain.process(
        MarkReviewHelpful(review_id=review_id, marked_by=identity.id), asynchronous=False
    )
    return HelpfulResponse(review_id=review_id, helpful_count=helpful_count)
