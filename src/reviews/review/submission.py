"""SubmitReview: a customer rates and comments on a product.

One review per customer per product. The handler rejects a duplicate it can
see; the unique `reviewer_key` rejects one that slipped past concurrently.
"""

import structlog
from protean import handle
from protean.exceptions import ValidationError
from protean.fields import Identifier, Integer, String, Text
from protean.utils.globals import current_domain

from reviews.domain import reviews
from reviews.projections.product_rating import refresh_product_rating
from reviews.review.review import Review
from shared.catalogue import get_catalogue
from shared.errors import DuplicateReview, InvalidReference

logger = structlog.get_logger(__name__)


def _duplicate(product_id) -> DuplicateReview:
    return DuplicateReview({"review": [f"You have already reviewed product {product_id}"]})


@reviews.command(part_of="Review")
class SubmitReview:
    product_id = Identifier(required=True)
    reviewer_id = Identifier(required=True)
    reviewer_name = String(max_length=100)
    rating = Integer(required=True)
    comment = Text(required=True)


@reviews.command_handler(part_of=Review)
class SubmitReviewHandler:
    @handle(SubmitReview)
    def submit_review(self, command):
        product_id = str(command.product_id)
        if get_catalogue().resolve(product_id) is None:
            raise InvalidReference({"product_id": [f"Product {product_id} not found"]})

        repo = current_domain.repository_for(Review)
        if repo.find_by_reviewer(product_id, command.reviewer_id) is not None:
            raise _duplicate(product_id)

        review = Review.submit(
            product_id=product_id,
            reviewer_id=command.reviewer_id,
            rating=command.rating,
            comment=command.comment,
            reviewer_name=command.reviewer_name,
        )
        try:
            repo.add(review)
        except ValidationError as exc:
            if isinstance(exc.messages, dict) and "reviewer_key" in exc.messages:
                raise _duplicate(product_id) from exc
            raise

        logger.info(
            "Review submitted",
            review_id=str(review.id),
            product_id=product_id,
            rating=review.rating,
        )

        refresh_product_rating(product_id)
        return str(review.id)
