"""DeleteReview: the author withdraws their review.

The review is removed outright, which frees the reviewer to review the
product again. A product losing its last review drops back to a zero rating.
"""

import structlog
from protean import handle
from protean.fields import Identifier
from protean.utils.globals import current_domain

from reviews.domain import reviews
from reviews.projections.product_rating import refresh_product_rating
from reviews.review.review import Review

logger = structlog.get_logger(__name__)


@reviews.command(part_of="Review")
class DeleteReview:
    review_id = Identifier(required=True)
    reviewer_id = Identifier(required=True)  # Must match the author


@reviews.command_handler(part_of=Review)
class DeleteReviewHandler:
    @handle(DeleteReview)
    def delete_review(self, command):
        repo = current_domain.repository_for(Review)
        review = repo.get_authored(command.review_id, command.reviewer_id)

        product_id = str(review.product_id)
        repo.remove_review(review)

        logger.info("Review deleted", review_id=str(command.review_id), product_id=product_id)

        refresh_product_rating(product_id)
