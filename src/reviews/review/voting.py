"""MarkReviewHelpful: any signed-in user marks a review as helpful.

Marks are not deduplicated: every call adds one to the count.
"""

from protean import handle
from protean.fields import Identifier
from protean.utils.globals import current_domain

from reviews.domain import reviews
from reviews.review.review import Review


@reviews.command(part_of="Review")
class MarkReviewHelpful:
    review_id = Identifier(required=True)
    marked_by = Identifier(required=True)


@reviews.command_handler(part_of=Review)
class MarkReviewHelpfulHandler:
    @handle(MarkReviewHelpful)
    def mark_review_helpful(self, command):
        repo = current_domain.repository_for(Review)
        review = repo.get_review(command.review_id)

        review.mark_helpful(command.marked_by)
        repo.add(review)

        return review.helpful_count
