"""EditReview: the author changes their rating and/or comment."""

from protean import handle
from protean.fields import Identifier, Integer, Text
from protean.utils.globals import current_domain

from reviews.domain import reviews
from reviews.projections.product_rating import refresh_product_rating
from reviews.review.review import Review


@reviews.command(part_of="Review")
class EditReview:
    review_id = Identifier(required=True)
    reviewer_id = Identifier(required=True)  # Must match the author
    rating = Integer()
    comment = Text()


@reviews.command_handler(part_of=Review)
class EditReviewHandler:
    @handle(EditReview)
    def edit_review(self, command):
        repo = current_domain.repository_for(Review)
        review = repo.get_authored(command.review_id, command.reviewer_id)

        kwargs = {}
        if command.rating is not None:
            kwargs["rating"] = command.rating
        if command.comment is not None:
            kwargs["comment"] = command.comment

        review.edit(**kwargs)
        repo.add(review)

        refresh_product_rating(review.product_id)
