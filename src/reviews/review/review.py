"""Review aggregate (CQRS): a customer's rating and comment for a product.

One review per reviewer per product. `reviewer_key` combines the two and is
declared unique, so the persistence layer rejects a second review even when
two submissions race past the handler's own check.

Reviews are edited and deleted only by their author. Every change to the
review set of a product is followed by a recomputation of that product's
rating summary (see reviews.projections.product_rating).
"""

from datetime import UTC, datetime

from protean import atomic_change, invariant
from protean.exceptions import ValidationError
from protean.fields import Boolean, DateTime, Identifier, Integer, String, Text

from reviews.domain import reviews
from reviews.review.events import ReviewEdited, ReviewMarkedHelpful, ReviewSubmitted

# Sentinel for distinguishing "not provided" from None in partial updates
_UNSET = object()


def reviewer_key_for(product_id, reviewer_id) -> str:
    return f"{product_id}:{reviewer_id}"


@reviews.aggregate
class Review:
    product_id = Identifier(required=True)
    reviewer_id = Identifier(required=True)
    reviewer_name = String(max_length=100)
    reviewer_key = String(required=True, max_length=255, unique=True)

    rating = Integer(required=True, min_value=1, max_value=5)
    comment = Text(required=True)

    helpful_count = Integer(default=0, min_value=0)

    is_edited = Boolean(default=False)
    created_at = DateTime()
    updated_at = DateTime()

    @invariant.post
    def comment_must_not_be_blank(self):
        if self.comment is not None and not self.comment.strip():
            raise ValidationError({"comment": ["Comment cannot be empty"]})

    # -------------------------------------------------------------------
    # Factory
    # -------------------------------------------------------------------
    @classmethod
    def submit(cls, product_id, reviewer_id, rating, comment, reviewer_name=None):
        """Submit a new review."""
        now = datetime.now(UTC)

        review = cls(
            product_id=product_id,
            reviewer_id=reviewer_id,
            reviewer_name=reviewer_name,
            reviewer_key=reviewer_key_for(product_id, reviewer_id),
            rating=rating,
            comment=comment.strip() if isinstance(comment, str) else comment,
            helpful_count=0,
            is_edited=False,
            created_at=now,
            updated_at=now,
        )

        review.raise_(
            ReviewSubmitted(
                review_id=str(review.id),
                product_id=str(product_id),
                reviewer_id=str(reviewer_id),
                rating=rating,
                comment=review.comment,
                submitted_at=now,
            )
        )

        return review

    def is_authored_by(self, reviewer_id) -> bool:
        return str(self.reviewer_id) == str(reviewer_id)

    # -------------------------------------------------------------------
    # Edit
    # -------------------------------------------------------------------
    def edit(self, rating=_UNSET, comment=_UNSET):
        """Change the rating and/or the comment."""
        if rating is _UNSET and comment is _UNSET:
            raise ValidationError({"review": ["Provide a rating or a comment to update"]})

        now = datetime.now(UTC)
        previous_rating = self.rating

        with atomic_change(self):
            if rating is not _UNSET:
                self.rating = rating
            if comment is not _UNSET:
                self.comment = comment.strip() if isinstance(comment, str) else comment
            self.is_edited = True
            self.updated_at = now

        self.raise_(
            ReviewEdited(
                review_id=str(self.id),
                product_id=str(self.product_id),
                previous_rating=previous_rating,
                rating=self.rating,
                comment=self.comment,
                edited_at=now,
            )
        )

    # -------------------------------------------------------------------
    # Helpful marks
    # -------------------------------------------------------------------
    def mark_helpful(self, marked_by):
        """Count one more helpful mark.

        Any caller may mark any review, their own included, as often as they
        like; each call adds one.
        """
        now = datetime.now(UTC)
        self.helpful_count = (self.helpful_count or 0) + 1
        self.updated_at = now

        self.raise_(
            ReviewMarkedHelpful(
                review_id=str(self.id),
                marked_by=str(marked_by),
                helpful_count=self.helpful_count,
                marked_at=now,
            )
        )
