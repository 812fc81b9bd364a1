"""Repository for the Review aggregate."""

import math
from dataclasses import dataclass

from protean.exceptions import ObjectNotFoundError, ValidationError

from reviews.domain import reviews
from reviews.review.review import Review, reviewer_key_for
from shared.errors import NotFound, NotFoundOrUnauthorized

SORT_ORDERS = {
    "newest": "-created_at",
    "oldest": "created_at",
    "highest": "-rating",
    "lowest": "rating",
    "helpful": "-helpful_count",
}


@dataclass(frozen=True)
class ReviewPage:
    reviews: list
    total: int
    current_page: int
    limit: int

    @property
    def total_pages(self) -> int:
        return math.ceil(self.total / self.limit) if self.limit else 0


@reviews.repository(part_of=Review)
class ReviewRepository:
    def find_by_reviewer(self, product_id, reviewer_id) -> Review | None:
        return self._dao.query.filter(reviewer_key=reviewer_key_for(product_id, reviewer_id)).all().first

    def get_review(self, review_id) -> Review:
        try:
            return self.get(review_id)
        except ObjectNotFoundError:
            raise NotFound({"review_id": [f"Review {review_id} not found"]}) from None

    def get_authored(self, review_id, reviewer_id) -> Review:
        """Load a review written by `reviewer_id`.

        Missing reviews and reviews by other people fail identically.
        """
        try:
            review = self.get(review_id)
        except ObjectNotFoundError:
            review = None

        if review is None or not review.is_authored_by(reviewer_id):
            raise NotFoundOrUnauthorized({"review_id": ["Review not found or unauthorized"]})
        return review

    def page_for_product(self, product_id, page: int = 1, limit: int = 10, sort: str = "newest") -> ReviewPage:
        if sort not in SORT_ORDERS:
            raise ValidationError({"sort": [f"Unknown sort '{sort}'. Expected one of: {', '.join(SORT_ORDERS)}"]})

        page = max(page, 1)
        limit = max(limit, 1)

        results = (
            self._dao.query.filter(product_id=str(product_id))
            .order_by(SORT_ORDERS[sort])
            .offset((page - 1) * limit)
            .limit(limit)
            .all()
        )
        return ReviewPage(reviews=list(results.items), total=results.total, current_page=page, limit=limit)

    def remove_review(self, review: Review) -> None:
        self._dao.delete(review)
