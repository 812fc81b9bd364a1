"""ProductRating: the rating summary of a product.

The summary is a materialized view over the product's reviews and is always
rebuilt from the complete review set: mean and count are never adjusted by
deltas, so a skipped or failed update corrects itself on the next change.
"""

import json
from dataclasses import dataclass, field
from datetime import UTC, datetime
from decimal import ROUND_HALF_UP, Decimal

import structlog
from protean.exceptions import ObjectNotFoundError
from protean.fields import DateTime, Float, Identifier, Integer, Text
from protean.utils.globals import current_domain

from reviews.domain import reviews
from reviews.review.review import Review

logger = structlog.get_logger(__name__)

_READ_BATCH = 100


@reviews.projection
class ProductRating:
    product_id = Identifier(identifier=True, required=True)
    average_rating = Float(default=0.0)
    total_reviews = Integer(default=0)
    rating_distribution = Text()  # JSON: {"1": 0, "2": 0, "3": 0, "4": 0, "5": 0}
    updated_at = DateTime()


def _empty_distribution() -> dict[str, int]:
    return {str(stars): 0 for stars in range(1, 6)}


@dataclass(frozen=True)
class RatingSummary:
    average_rating: float = 0.0
    total_reviews: int = 0
    distribution: dict[str, int] = field(default_factory=_empty_distribution)


def summarize(ratings) -> RatingSummary:
    """Mean (one decimal, halves rounded up) and count of `ratings`."""
    ratings = list(ratings)
    if not ratings:
        return RatingSummary()

    distribution = _empty_distribution()
    for rating in ratings:
        distribution[str(rating)] += 1

    mean = Decimal(sum(ratings)) / Decimal(len(ratings))
    average = float(mean.quantize(Decimal("0.1"), rounding=ROUND_HALF_UP))
    return RatingSummary(average_rating=average, total_reviews=len(ratings), distribution=distribution)


def _current_ratings(product_id) -> list[int]:
    """Every rating on record for the product, read in batches."""
    repo = current_domain.repository_for(Review)

    ratings = []
    offset = 0
    while True:
        results = (
            repo._dao.query.filter(product_id=str(product_id))
            .order_by("created_at")
            .offset(offset)
            .limit(_READ_BATCH)
            .all()
        )
        ratings.extend(review.rating for review in results.items)
        offset += len(results.items)
        if not results.items or offset >= results.total:
            return ratings


def recalculate_product_rating(product_id) -> ProductRating:
    """Rebuild the product's summary from its current reviews and store it."""
    summary = summarize(_current_ratings(product_id))

    repo = current_domain.repository_for(ProductRating)
    try:
        record = repo.get(str(product_id))
    except ObjectNotFoundError:
        record = ProductRating(product_id=str(product_id))

    record.average_rating = summary.average_rating
    record.total_reviews = summary.total_reviews
    record.rating_distribution = json.dumps(summary.distribution)
    record.updated_at = datetime.now(UTC)
    repo.add(record)

    return record


def refresh_product_rating(product_id) -> ProductRating | None:
    """Recalculate after a review change without failing the change itself.

    A failure leaves the previous summary in place until the next review
    change of the product rebuilds it.
    """
    try:
        return recalculate_product_rating(product_id)
    except Exception:
        logger.exception("Product rating recalculation failed", product_id=str(product_id))
        return None


def rating_summary_for(product_id) -> RatingSummary:
    """The stored summary, or an empty one for products without reviews."""
    try:
        record = current_domain.repository_for(ProductRating).get(str(product_id))
    except ObjectNotFoundError:
        return RatingSummary()

    distribution = json.loads(record.rating_distribution) if record.rating_distribution else _empty_distribution()
    return RatingSummary(
        average_rating=record.average_rating or 0.0,
        total_reviews=record.total_reviews or 0,
        distribution=distribution,
    )


def rebuild_all_product_ratings() -> int:
    """Recalculate the summary of every reviewed product.

    Reconciles summaries left stale by failed refreshes. Returns the number
    of products rebuilt.
    """
    repo = current_domain.repository_for(Review)

    product_ids = set()
    offset = 0
    while True:
        results = repo._dao.query.order_by("created_at").offset(offset).limit(_READ_BATCH).all()
        product_ids.update(str(review.product_id) for review in results.items)
        offset += len(results.items)
        if not results.items or offset >= results.total:
            break

    for product_id in sorted(product_ids):
        recalculate_product_rating(product_id)

    logger.info("Product ratings rebuilt", products=len(product_ids))
    return len(product_ids)
