"""Domain events for the Review aggregate.

All events are versioned, immutable facts representing state changes,
persisted to the event store alongside the aggregate.
"""

from protean.fields import DateTime, Identifier, Integer, Text

from reviews.domain import reviews


@reviews.event(part_of="Review")
class ReviewSubmitted:
    """A customer reviewed a product."""

    __version__ = 1

    review_id = Identifier(required=True)
    product_id = Identifier(required=True)
    reviewer_id = Identifier(required=True)
    rating = Integer(required=True)
    comment = Text(required=True)
    submitted_at = DateTime(required=True)


@reviews.event(part_of="Review")
class ReviewEdited:
    """The author changed their rating or comment."""

    __version__ = 1

    review_id = Identifier(required=True)
    product_id = Identifier(required=True)
    previous_rating = Integer(required=True)
    rating = Integer(required=True)
    comment = Text(required=True)
    edited_at = DateTime(required=True)


@reviews.event(part_of="Review")
class ReviewMarkedHelpful:
    """Someone marked the review as helpful."""

    __version__ = 1

    review_id = Identifier(required=True)
    marked_by = Identifier(required=True)
    helpful_count = Integer(required=True)
    marked_at = DateTime(required=True)
