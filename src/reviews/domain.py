"""Reviews & Ratings bounded context: product reviews and rating summaries.

Handles the review lifecycle (submit, edit, delete, helpful marks) and keeps
each product's average rating and review count recomputed from the full
review set after every change.
"""

import structlog
from protean.domain import Domain

reviews = Domain(name="reviews")

logger = structlog.get_logger(__name__)
