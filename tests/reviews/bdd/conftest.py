"""Shared BDD fixtures and step definitions for the Reviews domain."""

import pytest
from protean import current_domain
from protean.exceptions import ObjectNotFoundError, ValidationError
from pytest_bdd import given, parsers, then, when
from reviews.projections.product_rating import rating_summary_for
from reviews.review.editing import EditReview
from reviews.review.removal import DeleteReview
from reviews.review.submission import SubmitReview


@pytest.fixture()
def error():
    """Container for captured domain errors."""
    return {"exc": None}


@pytest.fixture()
def written():
    """Review ids by reviewer."""
    return {}


def _run(command, error):
    try:
        return current_domain.process(command, asynchronous=False)
    except (ValidationError, ObjectNotFoundError) as exc:
        error["exc"] = exc
        return None


# ---------------------------------------------------------------------------
# Given steps
# ---------------------------------------------------------------------------
@given(parsers.cfparse('the catalogue lists "{product_id}"'))
def catalogue_lists(catalogue, product_id):
    catalogue.add_product(product_id, product_id.title(), price=100)


@given(parsers.cfparse('"{reviewer_id}" rated "{product_id}" {rating:d} stars'))
def reviewer_rated(written, error, reviewer_id, product_id, rating):
    command = SubmitReview(product_id=product_id, reviewer_id=reviewer_id, rating=rating, comment="Tried it.")
    written[reviewer_id] = _run(command, error)
    assert error["exc"] is None


# ---------------------------------------------------------------------------
# When steps
# ---------------------------------------------------------------------------
@when(parsers.cfparse('"{reviewer_id}" rates "{product_id}" {rating:d} stars'))
def reviewer_rates(written, error, reviewer_id, product_id, rating):
    command = SubmitReview(product_id=product_id, reviewer_id=reviewer_id, rating=rating, comment="Tried it again.")
    review_id = _run(command, error)
    if review_id is not None:
        written[reviewer_id] = review_id


@when(parsers.cfparse('"{reviewer_id}" changes their rating to {rating:d} stars'))
def reviewer_edits(written, error, reviewer_id, rating):
    _run(EditReview(review_id=written[reviewer_id], reviewer_id=reviewer_id, rating=rating), error)


@when(parsers.cfparse('"{reviewer_id}" deletes their review'))
def reviewer_deletes(written, error, reviewer_id):
    _run(DeleteReview(review_id=written[reviewer_id], reviewer_id=reviewer_id), error)


@when(parsers.cfparse('"{intruder_id}" deletes the review by "{reviewer_id}"'))
def intruder_deletes(written, error, intruder_id, reviewer_id):
    _run(DeleteReview(review_id=written[reviewer_id], reviewer_id=intruder_id), error)


# ---------------------------------------------------------------------------
# Then steps
# ---------------------------------------------------------------------------
@then(parsers.cfparse('"{product_id}" has an average rating of {average:f} from {count:d} reviews'))
def product_average(product_id, average, count):
    summary = rating_summary_for(product_id)
    assert summary.average_rating == average
    assert summary.total_reviews == count


@then(parsers.cfparse("the review fails with {error_name}"))
def review_fails_with(error, error_name):
    assert error["exc"] is not None
    assert type(error["exc"]).__name__ == error_name
