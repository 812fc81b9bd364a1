"""Tests for the Review aggregate."""

import pytest
from protean.exceptions import ValidationError
from reviews.review.events import ReviewEdited, ReviewMarkedHelpful, ReviewSubmitted
from reviews.review.review import Review, reviewer_key_for


def _submit(**overrides):
    defaults = {
        "product_id": "momo",
        "reviewer_id": "cust-001",
        "rating": 4,
        "comment": "Juicy and hot.",
        "reviewer_name": "Asha Rai",
    }
    defaults.update(overrides)
    return Review.submit(**defaults)


def _submitted(**overrides):
    review = _submit(**overrides)
    review._events.clear()
    return review


class TestSubmit:
    def test_submit_sets_fields(self):
        review = _submit()
        assert str(review.product_id) == "momo"
        assert str(review.reviewer_id) == "cust-001"
        assert review.reviewer_name == "Asha Rai"
        assert review.rating == 4
        assert review.comment == "Juicy and hot."
        assert review.helpful_count == 0
        assert review.is_edited is False
        assert review.created_at is not None

    def test_submit_combines_reviewer_key(self):
        review = _submit()
        assert review.reviewer_key == reviewer_key_for("momo", "cust-001") == "momo:cust-001"

    def test_submit_strips_comment(self):
        assert _submit(comment="  Tasty  ").comment == "Tasty"

    def test_submit_raises_event(self):
        review = _submit()
        assert len(review._events) == 1
        event = review._events[0]
        assert isinstance(event, ReviewSubmitted)
        assert event.review_id == str(review.id)
        assert event.rating == 4

    @pytest.mark.parametrize("rating", [0, 6, -1])
    def test_rating_out_of_range(self, rating):
        with pytest.raises(ValidationError):
            _submit(rating=rating)

    @pytest.mark.parametrize("rating", [1, 5])
    def test_rating_bounds_accepted(self, rating):
        assert _submit(rating=rating).rating == rating

    @pytest.mark.parametrize("comment", ["", "   "])
    def test_blank_comment(self, comment):
        with pytest.raises(ValidationError):
            _submit(comment=comment)

    def test_missing_comment(self):
        with pytest.raises(ValidationError):
            _submit(comment=None)


class TestAuthorship:
    def test_author(self):
        review = _submitted()
        assert review.is_authored_by("cust-001")
        assert not review.is_authored_by("cust-002")


class TestEdit:
    def test_edit_rating(self):
        review = _submitted()
        review.edit(rating=5)
        assert review.rating == 5
        assert review.comment == "Juicy and hot."
        assert review.is_edited is True

    def test_edit_comment(self):
        review = _submitted()
        review.edit(comment=" Even better the second time ")
        assert review.comment == "Even better the second time"
        assert review.rating == 4

    def test_edit_both(self):
        review = _submitted()
        review.edit(rating=2, comment="Cold this time.")
        assert (review.rating, review.comment) == (2, "Cold this time.")

    def test_edit_requires_a_change(self):
        review = _submitted()
        with pytest.raises(ValidationError):
            review.edit()
        assert review.is_edited is False

    def test_edit_rating_out_of_range(self):
        review = _submitted()
        with pytest.raises(ValidationError):
            review.edit(rating=9)

    def test_edit_to_blank_comment(self):
        review = _submitted()
        with pytest.raises(ValidationError):
            review.edit(comment="  ")

    def test_edit_raises_event_with_previous_rating(self):
        review = _submitted()
        review.edit(rating=1)
        event = review._events[0]
        assert isinstance(event, ReviewEdited)
        assert event.previous_rating == 4
        assert event.rating == 1


class TestMarkHelpful:
    def test_each_mark_counts(self):
        review = _submitted()
        review.mark_helpful("cust-002")
        review.mark_helpful("cust-002")
        review.mark_helpful("cust-001")
        assert review.helpful_count == 3

    def test_mark_raises_event(self):
        review = _submitted()
        review.mark_helpful("cust-002")
        event = review._events[0]
        assert isinstance(event, ReviewMarkedHelpful)
        assert event.marked_by == "cust-002"
        assert event.helpful_count == 1
