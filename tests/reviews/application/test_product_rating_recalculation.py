"""Tests for recalculating and reading product rating summaries."""

import json

from protean import current_domain
from reviews.projections import product_rating
from reviews.projections.product_rating import (
    ProductRating,
    rating_summary_for,
    rebuild_all_product_ratings,
    recalculate_product_rating,
    refresh_product_rating,
)
from reviews.review.review import Review
from reviews.review.submission import SubmitReview
from structlog.testing import capture_logs


def _store_reviews(product_id, ratings):
    repo = current_domain.repository_for(Review)
    for position, rating in enumerate(ratings):
        repo.add(Review.submit(product_id=product_id, reviewer_id=f"cust-{position}", rating=rating, comment="ok"))


class TestRecalculate:
    def test_rebuilds_from_stored_reviews(self):
        _store_reviews("momo", [4, 5, 3])

        record = recalculate_product_rating("momo")

        assert record.average_rating == 4.0
        assert record.total_reviews == 3
        assert json.loads(record.rating_distribution) == {"1": 0, "2": 0, "3": 1, "4": 1, "5": 1}

    def test_reads_past_one_batch(self):
        _store_reviews("momo", [5] * 150 + [1] * 50)

        record = recalculate_product_rating("momo")

        assert record.total_reviews == 200
        assert record.average_rating == 4.0

    def test_overwrites_stale_summary(self):
        current_domain.repository_for(ProductRating).add(
            ProductRating(product_id="momo", average_rating=1.0, total_reviews=99)
        )
        _store_reviews("momo", [5])

        recalculate_product_rating("momo")

        stored = current_domain.repository_for(ProductRating).get("momo")
        assert stored.average_rating == 5.0
        assert stored.total_reviews == 1

    def test_ignores_other_products(self):
        _store_reviews("momo", [5])
        _store_reviews("chowmein", [1, 1])
        assert recalculate_product_rating("momo").total_reviews == 1


class TestRefresh:
    def test_failure_is_logged_and_swallowed(self, monkeypatch):
        def broken(product_id):
            raise RuntimeError("database unavailable")

        monkeypatch.setattr(product_rating, "recalculate_product_rating", broken)

        with capture_logs() as logs:
            assert refresh_product_rating("momo") is None

        failures = [entry for entry in logs if entry["event"] == "Product rating recalculation failed"]
        assert len(failures) == 1
        assert failures[0]["product_id"] == "momo"

    def test_failed_refresh_does_not_fail_the_review(self, catalogue, monkeypatch):
        def broken(product_id):
            raise RuntimeError("database unavailable")

        monkeypatch.setattr(product_rating, "recalculate_product_rating", broken)

        command = SubmitReview(product_id="momo", reviewer_id="cust-001", rating=5, comment="Great.")
        review_id = current_domain.process(command, asynchronous=False)

        assert current_domain.repository_for(Review).get(review_id).rating == 5
        assert rating_summary_for("momo").total_reviews == 0

    def test_next_change_repairs_summary(self, catalogue, monkeypatch):
        def broken(product_id):
            raise RuntimeError("database unavailable")

        with monkeypatch.context() as patch:
            patch.setattr(product_rating, "recalculate_product_rating", broken)
            current_domain.process(
                SubmitReview(product_id="momo", reviewer_id="cust-001", rating=5, comment="Great."),
                asynchronous=False,
            )

        current_domain.process(
            SubmitReview(product_id="momo", reviewer_id="cust-002", rating=3, comment="Fine."),
            asynchronous=False,
        )

        summary = rating_summary_for("momo")
        assert summary.total_reviews == 2
        assert summary.average_rating == 4.0


class TestRatingSummaryFor:
    def test_product_without_reviews(self):
        summary = rating_summary_for("unreviewed")
        assert summary.average_rating == 0.0
        assert summary.total_reviews == 0
        assert summary.distribution == {"1": 0, "2": 0, "3": 0, "4": 0, "5": 0}


class TestRebuildAll:
    def test_rebuilds_every_reviewed_product(self):
        _store_reviews("momo", [4, 5])
        _store_reviews("chowmein", [1])
        current_domain.repository_for(ProductRating).add(
            ProductRating(product_id="momo", average_rating=0.0, total_reviews=0)
        )

        assert rebuild_all_product_ratings() == 2

        assert rating_summary_for("momo").average_rating == 4.5
        assert rating_summary_for("chowmein").total_reviews == 1

    def test_nothing_to_rebuild(self):
        assert rebuild_all_product_ratings() == 0
