"""Forkful database management CLI.

Creates and drops the database schemas of both domains, and rebuilds product
rating summaries left stale by failed refreshes. Only relational providers
(SQLite, PostgreSQL) have schemas; the memory provider is skipped.

Usage:
    python src/manage.py setup-db   # Create all tables
    python src/manage.py drop-db    # Drop all tables
    python src/manage.py rebuild-ratings  # Recompute rating summaries
"""

import argparse
import sys

import structlog

from shared.utils.db import drop_db, setup_db
from shared.utils.logging import configure_logging

logger = structlog.get_logger(__name__)

DOMAIN_NAMES = ["ordering", "reviews"]


def _domains(names=None):
    from ordering.domain import ordering
    from reviews.domain import reviews

    all_domains = {"ordering": ordering, "reviews": reviews}
    return {name: all_domains[name] for name in names} if names else all_domains


def setup_databases(domains=None):
    """Create database schemas for the specified (or all) domains."""
    for name, domain in _domains(domains).items():
        domain.init()
        setup_db(domain)
        logger.info("Schema ready", domain=name)


def drop_databases(domains=None):
    """Drop database schemas for the specified (or all) domains."""
    for name, domain in _domains(domains).items():
        domain.init()
        drop_db(domain)
        logger.info("Schema dropped", domain=name)


def rebuild_ratings():
    """Recompute every product's rating summary from its reviews."""
    from reviews.domain import reviews
    from reviews.projections.product_rating import rebuild_all_product_ratings

    reviews.init()
    with reviews.domain_context():
        rebuild_all_product_ratings()


def main(argv=None):
    parser = argparse.ArgumentParser(description="Forkful database management")
    subparsers = parser.add_subparsers(dest="command", required=True)

    for command, help_text in (("setup-db", "Create all database tables"), ("drop-db", "Drop all database tables")):
        sub = subparsers.add_parser(command, help=help_text)
        sub.add_argument(
            "--domain",
            choices=DOMAIN_NAMES,
            nargs="*",
            help="Specific domain(s) (default: all)",
        )

    subparsers.add_parser("rebuild-ratings", help="Recompute all product rating summaries")

    args = parser.parse_args(argv)
    configure_logging(log_dir=None)

    if args.command == "setup-db":
        setup_databases(args.domain)
    elif args.command == "drop-db":
        drop_databases(args.domain)
    elif args.command == "rebuild-ratings":
        rebuild_ratings()
    else:
        parser.print_help()
        sys.exit(1)


if __name__ == "__main__":
    main()
