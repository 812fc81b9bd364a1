"""Catalogue lookup factory.

Uses InMemoryCatalogue by default. Configure via the CATALOGUE_ADAPTER
environment variable.
"""

import os

from shared.catalogue.port import CatalogueLookup

_catalogue_instance: CatalogueLookup | None = None


def get_catalogue() -> CatalogueLookup:
    """Return the configured catalogue lookup (singleton)."""
    global _catalogue_instance
    if _catalogue_instance is None:
        adapter = os.environ.get("CATALOGUE_ADAPTER", "memory")
        if adapter == "memory":
            from shared.catalogue.memory_adapter import InMemoryCatalogue

            _catalogue_instance = InMemoryCatalogue()
        else:
            raise ValueError(f"Unknown catalogue adapter: {adapter}")
    return _catalogue_instance


def set_catalogue(catalogue: CatalogueLookup) -> None:
    """Override the active catalogue lookup (useful for tests)."""
    global _catalogue_instance
    _catalogue_instance = catalogue


def reset_catalogue() -> None:
    """Reset the catalogue singleton (useful for testing)."""
    global _catalogue_instance
    _catalogue_instance = None
