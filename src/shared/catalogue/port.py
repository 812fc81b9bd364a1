"""Catalogue lookup port (abstract interface).

Resolves product identifiers to the name/price/image snapshot that orders
and reviews capture. The catalogue itself is owned elsewhere; this is the
read-only contract the Ordering and Reviews domains depend on.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass


@dataclass(frozen=True)
class CatalogueEntry:
    """A product as the catalogue describes it right now.

    `price` is in the smallest currency unit.
    """

    product_id: str
    name: str
    price: int
    image: str
    is_active: bool = True


class CatalogueLookup(ABC):
    """Abstract catalogue lookup interface."""

    @abstractmethod
    def resolve(self, product_id: str) -> CatalogueEntry | None:
        """Return the catalogue entry for `product_id`, or None if unknown."""
        ...
