"""In-memory catalogue: seedable product table for testing and development."""

from shared.catalogue.port import CatalogueEntry, CatalogueLookup


class InMemoryCatalogue(CatalogueLookup):
    def __init__(self, entries: list[CatalogueEntry] | None = None):
        self._entries: dict[str, CatalogueEntry] = {}
        for entry in entries or []:
            self.add(entry)

    def add(self, entry: CatalogueEntry) -> CatalogueEntry:
        self._entries[entry.product_id] = entry
        return entry

    def add_product(self, product_id: str, name: str, price: int, image: str = "", is_active: bool = True):
        """Add or replace a product (useful for tests)."""
        return self.add(
            CatalogueEntry(
                product_id=product_id,
                name=name,
                price=price,
                image=image,
                is_active=is_active,
            )
        )

    def clear(self) -> None:
        self._entries.clear()

    def resolve(self, product_id: str) -> CatalogueEntry | None:
        return self._entries.get(str(product_id))
