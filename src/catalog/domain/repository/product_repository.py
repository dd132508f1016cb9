"""Abstract repository for the Product entity.

Defined in the domain layer so the domain never depends on
infrastructure. Concrete implementations (JSON file, Cosmos DB,
in-memory fakes) live in the infrastructure layer, and exactly one of
them is wired in per deployment.

Every operation is a coroutine. The contract adds no ordering or locking
across calls: two concurrent saves of the same id race according to the
backend's own rules.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from catalog.domain.model.product import Product


class ProductRepository(ABC):

    @abstractmethod
    async def get_by_id(self, product_id: str) -> Product | None:
        """Return a product by its ID, or None if not found.

        "Not found" is never an error. Any other backend failure propagates.
        """

    @abstractmethod
    async def list_all(self) -> list[Product]:
        """Return every product currently persisted."""

    @abstractmethod
    async def save(self, product: Product) -> Product:
        """Create or replace the product keyed by its id.

        Returns the stored record translated back into a Product.
        """

    @abstractmethod
    async def delete(self, product_id: str) -> None:
        """Remove a product. Deleting an unknown id is a no-op."""
