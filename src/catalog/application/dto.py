"""Data Transfer Objects: plain containers that cross layer boundaries.

DTOs carry data between the CLI and application layers without
exposing domain internals to the outside world.
"""

from __future__ import annotations

from dataclasses import dataclass

from catalog.domain.model.product import Product


@dataclass(frozen=True)
class ProductDTO:
    """Output: a product as displayed to the user."""

    id: str
    name: str
    price: str  # formatted, e.g. "£9.99"
    description: str
    category: str
    created_at: str
    updated_at: str

    @classmethod
    def from_product(cls, product: Product) -> ProductDTO:
        return cls(
            id=product.id,
            name=product.name,
            price=f"£{product.price:.2f}",
            description=product.description or "",
            category=product.category or "",
            created_at=product.created_at.isoformat(),
            updated_at=product.updated_at.isoformat(),
        )
