"""Application service: Add Product use case."""

from __future__ import annotations

from decimal import Decimal

from catalog.domain.exceptions import ValidationError
from catalog.domain.model.product import (
    Clock,
    Product,
    ProductRejected,
    create_product,
    utcnow,
)
from catalog.domain.repository.product_repository import ProductRepository


class AddProductHandler:

    def __init__(self, product_repo: ProductRepository, clock: Clock = utcnow) -> None:
        self._product_repo = product_repo
        self._clock = clock

    async def handle(
        self,
        name: str,
        price: Decimal | float | int,
        product_id: str | None = None,
        description: str | None = None,
        category: str | None = None,
    ) -> Product:
        """Add a new product to the catalog.

        Without an explicit id the next free numeric id is assigned.
        """
        if product_id is None:
            product_id = await self._next_id()
        elif await self._product_repo.get_by_id(product_id) is not None:
            raise ValidationError(f"Product '{product_id}' already exists")

        result = create_product(
            {
                "id": product_id,
                "name": name,
                "price": price,
                "description": description,
                "category": category,
            },
            clock=self._clock,
        )
        if isinstance(result, ProductRejected):
            raise ValidationError(result.errors)

        return await self._product_repo.save(result.product)

    async def _next_id(self) -> str:
        numeric = [int(p.id) for p in await self._product_repo.list_all() if p.id.isdecimal()]
        return str(max(numeric) + 1) if numeric else "1"
