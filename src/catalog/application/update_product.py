"""Application service: Update Product use case."""

from __future__ import annotations

from typing import Any

from catalog.domain.exceptions import EntityNotFoundError, ValidationError
from catalog.domain.model.product import (
    Clock,
    Product,
    ProductRejected,
    revise_product,
    utcnow,
)
from catalog.domain.repository.product_repository import ProductRepository


class UpdateProductHandler:

    def __init__(self, product_repo: ProductRepository, clock: Clock = utcnow) -> None:
        self._product_repo = product_repo
        self._clock = clock

    async def handle(self, product_id: str, **changes: Any) -> Product:
        """Replace the stored product with a revised copy.

        Read-then-save is not atomic: a concurrent writer of the same id
        wins or loses according to the backend.
        """
        product = await self._product_repo.get_by_id(product_id)
        if product is None:
            raise EntityNotFoundError(f"Product with ID '{product_id}' not found")

        result = revise_product(product, changes, clock=self._clock)
        if isinstance(result, ProductRejected):
            raise ValidationError(result.errors)

        return await self._product_repo.save(result.product)
