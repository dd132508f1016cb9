"""Composition root: wires a concrete adapter to the repository contract.

This is the only place in the codebase that knows about *all* layers.
Every other module depends only on abstractions.
"""

from __future__ import annotations

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from catalog.domain.repository.product_repository import ProductRepository
from catalog.infrastructure.config import Settings
from catalog.infrastructure.persistence.cosmos_product_repository import (
    CosmosProductRepository,
)
from catalog.infrastructure.persistence.json_product_repository import (
    JsonProductRepository,
)

logger = logging.getLogger(__name__)


def product_repository(settings: Settings) -> ProductRepository:
    if settings.backend == "cosmos":
        logger.debug(
            "Using Cosmos container %s/%s",
            settings.cosmos_database,
            settings.cosmos_container,
        )
        return CosmosProductRepository.from_settings(
            endpoint=settings.cosmos_endpoint,
            key=settings.cosmos_key.get_secret_value(),
            database_id=settings.cosmos_database,
            container_id=settings.cosmos_container,
        )
    logger.debug("Using JSON store in %s", settings.data_dir)
    return JsonProductRepository(settings.data_dir / "products.json")


@asynccontextmanager
async def open_product_repository(
    settings: Settings,
) -> AsyncIterator[ProductRepository]:
    """Yield the configured repository and release its client afterwards."""
    repo = product_repository(settings)
    try:
        yield repo
    finally:
        if isinstance(repo, CosmosProductRepository):
            await repo.close()
