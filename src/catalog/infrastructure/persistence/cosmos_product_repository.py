"""Azure Cosmos DB (NoSQL) implementation of ProductRepository.

The container is partitioned on ``/id``. Documents store the price as
integer pence under ``pricePence`` and require a non-empty description;
Cosmos system properties (``_etag``, ``_ts`` ...) are dropped on the way
back into the domain.
"""

from __future__ import annotations

import logging
from datetime import datetime
from typing import Any, TypedDict

from azure.cosmos.aio import ContainerProxy, CosmosClient
from azure.cosmos.exceptions import CosmosResourceNotFoundError

from catalog.domain.exceptions import PersistenceError
from catalog.domain.model.product import Product
from catalog.domain.repository.product_repository import ProductRepository
from catalog.infrastructure.persistence.minor_units import from_pence, to_pence
from catalog.infrastructure.persistence.rehydration import product_from_storage

logger = logging.getLogger(__name__)


class _ProductDocument(TypedDict):
    id: str
    name: str
    pricePence: int
    description: str
    category: str | None
    createdAt: str
    updatedAt: str


class CosmosProductRepository(ProductRepository):

    def __init__(
        self, container: ContainerProxy, client: CosmosClient | None = None
    ) -> None:
        self._container = container
        self._client = client

    @classmethod
    def from_settings(
        cls, endpoint: str, key: str, database_id: str, container_id: str
    ) -> CosmosProductRepository:
        """Build a repository that owns its client; call ``close`` when done."""
        client = CosmosClient(endpoint, credential=key)
        container = client.get_database_client(database_id).get_container_client(
            container_id
        )
        return cls(container, client=client)

    async def close(self) -> None:
        if self._client is not None:
            await self._client.close()

    # --- ProductRepository interface ------------------------------------------

    async def get_by_id(self, product_id: str) -> Product | None:
        try:
            document = await self._container.read_item(
                item=product_id, partition_key=product_id
            )
        except CosmosResourceNotFoundError:
            logger.debug("Product %s not found in Cosmos", product_id)
            return None
        if not document:
            return None
        return self._to_domain(document)

    async def list_all(self) -> list[Product]:
        return [
            self._to_domain(document)
            async for document in self._container.read_all_items()
        ]

    async def save(self, product: Product) -> Product:
        document = self._to_document(product)
        stored = await self._container.upsert_item(body=document)
        logger.info("Upserted product %s", product.id)
        if not stored:
            return product
        return self._to_domain(stored)

    async def delete(self, product_id: str) -> None:
        try:
            await self._container.delete_item(
                item=product_id, partition_key=product_id
            )
        except CosmosResourceNotFoundError:
            logger.debug("Delete of unknown product %s ignored", product_id)
            return
        logger.info("Deleted product %s", product_id)

    # --- Translation ----------------------------------------------------------

    @staticmethod
    def _to_document(product: Product) -> _ProductDocument:
        if not product.description or not product.description.strip():
            raise PersistenceError(
                f"Product {product.id} needs a non-empty description to be stored"
            )
        return {
            "id": product.id,
            "name": product.name,
            "pricePence": to_pence(product.price),
            "description": product.description,
            "category": product.category,
            "createdAt": product.created_at.isoformat(),
            "updatedAt": product.updated_at.isoformat(),
        }

    @staticmethod
    def _to_domain(document: dict[str, Any]) -> Product:
        try:
            updated_at = datetime.fromisoformat(document["updatedAt"])
            created_at = (
                datetime.fromisoformat(document["createdAt"])
                if document.get("createdAt")
                else updated_at
            )
            props = {
                "id": document["id"],
                "name": document["name"],
                "price": from_pence(document["pricePence"]),
                "description": document.get("description"),
                "category": document.get("category"),
                "created_at": created_at,
                "updated_at": updated_at,
            }
        except (KeyError, TypeError, ValueError) as exc:
            raise PersistenceError(
                f"Malformed product document {document.get('id')!r}"
            ) from exc
        return product_from_storage(props)
