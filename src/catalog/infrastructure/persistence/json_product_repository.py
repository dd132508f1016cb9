"""JSON-file-backed implementation of ProductRepository.

Stored records use integer pence and ISO-8601 timestamps, plus an
adapter-owned ``_rev`` counter that never leaves this module.
"""

from __future__ import annotations

import asyncio
import json
import logging
from datetime import datetime
from pathlib import Path
from typing import Any, TypedDict

from catalog.domain.exceptions import PersistenceError
from catalog.domain.model.product import Product
from catalog.domain.repository.product_repository import ProductRepository
from catalog.infrastructure.persistence.minor_units import from_pence, to_pence
from catalog.infrastructure.persistence.rehydration import product_from_storage

logger = logging.getLogger(__name__)


class _StoredProduct(TypedDict):
    id: str
    name: str
    price_pence: int
    description: str | None
    category: str | None
    created_at: str
    updated_at: str
    _rev: int


class JsonProductRepository(ProductRepository):

    def __init__(self, file_path: Path) -> None:
        self._file_path = file_path
        self._lock = asyncio.Lock()
        self._ensure_file()

    # --- ProductRepository interface ------------------------------------------

    async def get_by_id(self, product_id: str) -> Product | None:
        records = await asyncio.to_thread(self._load)
        record = records.get(product_id)
        if record is None:
            logger.debug("Product %s not found in %s", product_id, self._file_path)
            return None
        return self._to_domain(record)

    async def list_all(self) -> list[Product]:
        records = await asyncio.to_thread(self._load)
        return [self._to_domain(r) for r in records.values()]

    async def save(self, product: Product) -> Product:
        async with self._lock:
            records = await asyncio.to_thread(self._load)
            previous = records.get(product.id)
            record = self._to_record(product)
            record["_rev"] = previous.get("_rev", 0) + 1 if previous else 1
            records[product.id] = record
            await asyncio.to_thread(self._persist, records)
        logger.info("Saved product %s (rev %d)", product.id, record["_rev"])
        return self._to_domain(record)

    async def delete(self, product_id: str) -> None:
        async with self._lock:
            records = await asyncio.to_thread(self._load)
            if records.pop(product_id, None) is None:
                logger.debug("Delete of unknown product %s ignored", product_id)
                return
            await asyncio.to_thread(self._persist, records)
        logger.info("Deleted product %s", product_id)

    # --- Translation ----------------------------------------------------------

    @staticmethod
    def _to_record(product: Product) -> _StoredProduct:
        return {
            "id": product.id,
            "name": product.name,
            "price_pence": to_pence(product.price),
            "description": product.description,
            "category": product.category,
            "created_at": product.created_at.isoformat(),
            "updated_at": product.updated_at.isoformat(),
            "_rev": 0,
        }

    @staticmethod
    def _to_domain(record: _StoredProduct) -> Product:
        try:
            props = {
                "id": record["id"],
                "name": record["name"],
                "price": from_pence(record["price_pence"]),
                "description": record.get("description"),
                "category": record.get("category"),
                "created_at": datetime.fromisoformat(record["created_at"]),
                "updated_at": datetime.fromisoformat(record["updated_at"]),
            }
        except (KeyError, TypeError, ValueError) as exc:
            raise PersistenceError(
                f"Malformed product record: {record!r}"
            ) from exc
        return product_from_storage(props)

    # --- File helpers ---------------------------------------------------------

    def _load(self) -> dict[str, Any]:
        try:
            raw = json.loads(self._file_path.read_text(encoding="utf-8"))
            return {item["id"]: item for item in raw}
        except (json.JSONDecodeError, KeyError, TypeError) as exc:
            raise PersistenceError(f"Corrupt product file {self._file_path}") from exc

    def _persist(self, records: dict[str, Any]) -> None:
        self._file_path.write_text(
            json.dumps(list(records.values()), indent=2) + "\n", encoding="utf-8"
        )

    def _ensure_file(self) -> None:
        if not self._file_path.exists():
            self._file_path.parent.mkdir(parents=True, exist_ok=True)
            self._file_path.write_text("[]", encoding="utf-8")
