"""Behaviour every ProductRepository implementation must share.

The same suite runs against the in-memory fake, the JSON file adapter and
the Cosmos adapter (over a fake container).
"""

import asyncio
from decimal import Decimal

import pytest

from catalog.domain.repository.product_repository import ProductRepository
from catalog.infrastructure.persistence.cosmos_product_repository import (
    CosmosProductRepository,
)
from catalog.infrastructure.persistence.json_product_repository import (
    JsonProductRepository,
)
from tests.fakes import FakeCosmosContainer, FakeProductRepository, make_product


@pytest.fixture(params=["fake", "json", "cosmos"])
def repo(request, tmp_path) -> ProductRepository:
    if request.param == "fake":
        return FakeProductRepository()
    if request.param == "json":
        return JsonProductRepository(tmp_path / "products.json")
    return CosmosProductRepository(FakeCosmosContainer())


def test_contract_cannot_be_instantiated():
    with pytest.raises(TypeError):
        ProductRepository()


@pytest.mark.asyncio
async def test_save_then_get_round_trips(repo):
    product = make_product(category="Tools")

    saved = await repo.save(product)

    assert saved == product
    assert await repo.get_by_id(product.id) == product


@pytest.mark.asyncio
async def test_missing_id_is_none(repo):
    assert await repo.get_by_id("nope") is None


@pytest.mark.asyncio
async def test_save_replaces_existing(repo):
    await repo.save(make_product(price=5))
    await repo.save(make_product(price=7, name="Widget v2"))

    stored = await repo.get_by_id("p1")
    assert stored.price == Decimal("7")
    assert stored.name == "Widget v2"
    assert len(await repo.list_all()) == 1


@pytest.mark.asyncio
async def test_list_all_returns_everything(repo):
    await repo.save(make_product(id="p1"))
    await repo.save(make_product(id="p2", name="Gadget"))

    products = await repo.list_all()
    assert sorted(p.id for p in products) == ["p1", "p2"]


@pytest.mark.asyncio
async def test_list_all_empty(repo):
    assert await repo.list_all() == []


@pytest.mark.asyncio
async def test_delete_is_idempotent(repo):
    await repo.save(make_product())

    await repo.delete("p1")
    assert await repo.get_by_id("p1") is None

    await repo.delete("p1")
    await repo.delete("never-existed")


@pytest.mark.asyncio
async def test_concurrent_saves_of_different_ids(repo):
    await asyncio.gather(
        *(repo.save(make_product(id=f"p{i}")) for i in range(5))
    )
    assert len(await repo.list_all()) == 5
