"""CLI commands for the Product entity."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable, Callable
from decimal import Decimal, InvalidOperation
from typing import Any, TypeVar

import click

from catalog.application.add_product import AddProductHandler
from catalog.application.delete_product import DeleteProductHandler
from catalog.application.show_product import ListProductsHandler, ShowProductHandler
from catalog.application.update_product import UpdateProductHandler
from catalog.domain.exceptions import DomainException, ValidationError
from catalog.domain.repository.product_repository import ProductRepository
from catalog.infrastructure.bootstrap import open_product_repository
from catalog.infrastructure.config import Settings

logger = logging.getLogger(__name__)

T = TypeVar("T")


def _parse_price(
    ctx: click.Context, param: click.Parameter, value: str | None
) -> Decimal | None:
    if value is None:
        return None
    try:
        return Decimal(value)
    except InvalidOperation:
        raise click.BadParameter(f"{value!r} is not a number")


def _run(settings: Settings, action: Callable[[ProductRepository], Awaitable[T]]) -> T:
    """Run ``action`` against the configured repository.

    Validation and domain errors are shown as-is; anything else coming out
    of the backend is reported generically and only logged in detail.
    """

    async def runner() -> T:
        async with open_product_repository(settings) as repo:
            return await action(repo)

    try:
        return asyncio.run(runner())
    except ValidationError as exc:
        raise click.ClickException("\n".join(exc.errors))
    except DomainException as exc:
        raise click.ClickException(str(exc))
    except Exception:
        logger.debug("Product command failed", exc_info=True)
        raise click.ClickException("Operation failed, try again.")


@click.command("add")
@click.option("--id", "product_id", default=None, help="Product ID (default: next number).")
@click.option("--name", required=True, help="Product name.")
@click.option("--price", required=True, callback=_parse_price, help="Price (e.g. 15.00).")
@click.option("--description", default=None, help="Free-text description.")
@click.option("--category", default=None, help="Category label.")
@click.pass_obj
def product_add(
    settings: Settings,
    product_id: str | None,
    name: str,
    price: Decimal,
    description: str | None,
    category: str | None,
) -> None:
    """Add a new product to the catalog."""
    product = _run(
        settings,
        lambda repo: AddProductHandler(product_repo=repo).handle(
            name=name,
            price=price,
            product_id=product_id,
            description=description,
            category=category,
        ),
    )
    click.echo(f"Product #{product.id} '{product.name}' added at £{product.price:.2f}")


@click.command("list")
@click.pass_obj
def product_list(settings: Settings) -> None:
    """List all products in the catalog."""
    products = _run(settings, lambda repo: ListProductsHandler(repo).handle())

    if not products:
        click.echo("No products found.")
        return

    click.echo(f"{'ID':<6} {'Name':<20} {'Category':<12} {'Price':>10}")
    click.echo("-" * 51)
    for p in products:
        click.echo(f"{p.id:<6} {p.name:<20} {p.category:<12} {p.price:>10}")


@click.command("show")
@click.option("--id", "product_id", required=True, help="Product ID.")
@click.pass_obj
def product_show(settings: Settings, product_id: str) -> None:
    """Show a single product."""
    dto = _run(settings, lambda repo: ShowProductHandler(repo).handle(product_id))

    click.echo(f"Product #{dto.id}")
    click.echo(f"  Name:        {dto.name}")
    click.echo(f"  Price:       {dto.price}")
    click.echo(f"  Description: {dto.description}")
    click.echo(f"  Category:    {dto.category}")
    click.echo(f"  Created:     {dto.created_at}")
    click.echo(f"  Updated:     {dto.updated_at}")


@click.command("update")
@click.option("--id", "product_id", required=True, help="Product ID.")
@click.option("--name", default=None, help="New name.")
@click.option("--price", default=None, callback=_parse_price, help="New price (e.g. 29.99).")
@click.option("--description", default=None, help="New description.")
@click.option("--category", default=None, help="New category.")
@click.pass_obj
def product_update(settings: Settings, product_id: str, **fields: Any) -> None:
    """Update a product's name, price, description or category."""
    changes = {k: v for k, v in fields.items() if v is not None}
    if not changes:
        raise click.UsageError("Nothing to update.")

    product = _run(
        settings,
        lambda repo: UpdateProductHandler(product_repo=repo).handle(product_id, **changes),
    )
    click.echo(f"Product #{product.id} updated")


@click.command("delete")
@click.option("--id", "product_id", required=True, help="Product ID.")
@click.pass_obj
def product_delete(settings: Settings, product_id: str) -> None:
    """Remove a product from the catalog."""
    _run(settings, lambda repo: DeleteProductHandler(repo).handle(product_id))
    click.echo(f"Product #{product_id} deleted")
