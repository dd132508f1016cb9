"""Product entity and its factory.

A Product is an immutable value: it can only be obtained from
``create_product`` (or ``revise_product`` for a changed copy), which
validates untrusted input and reports *every* problem at once instead of
raising on the first one.
"""

from __future__ import annotations

from collections.abc import Callable, Mapping
from dataclasses import dataclass
from datetime import datetime, timezone
from decimal import Decimal, InvalidOperation
from typing import Any, ClassVar, Union

Clock = Callable[[], datetime]

ID_REQUIRED = "id is required and must be a non-empty string"
NAME_REQUIRED = "name is required and must be a non-empty string"
PRICE_REQUIRED = "price is required and must be a non-negative number"
DESCRIPTION_NOT_STRING = "description, if provided, must be a string"
CATEGORY_NOT_STRING = "category, if provided, must be a string"
ID_IMMUTABLE = "id cannot be changed by a revision"


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


@dataclass(frozen=True)
class Product:
    """A product in the catalog.

    Frozen: there is no mutator. Changing a product means building a new
    one with ``revise_product`` and saving it again.
    """

    id: str
    name: str
    price: Decimal
    created_at: datetime
    updated_at: datetime
    description: str | None = None
    category: str | None = None


@dataclass(frozen=True)
class ProductCreated:
    product: Product
    success: ClassVar[bool] = True


@dataclass(frozen=True)
class ProductRejected:
    errors: tuple[str, ...]
    success: ClassVar[bool] = False


CreateProductResult = Union[ProductCreated, ProductRejected]


# --- Validators (pure) --------------------------------------------------------


def _is_non_empty_string(value: Any) -> bool:
    return isinstance(value, str) and value.strip() != ""


def _as_price(value: Any) -> Decimal | None:
    """Return the price as a Decimal, or None if it is not a finite number >= 0."""
    # bool is an int subclass but never a price
    if isinstance(value, bool) or not isinstance(value, (int, float, Decimal)):
        return None
    try:
        amount = Decimal(str(value))
    except InvalidOperation:
        return None
    if not amount.is_finite() or amount < 0:
        return None
    return amount


def _as_datetime(value: Any) -> datetime | None:
    return value if isinstance(value, datetime) else None


# --- Factory ------------------------------------------------------------------


def create_product(
    props: Mapping[str, Any], clock: Clock = utcnow
) -> CreateProductResult:
    """Validate ``props`` and build a Product.

    ``props`` may contain ``id``, ``name``, ``price``, ``description``,
    ``category``, ``created_at`` and ``updated_at``; missing keys and
    ``None`` both mean "not supplied". All rules are checked and the
    messages are returned in rule order. ``clock`` is only consulted when
    ``created_at`` is missing.
    """
    errors: list[str] = []

    product_id = props.get("id")
    name = props.get("name")
    description = props.get("description")
    category = props.get("category")

    if not _is_non_empty_string(product_id):
        errors.append(ID_REQUIRED)

    if not _is_non_empty_string(name):
        errors.append(NAME_REQUIRED)

    price = _as_price(props.get("price"))
    if price is None:
        errors.append(PRICE_REQUIRED)

    if description is not None and not isinstance(description, str):
        errors.append(DESCRIPTION_NOT_STRING)

    if category is not None and not isinstance(category, str):
        errors.append(CATEGORY_NOT_STRING)

    created_at = _as_datetime(props.get("created_at")) or clock()
    updated_at = _as_datetime(props.get("updated_at")) or created_at

    if errors:
        return ProductRejected(tuple(errors))

    return ProductCreated(
        Product(
            id=product_id,
            name=name,
            price=price,
            description=description,
            category=category,
            created_at=created_at,
            updated_at=updated_at,
        )
    )


def revise_product(
    product: Product, changes: Mapping[str, Any], clock: Clock = utcnow
) -> CreateProductResult:
    """Build a changed copy of ``product``, re-validated from scratch.

    ``created_at`` is carried over and ``updated_at`` moves to ``clock()``
    unless ``changes`` supplies a datetime for either. The id is fixed for
    life.
    """
    if "id" in changes and changes["id"] != product.id:
        return ProductRejected((ID_IMMUTABLE,))

    props: dict[str, Any] = {
        "id": product.id,
        "name": product.name,
        "price": product.price,
        "description": product.description,
        "category": product.category,
    }
    props.update(changes)
    # a missing or unusable timestamp must never move a revision backwards
    props["created_at"] = _as_datetime(props.get("created_at")) or product.created_at
    props["updated_at"] = _as_datetime(props.get("updated_at")) or clock()
    return create_product(props, clock=clock)
