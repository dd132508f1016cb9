"""Rebuilding entities from stored records.

Stored data is untrusted input like any other: it goes back through the
factory so a record that breaks a domain rule can never come out of a
repository as a Product.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from catalog.domain.exceptions import PersistenceError
from catalog.domain.model.product import Product, ProductRejected, create_product


def product_from_storage(props: Mapping[str, Any]) -> Product:
    result = create_product(props)
    if isinstance(result, ProductRejected):
        raise PersistenceError(
            f"Stored product {props.get('id')!r} is invalid: " + "; ".join(result.errors)
        )
    return result.product
