"""Price <-> integer pence conversion used at the storage boundary."""

from __future__ import annotations

from decimal import Decimal, DecimalException, Inexact, localcontext

from catalog.domain.exceptions import PersistenceError

_PENCE = Decimal(100)

# Largest integer a JSON number survives as exactly (IEEE-754 double).
MAX_PENCE = 2**53 - 1


def to_pence(price: Decimal) -> int:
    """Convert a price to whole pence, refusing anything finer or too large.

    Arithmetic runs in a local context that traps ``Inexact``, so no digit
    is ever rounded away on the way to storage.
    """
    try:
        with localcontext() as ctx:
            ctx.traps[Inexact] = True
            if price > Decimal(MAX_PENCE) / _PENCE:
                raise PersistenceError(f"Price {price} is too large to store")
            pence = price.scaleb(2).to_integral_exact()
    except Inexact as exc:
        raise PersistenceError(f"Price {price} is not a whole number of pence") from exc
    except DecimalException as exc:
        raise PersistenceError(f"Price {price} cannot be stored") from exc
    return int(pence)


def from_pence(pence: int) -> Decimal:
    if isinstance(pence, bool) or not isinstance(pence, int):
        raise PersistenceError(f"Stored price {pence!r} is not integer pence")
    return Decimal(pence) / _PENCE
