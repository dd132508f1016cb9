"""Domain-level exceptions.

Business rule violations are expressed as subclasses of DomainException
so the CLI layer can catch them uniformly and display user-friendly messages.
Storage adapters raise PersistenceError, which is deliberately *not* a
DomainException: callers must be able to tell "invalid" from "broken".
"""

from __future__ import annotations

from collections.abc import Iterable


class DomainException(Exception):
    """Base class for all domain errors."""


class ValidationError(DomainException):
    """A business rule or invariant was violated.

    Carries every violated rule, not just the first one.
    """

    def __init__(self, errors: str | Iterable[str]) -> None:
        if isinstance(errors, str):
            errors = (errors,)
        self.errors: tuple[str, ...] = tuple(errors)
        super().__init__("; ".join(self.errors))


class EntityNotFoundError(DomainException):
    """A requested entity does not exist."""


class PersistenceError(Exception):
    """An entity could not be written to, or read back from, a backing store."""
