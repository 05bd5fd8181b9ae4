"""
Exception types raised by the catalog services and repositories.

Absence (movie not found, nothing to delete) is never an exception: it is
reported as ``None`` or ``False`` by the operation itself.
"""

from dataclasses import dataclass
from typing import Iterable, List


class CatalogError(Exception):
    """Base class for all catalog errors."""


@dataclass(frozen=True)
class ValidationFailure:
    """A single rejected field and the reason it was rejected."""

    field: str
    message: str


class ValidationError(CatalogError):
    """
    Aggregated input validation failure.

    Raised before any storage mutation. Carries every failure found, not just
    the first one.
    """

    def __init__(self, failures: Iterable[ValidationFailure]):
        self.failures: List[ValidationFailure] = list(failures)
        summary = "; ".join(f"{f.field}: {f.message}" for f in self.failures)
        super().__init__(f"Validation failed: {summary}")


class ConflictError(CatalogError):
    """A write violated a uniqueness or integrity constraint (e.g. duplicate slug)."""


class TransientStorageError(CatalogError):
    """The store could not be reached or a transaction could not complete."""
