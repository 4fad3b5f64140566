"""Exception hierarchy for the product catalog.

Driver-level failures are wrapped (the original exception stays as __cause__);
row mapping failures are raised directly by the row mapper and never wrapped.
"""
from __future__ import annotations


class CatalogError(Exception):
    """Base class for every error raised by the catalog package."""


class ConnectivityError(CatalogError):
    """The backing store is unreachable or the connection is closed."""


class QueryError(CatalogError):
    """The backing store rejected a statement."""

    def __init__(self, message: str, statement: str | None = None) -> None:
        super().__init__(message)
        self.statement = statement


class RowMappingError(CatalogError):
    """A result row could not be turned into a domain record."""

    def __init__(self, message: str, column: str) -> None:
        super().__init__(message)
        self.column = column


class TypeMismatchError(RowMappingError):
    """A column value cannot be coerced to its declared type."""


class MissingColumnError(RowMappingError):
    """A required column is absent from the result row."""


class ProvisioningError(CatalogError):
    """A test database could not be described or provisioned."""
