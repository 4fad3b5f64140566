"""Catalog domain values."""
from __future__ import annotations

from dataclasses import dataclass, fields
from typing import Any


@dataclass(frozen=True, slots=True)
class Product:
    """A catalog product. Immutable and hashable, so results compare as sets."""

    id: int
    code: str
    name: str


@dataclass(frozen=True, slots=True)
class ProductExample:
    """Query-by-example probe: unset attributes do not constrain the match."""

    id: int | None = None
    code: str | None = None
    name: str | None = None

    def criteria(self) -> dict[str, Any]:
        """Return the attributes that are set, keyed by column name."""
        return {
            field.name: getattr(self, field.name)
            for field in fields(self)
            if getattr(self, field.name) is not None
        }

    def matches(self, product: Product) -> bool:
        return all(getattr(product, column) == value for column, value in self.criteria().items())
