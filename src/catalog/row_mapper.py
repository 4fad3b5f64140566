"""Row mapper: one result row in, one Product out.

Accepts SQLAlchemy ``Row`` objects (read through their ``_mapping``) or any
plain mapping keyed by column name. No null handling and no defaulting: the
products table declares every column NOT NULL, so a NULL here means the
query and the schema disagree.
"""
from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from src.catalog.errors import MissingColumnError, TypeMismatchError
from src.catalog.models import Product


def _column(row: Mapping[str, Any], column: str) -> Any:
    try:
        return row[column]
    except KeyError as exc:
        raise MissingColumnError(f"Column {column!r} is missing from the result row", column) from exc


def _as_int(value: Any, column: str) -> int:
    # bool is an int subclass but never a valid identifier
    if isinstance(value, bool):
        raise TypeMismatchError(f"Column {column!r} expected an integer, got bool", column)
    if isinstance(value, int):
        return value
    if isinstance(value, str):
        try:
            return int(value.strip())
        except ValueError as exc:
            raise TypeMismatchError(
                f"Column {column!r} expected an integer, got {value!r}", column
            ) from exc
    raise TypeMismatchError(
        f"Column {column!r} expected an integer, got {type(value).__name__}", column
    )


def _as_str(value: Any, column: str) -> str:
    if not isinstance(value, str):
        raise TypeMismatchError(
            f"Column {column!r} expected text, got {type(value).__name__}", column
        )
    return value


def map_product_row(row: Any) -> Product:
    """Map one ``id, code, name`` row to a Product.

    Raises:
        MissingColumnError: A named column is absent from the row.
        TypeMismatchError: A column value cannot be coerced to its type.
    """
    mapping: Mapping[str, Any] = getattr(row, "_mapping", row)
    return Product(
        id=_as_int(_column(mapping, "id"), "id"),
        code=_as_str(_column(mapping, "code"), "code"),
        name=_as_str(_column(mapping, "name"), "name"),
    )
