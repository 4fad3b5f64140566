"""Shared fixtures for product catalog tests."""
from __future__ import annotations

from collections.abc import Awaitable, Callable, Iterable

import pytest
from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncConnection

from src.catalog.models import Product
from src.seeding.fixtures import SEED_PRODUCTS

InsertProducts = Callable[[AsyncConnection, Iterable[Product]], Awaitable[int]]


async def _insert_products(conn: AsyncConnection, products: Iterable[Product]) -> int:
    count = 0
    for product in products:
        await conn.execute(
            text("INSERT INTO products (id, code, name) VALUES (:id, :code, :name)"),
            {"id": product.id, "code": product.code, "name": product.name},
        )
        count += 1
    return count


@pytest.fixture
def insert_products() -> InsertProducts:
    """Plain INSERT helper; constraint violations surface from the store."""
    return _insert_products


@pytest.fixture
def canonical_products() -> list[Product]:
    """The canonical two products written by sql/seed-data.sql."""
    return list(SEED_PRODUCTS)


@pytest.fixture
def many_products() -> list[Product]:
    """25 well-formed products with unique codes."""
    return [Product(id=i, code=f"P{i:04d}", name=f"Product {i}") for i in range(100, 125)]
