"""Canonical product fixtures, stable across all test runs.

Tests that need seeded products import from here rather than inventing rows,
so the expected results match what sql/seed-data.sql and seed_all() write.
"""
from __future__ import annotations

from src.catalog.models import Product

# ---------------------------------------------------------------------------
# Product identities
# ---------------------------------------------------------------------------

PRODUCT_ONE_ID: int = 1
PRODUCT_TWO_ID: int = 2

PRODUCT_ONE_CODE: str = "P100"
PRODUCT_TWO_CODE: str = "P200"

PRODUCT_ONE_NAME: str = "Product 1"
PRODUCT_TWO_NAME: str = "Product 2"

# ---------------------------------------------------------------------------
# Structured seed data
# ---------------------------------------------------------------------------

SEED_PRODUCTS: list[Product] = [
    Product(id=PRODUCT_ONE_ID, code=PRODUCT_ONE_CODE, name=PRODUCT_ONE_NAME),
    Product(id=PRODUCT_TWO_ID, code=PRODUCT_TWO_CODE, name=PRODUCT_TWO_NAME),
]
