"""Test data seeding for the product catalog.

Provides idempotent seed data creation for:
- the products table (created if missing)
- 2 canonical products with stable ids and codes

Usage:
    # From Python (e.g. in a conftest.py fixture):
    from src.seeding.seed import seed_all
    await seed_all(engine)

    # From shell:
    python -m src.seeding.seed --database-url postgresql+asyncpg://...
"""
