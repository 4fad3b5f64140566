"""Product catalog data-access layer.

Provides:
- Product domain record and query-by-example probe
- Row mapper turning one result row into a Product
- ProductQueryRepository: fixed SQL read mapped row by row
- SqlAlchemyProductRepository: declarative CRUD over the ORM mapping
- SQL script runner for init and seed scripts

Usage:
    from src.catalog.query_repository import ProductQueryRepository

    async with engine.connect() as conn:
        products = await ProductQueryRepository(conn).get_all_products()
"""
