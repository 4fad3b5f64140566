"""Declarative product repository.

ProductRepository is the capability set (create, read, update, delete and
query-by-example) written out as explicit methods. SqlAlchemyProductRepository
fulfils it with the ORM mapping in src.catalog.orm.
"""
from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from collections.abc import Iterable

from sqlalchemy import delete, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from src.catalog.models import Product, ProductExample
from src.catalog.orm import ProductRecord

logger = logging.getLogger(__name__)


class ProductRepository(ABC):
    """CRUD and query-by-example access to products."""

    @abstractmethod
    async def save(self, product: Product) -> Product:
        """Insert the product, or update the stored one with the same id."""

    @abstractmethod
    async def save_all(self, products: Iterable[Product]) -> list[Product]:
        """Save every product, in order."""

    @abstractmethod
    async def find_by_id(self, product_id: int) -> Product | None:
        """Return a product by id, or None if not found."""

    @abstractmethod
    async def find_all(self) -> list[Product]:
        """Return every product. Order is unspecified."""

    @abstractmethod
    async def find_all_by_example(self, example: ProductExample) -> list[Product]:
        """Return the products matching every attribute set on the example."""

    @abstractmethod
    async def exists_by_id(self, product_id: int) -> bool:
        """Return True if a product with this id is stored."""

    @abstractmethod
    async def count(self) -> int:
        """Return the number of stored products."""

    @abstractmethod
    async def delete_by_id(self, product_id: int) -> None:
        """Delete the product with this id. Absent ids are ignored."""

    @abstractmethod
    async def delete_all(self) -> None:
        """Delete every product."""


class SqlAlchemyProductRepository(ProductRepository):
    """ProductRepository over an explicit AsyncSession.

    Changes are flushed so constraint violations surface immediately, but
    never committed: the caller owns the transaction.
    """

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def save(self, product: Product) -> Product:
        record = await self._session.merge(ProductRecord.from_domain(product))
        await self._session.flush()
        logger.debug("Saved product id=%d code=%s", record.id, record.code)
        return record.to_domain()

    async def save_all(self, products: Iterable[Product]) -> list[Product]:
        return [await self.save(product) for product in products]

    async def find_by_id(self, product_id: int) -> Product | None:
        record = await self._session.get(ProductRecord, product_id)
        return record.to_domain() if record is not None else None

    async def find_all(self) -> list[Product]:
        result = await self._session.scalars(select(ProductRecord))
        return [record.to_domain() for record in result]

    async def find_all_by_example(self, example: ProductExample) -> list[Product]:
        stmt = select(ProductRecord).filter_by(**example.criteria())
        result = await self._session.scalars(stmt)
        return [record.to_domain() for record in result]

    async def exists_by_id(self, product_id: int) -> bool:
        stmt = select(func.count()).select_from(ProductRecord).where(ProductRecord.id == product_id)
        return (await self._session.scalar(stmt) or 0) > 0

    async def count(self) -> int:
        stmt = select(func.count()).select_from(ProductRecord)
        return await self._session.scalar(stmt) or 0

    async def delete_by_id(self, product_id: int) -> None:
        record = await self._session.get(ProductRecord, product_id)
        if record is None:
            return
        await self._session.delete(record)
        await self._session.flush()
        logger.debug("Deleted product id=%d", product_id)

    async def delete_all(self) -> None:
        await self._session.execute(delete(ProductRecord))
        await self._session.flush()
