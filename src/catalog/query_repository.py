"""Query-and-map product repository.

Runs one fixed read against the products table and maps every row with
map_product_row. The connection handle is passed in explicitly; opening and
closing it is the caller's job.

Row order is whatever the store returns for an unconstrained scan. No ORDER BY
is applied, so callers must compare results by size or set-equality.
"""
from __future__ import annotations

import logging

from sqlalchemy import text
from sqlalchemy.exc import DBAPIError, InterfaceError, ResourceClosedError
from sqlalchemy.ext.asyncio import AsyncConnection, AsyncSession
from sqlalchemy.ext.asyncio.exc import AsyncContextNotStarted

from src.catalog.errors import ConnectivityError, QueryError
from src.catalog.models import Product
from src.catalog.row_mapper import map_product_row

logger = logging.getLogger(__name__)


class ProductQueryRepository:
    """Read-only product access through a fixed SQL statement."""

    query: str = "select id, code, name from products"

    def __init__(self, connection: AsyncConnection | AsyncSession) -> None:
        self._connection = connection

    async def get_all_products(self) -> list[Product]:
        """Return every product in the table, fully materialized.

        Returns:
            One Product per row; an empty list for an empty table.

        Raises:
            ConnectivityError: The store is unreachable, or the connection is
                closed or was invalidated.
            QueryError: The store rejected the statement.
            RowMappingError: A row could not be mapped. The whole read fails.
        """
        logger.debug("Executing product query: %s", self.query)
        try:
            result = await self._connection.execute(text(self.query))
            rows = result.fetchall()
        except (ResourceClosedError, AsyncContextNotStarted) as exc:
            logger.warning("Product query on a closed connection: %s", exc)
            raise ConnectivityError(f"Connection is not usable: {exc}") from exc
        except OSError as exc:
            logger.warning("Product store unreachable: %s", exc)
            raise ConnectivityError(f"Product store unreachable: {exc}") from exc
        except DBAPIError as exc:
            # no statement means the failure happened while connecting
            if exc.connection_invalidated or exc.statement is None or isinstance(exc, InterfaceError):
                logger.warning("Lost connection to the product store: %s", exc.orig)
                raise ConnectivityError(f"Product store unreachable: {exc.orig}") from exc
            logger.warning("Product store rejected %r: %s", self.query, exc.orig)
            raise QueryError(f"Statement rejected: {exc.orig}", statement=self.query) from exc

        products = [map_product_row(row) for row in rows]
        logger.debug("Mapped %d product rows", len(products))
        return products
