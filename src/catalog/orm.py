"""ORM mapping for the products table."""
from __future__ import annotations

from sqlalchemy import BigInteger, String
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column

from src.catalog.models import Product


class Base(DeclarativeBase):
    pass


class ProductRecord(Base):
    """Row of the products table. Mirrors sql/init-db.sql."""

    __tablename__ = "products"

    id: Mapped[int] = mapped_column(BigInteger, primary_key=True, autoincrement=False)
    code: Mapped[str] = mapped_column(String(255), unique=True, nullable=False)
    name: Mapped[str] = mapped_column(String(255), nullable=False)

    @classmethod
    def from_domain(cls, product: Product) -> ProductRecord:
        return cls(id=product.id, code=product.code, name=product.name)

    def to_domain(self) -> Product:
        return Product(id=self.id, code=self.code, name=self.name)
