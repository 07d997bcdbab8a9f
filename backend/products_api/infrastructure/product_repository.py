"""Product Repository - SQLAlchemy implementation of ProductRepository.

Invariants:
    - One repository per request session; every mutating call commits before returning
    - Missing rows surface as None/False, never as exceptions
    - Ids outside ID_MIN..ID_MAX are missing by construction: no query is issued
    - SQLAlchemyError is rolled back and re-raised as DatabaseError (opaque 500)

Design Decisions:
    - toggle_availability reads then writes in the same session: the flip is
      relative to the committed value seen by this request
"""

import logging
from contextlib import asynccontextmanager
from typing import AsyncGenerator

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from products_api.core.errors import DatabaseError
from products_api.models.product import ID_MAX, ID_MIN, Product

logger = logging.getLogger(__name__)


def _storable(product_id: int) -> bool:
    return ID_MIN <= product_id <= ID_MAX


class SqlAlchemyProductRepository:
    """Product persistence backed by an AsyncSession."""

    def __init__(self, db: AsyncSession):
        self._db = db

    @asynccontextmanager
    async def _guard(self, operation: str) -> AsyncGenerator[None, None]:
        try:
            yield
        except SQLAlchemyError as e:
            await self._db.rollback()
            logger.error(
                f"Product store {operation} failed: {e}",
                extra={"error_code": "DATABASE_ERROR"},
            )
            raise DatabaseError(str(e), operation) from e

    async def list_all(self) -> list[Product]:
        async with self._guard("query"):
            result = await self._db.execute(
                select(Product).order_by(Product.id),
            )
            return list(result.scalars().all())

    async def get(self, product_id: int) -> Product | None:
        if not _storable(product_id):
            return None
        async with self._guard("query"):
            return await self._db.get(Product, product_id)

    async def create(self, name: str, price: float) -> Product:
        async with self._guard("commit"):
            product = Product(name=name, price=price, availability=True)
            self._db.add(product)
            await self._db.commit()
            await self._db.refresh(product)
            logger.info(
                f"Product created: {product.id}",
                extra={"product_id": product.id},
            )
            return product

    async def update(
        self, product_id: int, name: str, price: float, availability: bool,
    ) -> Product | None:
        if not _storable(product_id):
            return None
        async with self._guard("commit"):
            product = await self._db.get(Product, product_id)
            if product is None:
                return None
            product.name = name
            product.price = price
            product.availability = availability
            await self._db.commit()
            await self._db.refresh(product)
            return product

    async def toggle_availability(self, product_id: int) -> Product | None:
        if not _storable(product_id):
            return None
        async with self._guard("commit"):
            product = await self._db.get(Product, product_id)
            if product is None:
                return None
            product.availability = not product.availability
            await self._db.commit()
            await self._db.refresh(product)
            return product

    async def delete(self, product_id: int) -> bool:
        if not _storable(product_id):
            return False
        async with self._guard("commit"):
            product = await self._db.get(Product, product_id)
            if product is None:
                return False
            await self._db.delete(product)
            await self._db.commit()
            logger.info(
                f"Product deleted: {product_id}",
                extra={"product_id": product_id},
            )
            return True
