"""
Product repository: the data access operations behind the /product(s) routes.
"""

import logging
from typing import Any

from sqlalchemy.ext.asyncio import AsyncSession

from product_api.models.product import Product
from product_api.validators.config_validators import INT64_MAX
from .base_repository import BaseRepository, NotFoundError

logger = logging.getLogger(__name__)


class ProductRepository(BaseRepository[Product]):
    """
    Repository for Product entity operations.

    Every read ignores soft-deleted products. `NotFoundError` signals "no
    matching row"; any other failure surfaces as `RepositoryError`.
    """

    def __init__(self, db: AsyncSession):
        super().__init__(Product, db)

    async def get_latest(self) -> Product:
        """
        Return the live product with the lowest id.

        Despite the name this is the *first* product by id, not the most
        recently created or modified one.

        Raises:
            NotFoundError: If there are no live products.
        """
        product = await self.get_first()
        if product is None:
            raise NotFoundError("No products found")
        return product

    async def get_all(self, page: int, per_page: int) -> tuple[list[Product], int]:
        """
        Return one page of live products and the total live count.

        Args:
            page: 1-based page number. Values below 1 read from the start.
            per_page: Page size.

        Returns:
            (products, total) where `total` does not depend on the page window.
        """
        # capped so OFFSET still binds as a 64-bit integer
        offset = min((page - 1) * per_page, INT64_MAX) if page > 0 else 0
        total = await self.count()
        products = await super().get_all(offset=offset, limit=per_page)
        return products, total

    async def get_by_id(self, product_id: Any) -> Product:
        """
        Exact primary-key lookup.

        Raises:
            NotFoundError: If the product does not exist or is soft-deleted.
        """
        return await self.get_by_id_or_raise(product_id)

    async def create(self, code: str, price: int) -> Product:
        return await super().create(code=code, price=price)

    async def update(self, product_id: int, code: str, price: int) -> Product:
        """Overwrite `code` and `price`; id and created_at are left alone."""
        return await super().update(product_id, code=code, price=price)

    async def delete(self, product_id: int) -> None:
        """
        Soft-delete a product.

        Raises:
            NotFoundError: If no live product has this id.
        """
        await self.soft_delete(product_id)
