import uuid
from typing import List, Optional

import sqlalchemy as sa
from sqlalchemy.orm import joinedload

from ..common.repository import Repository
from .model import Product


def product_criteria(search: Optional[str] = None, category_id: Optional[uuid.UUID] = None) -> list:
    """Predicate shared by listing and counting: active, search text, category."""
    criteria = [Product.is_active.is_(True)]
    if search and search.strip():
        criteria.append(
            sa.or_(
                Product.name.contains(search, autoescape=True),
                Product.description.contains(search, autoescape=True),
            )
        )
    if category_id is not None:
        criteria.append(Product.category_id == category_id)
    return criteria


class ProductRepository(Repository[Product]):
    model = Product

    async def get_products_with_category(
        self,
        page_number: int,
        page_size: int,
        search: Optional[str] = None,
        category_id: Optional[uuid.UUID] = None,
    ) -> List[Product]:
        stmt = (
            sa.select(Product)
            .options(joinedload(Product.category))
            .where(*product_criteria(search, category_id))
            .order_by(Product.name.asc(), Product.id.asc())
            .offset((page_number - 1) * page_size)
            .limit(page_size)
        )
        res = await self._session.execute(stmt)
        return list(res.scalars().all())

    async def get_by_id_with_category(self, product_id: uuid.UUID) -> Optional[Product]:
        stmt = (
            sa.select(Product)
            .options(joinedload(Product.category))
            .where(Product.id == product_id)
            .execution_options(populate_existing=True)
        )
        res = await self._session.execute(stmt)
        return res.scalar_one_or_none()

    async def is_name_unique(self, name: str, exclude_id: Optional[uuid.UUID] = None) -> bool:
        stmt = sa.select(Product.id).where(Product.name == name, Product.is_active.is_(True))
        if exclude_id is not None:
            stmt = stmt.where(Product.id != exclude_id)
        res = await self._session.execute(stmt.limit(1))
        return res.first() is None

    async def count_products(self, search: Optional[str] = None, category_id: Optional[uuid.UUID] = None) -> int:
        return await self.count(*product_criteria(search, category_id))
