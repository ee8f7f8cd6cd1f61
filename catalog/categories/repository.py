import uuid
from typing import List, Optional

import sqlalchemy as sa
from sqlalchemy.orm import selectinload

from ..common.repository import Repository
from ..products.model import Product
from .model import Category


def _with_active_products():
    return selectinload(Category.products.and_(Product.is_active.is_(True)))


class CategoryRepository(Repository[Category]):
    model = Category

    async def list_with_active_products(self) -> List[Category]:
        stmt = (
            sa.select(Category)
            .options(_with_active_products())
            .order_by(Category.name.asc())
            .execution_options(populate_existing=True)
        )
        res = await self._session.execute(stmt)
        return list(res.scalars().all())

    async def get_with_active_products(self, category_id: uuid.UUID) -> Optional[Category]:
        stmt = (
            sa.select(Category)
            .options(_with_active_products())
            .where(Category.id == category_id)
            .execution_options(populate_existing=True)
        )
        res = await self._session.execute(stmt)
        return res.scalar_one_or_none()

    async def exists(self, category_id: uuid.UUID) -> bool:
        res = await self._session.execute(sa.select(Category.id).where(Category.id == category_id))
        return res.first() is not None
