import uuid
from typing import Generic, Optional, Type, TypeVar

import sqlalchemy as sa
from sqlalchemy.ext.asyncio import AsyncSession

from .db import Base

M = TypeVar("M", bound=Base)


class Repository(Generic[M]):
    """Basic data access for one mapped model over a shared session."""

    model: Type[M]

    def __init__(self, session: AsyncSession):
        self._session = session

    async def get_by_id(self, entity_id: uuid.UUID) -> Optional[M]:
        return await self._session.get(self.model, entity_id)

    async def add(self, entity: M) -> M:
        self._session.add(entity)
        return entity

    async def update(self, entity: M) -> M:
        # Tracked instances are flushed on save; merge covers detached ones.
        if entity not in self._session:
            entity = await self._session.merge(entity)
        return entity

    async def count(self, *criteria) -> int:
        stmt = sa.select(sa.func.count()).select_from(self.model).where(*criteria)
        res = await self._session.execute(stmt)
        return int(res.scalar() or 0)
