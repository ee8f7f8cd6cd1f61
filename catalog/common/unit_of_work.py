"""
Unit of Work over a single ``AsyncSession``.

One instance is opened per request. Repositories share its session, and
``save_changes`` persists every pending mutation in one commit. While an
explicit transaction is open, ``save_changes`` only flushes, and the work
becomes durable on ``commit_transaction``.
"""

import logging
from typing import Callable, Optional

from sqlalchemy.ext.asyncio import AsyncSession

from ..categories.repository import CategoryRepository
from ..products.repository import ProductRepository
from .database import AsyncSessionLocal

log = logging.getLogger(__name__)


class UnitOfWork:
    def __init__(self, session_factory: Callable[[], AsyncSession] = AsyncSessionLocal):
        self._session: AsyncSession = session_factory()
        self._products: Optional[ProductRepository] = None
        self._categories: Optional[CategoryRepository] = None
        self._in_transaction = False
        self._closed = False

    @property
    def session(self) -> AsyncSession:
        return self._session

    @property
    def products(self) -> ProductRepository:
        if self._products is None:
            self._products = ProductRepository(self._session)
        return self._products

    @property
    def categories(self) -> CategoryRepository:
        if self._categories is None:
            self._categories = CategoryRepository(self._session)
        return self._categories

    @property
    def in_transaction(self) -> bool:
        return self._in_transaction

    @property
    def closed(self) -> bool:
        return self._closed

    async def save_changes(self) -> int:
        """Persist pending mutations and return how many objects were written."""
        pending = len(self._session.new) + len(self._session.dirty) + len(self._session.deleted)
        if self._in_transaction:
            await self._session.flush()
        else:
            await self._session.commit()
        return pending

    async def begin_transaction(self) -> None:
        if self._in_transaction:
            return
        if not self._session.in_transaction():
            await self._session.begin()
        self._in_transaction = True

    async def commit_transaction(self) -> None:
        if not self._in_transaction:
            return
        self._in_transaction = False
        await self._session.commit()

    async def rollback_transaction(self) -> None:
        """Discard the open transaction, explicit or implicit, and anything pending."""
        self._in_transaction = False
        if self._session.in_transaction():
            await self._session.rollback()

    async def close(self) -> None:
        if self._closed:
            return
        self._closed = True
        if self._in_transaction:
            log.warning("Closing unit of work with an uncommitted transaction; rolling back")
            await self.rollback_transaction()
        await self._session.close()

    async def __aenter__(self) -> "UnitOfWork":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.close()
