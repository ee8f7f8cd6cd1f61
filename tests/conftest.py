"""Pytest configuration and fixtures for the catalog service."""

import os

# Must be set before the catalog modules build their engine and settings.
os.environ["DB_URL"] = "sqlite+aiosqlite:///:memory:"
os.environ["SEED_DATA"] = "false"
os.environ.setdefault("LOG_LEVEL", "WARNING")

import uuid
from decimal import Decimal

import pytest
import pytest_asyncio

from catalog.categories.model import Category
from catalog.common.config import settings
from catalog.common.database import AsyncSessionLocal, close_db, drop_db, init_db
from catalog.common.unit_of_work import UnitOfWork
from catalog.products.schemas import CreateProductDto


def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line("markers", "integration: marks tests as integration tests")
    config.addinivalue_line("markers", "unit: marks tests as unit tests")


@pytest_asyncio.fixture()
async def database():
    """Fresh in-memory schema per test."""
    await init_db(seed=False)
    try:
        yield
    finally:
        await drop_db()
        await close_db()


@pytest_asyncio.fixture()
async def categories(database):
    """Two categories, returned by name."""
    async with AsyncSessionLocal() as session:
        electronics = Category(id=uuid.uuid4(), name="Electronics", description="Electronic devices")
        books = Category(id=uuid.uuid4(), name="Books", description=None)
        session.add_all([electronics, books])
        await session.commit()
    return {"Electronics": electronics, "Books": books}


@pytest_asyncio.fixture()
async def uow(database):
    async with UnitOfWork() as unit:
        yield unit


@pytest.fixture()
def make_create_dto():
    def _make(category_id, **overrides) -> CreateProductDto:
        data = {
            "name": "Mouse",
            "description": "Two-button mouse",
            "price": Decimal("9.99"),
            "stock_quantity": 5,
            "image_url": "https://example.com/mouse.jpg",
            "category_id": category_id,
        }
        data.update(overrides)
        return CreateProductDto(**data)

    return _make


@pytest_asyncio.fixture()
async def client(monkeypatch):
    """Quart test client on an app started with the sample catalog seeded."""
    from catalog.app import create_app

    monkeypatch.setattr(settings, "SEED_DATA", True)
    app = create_app()
    async with app.test_app() as test_app:
        yield test_app.test_client()
        await drop_db()
