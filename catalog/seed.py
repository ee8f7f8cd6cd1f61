import asyncio
import uuid
from decimal import Decimal

import sqlalchemy as sa
from sqlalchemy.ext.asyncio import AsyncSession

from .categories.model import Category
from .common.db import utcnow
from .products.model import Product


SAMPLE_CATEGORIES = [
    {"name": "Electronics", "description": "Electronic devices and accessories"},
    {"name": "Clothing", "description": "Fashion and apparel"},
    {"name": "Books", "description": "Books and publications"},
]

SAMPLE_PRODUCTS = [
    {
        "name": "Laptop Pro 15\"",
        "description": "High-performance laptop with 16GB RAM and 512GB SSD",
        "price": "1299.99",
        "stock_quantity": 50,
        "image_url": "https://images.unsplash.com/photo-1496181133206-80ce9b88a853",
        "category": "Electronics",
    },
    {
        "name": "Wireless Mouse",
        "description": "Ergonomic wireless mouse with precision tracking",
        "price": "29.99",
        "stock_quantity": 200,
        "image_url": "https://images.unsplash.com/photo-1527814050087-3793815479db",
        "category": "Electronics",
    },
    {
        "name": "Cotton T-Shirt",
        "description": "Comfortable 100% cotton t-shirt",
        "price": "19.99",
        "stock_quantity": 150,
        "image_url": "https://images.unsplash.com/photo-1521572163474-6864f9cf17ab",
        "category": "Clothing",
    },
    {
        "name": "Clean Code",
        "description": "A Handbook of Agile Software Craftsmanship by Robert C. Martin",
        "price": "39.99",
        "stock_quantity": 75,
        "image_url": "https://images.unsplash.com/photo-1532012197267-da84d127e765",
        "category": "Books",
    },
]


async def seed_catalog(session: AsyncSession) -> int:
    """Add missing sample categories and products. Returns the number of products added."""
    res = await session.execute(sa.select(Category))
    categories = {c.name: c for c in res.scalars()}
    for c in SAMPLE_CATEGORIES:
        if c["name"] not in categories:
            category = Category(id=uuid.uuid4(), name=c["name"], description=c["description"])
            session.add(category)
            categories[category.name] = category
    await session.flush()

    added = 0
    for p in SAMPLE_PRODUCTS:
        # avoid duplicates among active products
        res = await session.execute(
            sa.select(Product.id).where(Product.name == p["name"], Product.is_active.is_(True))
        )
        if res.first():
            continue
        now = utcnow()
        session.add(
            Product(
                id=uuid.uuid4(),
                name=p["name"],
                description=p["description"],
                price=Decimal(p["price"]),
                stock_quantity=p["stock_quantity"],
                image_url=p["image_url"],
                category_id=categories[p["category"]].id,
                created_at=now,
                updated_at=now,
                is_active=True,
            )
        )
        added += 1
    return added


async def amain():
    from .common.database import AsyncSessionLocal, close_db, init_db

    await init_db(seed=False)
    async with AsyncSessionLocal() as session:
        added = await seed_catalog(session)
        await session.commit()
    await close_db()
    print(f"Seed complete. Added {added} products.")


if __name__ == "__main__":
    asyncio.run(amain())
