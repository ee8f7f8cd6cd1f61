import math
import uuid
from typing import Iterable, Optional

import sqlalchemy as sa

from ..categories.model import Category
from ..categories.schemas import CategoryDto
from ..common.db import utcnow
from .model import Product
from .schemas import CreateProductDto, ProductDto, ProductListDto, UpdateProductDto


def to_product_dto(product: Product, category_name: Optional[str] = None) -> ProductDto:
    if category_name is None:
        # Only read the relationship when the repository loaded it.
        category = None if "category" in sa.inspect(product).unloaded else product.category
        category_name = category.name if category is not None else ""
    return ProductDto(
        id=product.id,
        name=product.name,
        description=product.description,
        price=product.price,
        stock_quantity=product.stock_quantity,
        image_url=product.image_url,
        category_id=product.category_id,
        category_name=category_name,
        created_at=product.created_at,
        updated_at=product.updated_at,
        is_active=product.is_active,
    )


def to_entity(dto: CreateProductDto, product_id: Optional[uuid.UUID] = None) -> Product:
    now = utcnow()
    return Product(
        id=product_id or uuid.uuid4(),
        name=dto.name,
        description=dto.description,
        price=dto.price,
        stock_quantity=dto.stock_quantity,
        image_url=dto.image_url,
        category_id=dto.category_id,
        created_at=now,
        updated_at=now,
        is_active=True,
    )


def apply_update(product: Product, dto: UpdateProductDto) -> Product:
    product.name = dto.name
    product.description = dto.description
    product.price = dto.price
    product.image_url = dto.image_url
    product.updated_at = utcnow()
    return product


def to_list_dto(products: Iterable[Product], total_count: int, page_number: int, page_size: int) -> ProductListDto:
    return ProductListDto(
        items=[to_product_dto(p) for p in products],
        total_count=total_count,
        page_number=page_number,
        page_size=page_size,
        total_pages=math.ceil(total_count / page_size),
    )


def to_category_dto(category: Category) -> CategoryDto:
    # Products come from the category's own explicit load, so the name is known.
    return CategoryDto(
        id=category.id,
        name=category.name,
        description=category.description,
        products=[to_product_dto(p, category_name=category.name) for p in category.products],
    )
