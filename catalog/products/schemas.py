"""Wire schemas for product requests and responses (camelCase JSON)."""

import uuid
from datetime import datetime
from decimal import Decimal
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, StrictInt, field_serializer, field_validator
from pydantic.alias_generators import to_camel

# Quantities are 32-bit on the wire.
INT32_MIN = -(2**31)
INT32_MAX = 2**31 - 1


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, from_attributes=True)

    def to_json(self) -> dict:
        return self.model_dump(mode="json", by_alias=True)


class ProductDto(CamelModel):
    id: uuid.UUID
    name: str
    description: str
    price: Decimal
    stock_quantity: int
    image_url: Optional[str] = None
    category_id: uuid.UUID
    category_name: str = ""
    created_at: datetime
    updated_at: datetime
    is_active: bool

    @field_serializer("price", when_used="json")
    def _price_as_number(self, price: Decimal) -> float:
        return float(price)


class CreateProductDto(CamelModel):
    # Field rules are checked by the validators module so that every
    # violation is reported at once; only types are enforced here.
    name: Optional[str] = ""
    description: Optional[str] = ""
    price: Decimal = Decimal("0")
    stock_quantity: int = Field(default=0, ge=INT32_MIN, le=INT32_MAX)
    image_url: Optional[str] = None
    category_id: Optional[uuid.UUID] = None

    @field_validator("category_id", mode="before")
    @classmethod
    def _blank_category_is_missing(cls, value):
        if isinstance(value, str) and not value.strip():
            return None
        return value


class UpdateProductDto(CamelModel):
    name: Optional[str] = ""
    description: Optional[str] = ""
    price: Decimal = Decimal("0")
    image_url: Optional[str] = None


class UpdateStockDto(CamelModel):
    quantity: StrictInt = Field(ge=INT32_MIN, le=INT32_MAX)


class ProductListDto(CamelModel):
    items: List[ProductDto] = Field(default_factory=list)
    total_count: int
    page_number: int
    page_size: int
    total_pages: int
