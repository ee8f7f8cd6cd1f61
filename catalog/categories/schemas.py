import uuid
from typing import List, Optional

from pydantic import Field

from ..products.schemas import CamelModel, ProductDto


class CategoryDto(CamelModel):
    id: uuid.UUID
    name: str
    description: Optional[str] = None
    products: List[ProductDto] = Field(default_factory=list)
