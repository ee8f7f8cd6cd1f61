import uuid
from typing import TYPE_CHECKING, List, Optional

from sqlalchemy import String, Uuid
from sqlalchemy.orm import Mapped, mapped_column, relationship

from ..common.db import Base

if TYPE_CHECKING:
    from ..products.model import Product


class Category(Base):
    __tablename__ = "categories"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    name: Mapped[str] = mapped_column(String(100), nullable=False)
    description: Mapped[Optional[str]] = mapped_column(String(500), nullable=True)

    # Lookup relation only; products are not cascaded with their category.
    products: Mapped[List["Product"]] = relationship(
        back_populates="category", lazy="raise", passive_deletes="all"
    )
