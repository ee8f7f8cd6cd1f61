import uuid
from typing import List

from ..common.result import ErrorKind, Result
from ..common.service_base import BaseService
from ..common.unit_of_work import UnitOfWork
from ..products.mapping import to_category_dto
from .schemas import CategoryDto


class CategoryService(BaseService):
    """Read-only access to categories and their active products."""

    def __init__(self, uow: UnitOfWork):
        super().__init__()
        self.uow = uow

    @BaseService.log_performance
    async def get_categories(self) -> Result[List[CategoryDto]]:
        try:
            categories = await self.uow.categories.list_with_active_products()
            return Result.success([to_category_dto(c) for c in categories])
        except Exception:
            self.logger.exception("Error retrieving categories")
            return Result.failure("An error occurred while retrieving categories")

    @BaseService.log_performance
    async def get_category_by_id(self, category_id: uuid.UUID) -> Result[CategoryDto]:
        try:
            category = await self.uow.categories.get_with_active_products(category_id)
            if category is None:
                return Result.failure(f"Category with ID {category_id} not found", ErrorKind.NOT_FOUND)
            return Result.success(to_category_dto(category))
        except Exception:
            self.logger.exception("Error retrieving category %s", category_id)
            return Result.failure("An error occurred while retrieving the category")
