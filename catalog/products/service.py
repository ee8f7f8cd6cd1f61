"""
ProductService: product CRUD, soft delete and stock adjustment.

Every operation returns a ``Result``/``OperationResult``. Expected failures
(validation, not found, name conflict, insufficient stock) are returned as
failures with their ``ErrorKind``. Unexpected errors from the persistence layer
are logged and the session is rolled back. They are returned as a generic
failure whose message does not leak the underlying error.

The name-uniqueness check and the insert run in one explicit transaction. Two
concurrent creates with the same name can still both pass the check, so the
partial unique index on active names has the final word. Its violation is
reported as a conflict.
"""

import uuid
from typing import Optional

from sqlalchemy.exc import IntegrityError

from ..common.db import utcnow
from ..common.result import ErrorKind, OperationResult, Result
from ..common.service_base import BaseService
from ..common.unit_of_work import UnitOfWork
from .mapping import apply_update, to_entity, to_list_dto, to_product_dto
from .schemas import CreateProductDto, ProductDto, ProductListDto, UpdateProductDto
from .validators import validate_create, validate_update

INSUFFICIENT_STOCK = "Insufficient stock. Operation would result in negative stock quantity"


def _not_found(product_id: uuid.UUID) -> str:
    return f"Product with ID {product_id} not found"


def _name_taken(name: str) -> str:
    return f"A product with the name '{name}' already exists"


class ProductService(BaseService):
    def __init__(self, uow: UnitOfWork):
        super().__init__()
        self.uow = uow

    async def _unexpected(self, message: str, *args) -> None:
        self.logger.exception(message, *args)
        try:
            await self.uow.rollback_transaction()
        except Exception:
            self.logger.exception("Rollback failed after: " + message, *args)

    @BaseService.log_performance
    async def get_products(
        self,
        page_number: int,
        page_size: int,
        search: Optional[str] = None,
        category_id: Optional[uuid.UUID] = None,
    ) -> Result[ProductListDto]:
        try:
            products = await self.uow.products.get_products_with_category(
                page_number, page_size, search, category_id
            )
            total_count = await self.uow.products.count_products(search, category_id)
            return Result.success(to_list_dto(products, total_count, page_number, page_size))
        except Exception:
            await self._unexpected("Error retrieving products")
            return Result.failure("An error occurred while retrieving products")

    @BaseService.log_performance
    async def get_product_count(
        self, search: Optional[str] = None, category_id: Optional[uuid.UUID] = None
    ) -> Result[int]:
        try:
            return Result.success(await self.uow.products.count_products(search, category_id))
        except Exception:
            await self._unexpected("Error counting products")
            return Result.failure("An error occurred while counting products")

    @BaseService.log_performance
    async def get_product_by_id(self, product_id: uuid.UUID) -> Result[ProductDto]:
        try:
            product = await self.uow.products.get_by_id_with_category(product_id)
            if product is None:
                return Result.failure(_not_found(product_id), ErrorKind.NOT_FOUND)
            return Result.success(to_product_dto(product))
        except Exception:
            await self._unexpected("Error retrieving product %s", product_id)
            return Result.failure("An error occurred while retrieving the product")

    @BaseService.log_performance
    async def create_product(self, dto: CreateProductDto) -> Result[ProductDto]:
        errors = validate_create(dto)
        if errors:
            return Result.failures(errors, ErrorKind.VALIDATION)

        try:
            await self.uow.begin_transaction()

            if not await self.uow.products.is_name_unique(dto.name):
                await self.uow.rollback_transaction()
                return Result.failure(_name_taken(dto.name), ErrorKind.CONFLICT)

            if not await self.uow.categories.exists(dto.category_id):
                await self.uow.rollback_transaction()
                return Result.failure(
                    f"Category with ID {dto.category_id} does not exist", ErrorKind.VALIDATION
                )

            product = to_entity(dto)
            await self.uow.products.add(product)
            await self.uow.save_changes()
            await self.uow.commit_transaction()
        except IntegrityError:
            self.logger.warning("Insert rejected for product name %r", dto.name)
            await self.uow.rollback_transaction()
            return Result.failure(_name_taken(dto.name), ErrorKind.CONFLICT)
        except Exception:
            await self._unexpected("Error creating product")
            return Result.failure("An error occurred while creating the product")

        try:
            created = await self.uow.products.get_by_id_with_category(product.id)
            self.logger.info("Product created: %s - %s", product.id, product.name)
            return Result.success(to_product_dto(created))
        except Exception:
            await self._unexpected("Error loading created product %s", product.id)
            return Result.failure("An error occurred while creating the product")

    @BaseService.log_performance
    async def update_product(self, product_id: uuid.UUID, dto: UpdateProductDto) -> OperationResult:
        errors = validate_update(dto)
        if errors:
            return OperationResult.failures(errors, ErrorKind.VALIDATION)

        try:
            product = await self.uow.products.get_by_id(product_id)
            if product is None:
                return OperationResult.failure(_not_found(product_id), ErrorKind.NOT_FOUND)

            if product.name != dto.name:
                if not await self.uow.products.is_name_unique(dto.name, exclude_id=product_id):
                    return OperationResult.failure(_name_taken(dto.name), ErrorKind.CONFLICT)

            apply_update(product, dto)
            await self.uow.products.update(product)
            await self.uow.save_changes()
        except IntegrityError:
            self.logger.warning("Update rejected for product %s name %r", product_id, dto.name)
            await self.uow.rollback_transaction()
            return OperationResult.failure(_name_taken(dto.name), ErrorKind.CONFLICT)
        except Exception:
            await self._unexpected("Error updating product %s", product_id)
            return OperationResult.failure("An error occurred while updating the product")

        self.logger.info("Product updated: %s", product_id)
        return OperationResult.success()

    @BaseService.log_performance
    async def delete_product(self, product_id: uuid.UUID) -> OperationResult:
        try:
            product = await self.uow.products.get_by_id(product_id)
            if product is None:
                return OperationResult.failure(_not_found(product_id), ErrorKind.NOT_FOUND)

            # Soft delete
            product.is_active = False
            product.updated_at = utcnow()
            await self.uow.products.update(product)
            await self.uow.save_changes()
        except Exception:
            await self._unexpected("Error deleting product %s", product_id)
            return OperationResult.failure("An error occurred while deleting the product")

        self.logger.info("Product deleted (soft): %s", product_id)
        return OperationResult.success()

    @BaseService.log_performance
    async def update_stock(self, product_id: uuid.UUID, quantity: int) -> OperationResult:
        try:
            product = await self.uow.products.get_by_id(product_id)
            if product is None:
                return OperationResult.failure(_not_found(product_id), ErrorKind.NOT_FOUND)

            new_stock = product.stock_quantity + quantity
            if new_stock < 0:
                return OperationResult.failure(INSUFFICIENT_STOCK, ErrorKind.BUSINESS_RULE)

            product.stock_quantity = new_stock
            product.updated_at = utcnow()
            await self.uow.products.update(product)
            await self.uow.save_changes()
        except Exception:
            await self._unexpected("Error updating stock for product %s", product_id)
            return OperationResult.failure("An error occurred while updating stock")

        self.logger.info(
            "Product stock updated: %s, quantity change: %s, new stock: %s", product_id, quantity, new_stock
        )
        return OperationResult.success()
