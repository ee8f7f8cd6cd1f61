import uuid
from contextlib import asynccontextmanager
from typing import AsyncIterator, Optional

from quart import Blueprint, jsonify, request

from ..common.config import settings
from ..common.errors import InvalidOperationError, result_error_response
from ..common.unit_of_work import UnitOfWork
from .schemas import CreateProductDto, UpdateProductDto, UpdateStockDto
from .service import ProductService

bp = Blueprint("products", __name__)

# Largest row offset the database accepts.
MAX_OFFSET = 2**63 - 1


@asynccontextmanager
async def product_service() -> AsyncIterator[ProductService]:
    async with UnitOfWork() as uow:
        yield ProductService(uow)


def _int_arg(name: str, default: int) -> int:
    raw = request.args.get(name)
    if raw is None or raw == "":
        return default
    try:
        return int(raw)
    except ValueError:
        raise InvalidOperationError(f"{name} must be an integer") from None


def _uuid_arg(name: str) -> Optional[uuid.UUID]:
    raw = request.args.get(name)
    if not raw:
        return None
    try:
        return uuid.UUID(raw)
    except ValueError:
        raise InvalidOperationError(f"{name} must be a valid identifier") from None


async def _json_object() -> dict:
    data = await request.get_json(force=True)
    if not isinstance(data, dict):
        raise InvalidOperationError("Request body must be a JSON object")
    return data


@bp.get("/api/products")
async def products_list():
    page_number = _int_arg("pageNumber", 1)
    page_size = _int_arg("pageSize", settings.DEFAULT_PAGE_SIZE)
    if page_number < 1:
        raise InvalidOperationError("pageNumber must be 1 or greater")
    if not 1 <= page_size <= settings.MAX_PAGE_SIZE:
        raise InvalidOperationError(f"pageSize must be between 1 and {settings.MAX_PAGE_SIZE}")
    if (page_number - 1) * page_size > MAX_OFFSET:
        raise InvalidOperationError("pageNumber is too large")
    search = request.args.get("search") or None
    category_id = _uuid_arg("categoryId")

    async with product_service() as service:
        result = await service.get_products(page_number, page_size, search, category_id)
    if not result.ok:
        return result_error_response(result)

    listing = result.value
    response = jsonify(listing.to_json())
    response.headers["X-Total-Count"] = str(listing.total_count)
    response.headers["X-Page-Number"] = str(page_number)
    response.headers["X-Page-Size"] = str(page_size)
    return response


@bp.get("/api/products/<uuid:product_id>")
async def product_detail(product_id: uuid.UUID):
    async with product_service() as service:
        result = await service.get_product_by_id(product_id)
    if not result.ok:
        return result_error_response(result)
    return jsonify(result.value.to_json())


@bp.post("/api/products")
async def product_create():
    dto = CreateProductDto.model_validate(await _json_object())
    async with product_service() as service:
        result = await service.create_product(dto)
    if not result.ok:
        return result_error_response(result)

    created = result.value
    response = jsonify(created.to_json())
    response.status_code = 201
    response.headers["Location"] = f"/api/products/{created.id}"
    return response


@bp.put("/api/products/<uuid:product_id>")
async def product_update(product_id: uuid.UUID):
    dto = UpdateProductDto.model_validate(await _json_object())
    async with product_service() as service:
        result = await service.update_product(product_id, dto)
    if not result.ok:
        return result_error_response(result)
    return "", 204


@bp.delete("/api/products/<uuid:product_id>")
async def product_delete(product_id: uuid.UUID):
    async with product_service() as service:
        result = await service.delete_product(product_id)
    if not result.ok:
        return result_error_response(result)
    return "", 204


@bp.patch("/api/products/<uuid:product_id>/stock")
async def product_stock(product_id: uuid.UUID):
    # Accepts a bare JSON integer or {"quantity": <int>}
    data = await request.get_json(force=True)
    if isinstance(data, dict):
        dto = UpdateStockDto.model_validate(data)
    else:
        dto = UpdateStockDto.model_validate({"quantity": data})
    async with product_service() as service:
        result = await service.update_stock(product_id, dto.quantity)
    if not result.ok:
        return result_error_response(result)
    return jsonify({"message": "Stock updated successfully"})
