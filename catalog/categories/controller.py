import uuid

from quart import Blueprint, jsonify

from ..common.errors import result_error_response
from ..common.unit_of_work import UnitOfWork
from .service import CategoryService

bp = Blueprint("categories", __name__)


@bp.get("/api/categories")
async def categories_list():
    async with UnitOfWork() as uow:
        result = await CategoryService(uow).get_categories()
    if not result.ok:
        return result_error_response(result)
    return jsonify([c.to_json() for c in result.value])


@bp.get("/api/categories/<uuid:category_id>")
async def category_detail(category_id: uuid.UUID):
    async with UnitOfWork() as uow:
        result = await CategoryService(uow).get_category_by_id(category_id)
    if not result.ok:
        return result_error_response(result)
    return jsonify(result.value.to_json())
