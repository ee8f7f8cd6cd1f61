"""HTTP tests for the catalog endpoints."""

import uuid

import pytest

pytestmark = pytest.mark.integration


async def _category_id(client, name="Electronics") -> str:
    response = await client.get("/api/categories")
    categories = await response.get_json()
    return next(c["id"] for c in categories if c["name"] == name)


def _payload(category_id, **overrides) -> dict:
    payload = {
        "name": "Mouse",
        "description": "Two-button mouse",
        "price": 9.99,
        "stockQuantity": 5,
        "imageUrl": "https://example.com/mouse.jpg",
        "categoryId": category_id,
    }
    payload.update(overrides)
    return payload


@pytest.mark.asyncio
async def test_health(client):
    response = await client.get("/health")

    assert response.status_code == 200
    assert await response.get_json() == {"status": "ok"}
    assert "X-Instance-ID" in response.headers


@pytest.mark.asyncio
async def test_seeded_listing_with_paging_headers(client):
    response = await client.get("/api/products?pageNumber=1&pageSize=3")

    assert response.status_code == 200
    body = await response.get_json()
    assert response.headers["X-Total-Count"] == "4"
    assert response.headers["X-Page-Number"] == "1"
    assert response.headers["X-Page-Size"] == "3"
    assert body["totalCount"] == 4
    assert body["totalPages"] == 2
    names = [p["name"] for p in body["items"]]
    assert names == sorted(names) and len(names) == 3


@pytest.mark.asyncio
async def test_listing_filters_by_search_and_category(client):
    books = await _category_id(client, "Books")

    by_search = await (await client.get("/api/products?search=Mouse")).get_json()
    by_category = await (await client.get(f"/api/products?categoryId={books}")).get_json()

    assert [p["name"] for p in by_search["items"]] == ["Wireless Mouse"]
    assert [p["name"] for p in by_category["items"]] == ["Clean Code"]
    assert by_category["items"][0]["categoryName"] == "Books"


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "query",
    ["pageNumber=0", "pageSize=0", "pageSize=1000", "pageNumber=abc", "categoryId=not-a-uuid"],
)
async def test_listing_rejects_bad_query(client, query):
    response = await client.get(f"/api/products?{query}")

    assert response.status_code == 400
    body = await response.get_json()
    assert body["statusCode"] == 400
    assert body["error"]
    assert "timestamp" in body


@pytest.mark.asyncio
async def test_create_and_fetch(client):
    category_id = await _category_id(client)

    response = await client.post("/api/products", json=_payload(category_id))

    assert response.status_code == 201
    created = await response.get_json()
    assert response.headers["Location"] == f"/api/products/{created['id']}"
    assert created["stockQuantity"] == 5
    assert created["isActive"] is True
    assert created["price"] == 9.99
    assert created["categoryName"] == "Electronics"

    fetched = await client.get(f"/api/products/{created['id']}")
    assert fetched.status_code == 200
    assert (await fetched.get_json())["name"] == "Mouse"


@pytest.mark.asyncio
async def test_create_validation_errors(client):
    response = await client.post("/api/products", json={"name": "", "price": 0})

    assert response.status_code == 400
    body = await response.get_json()
    assert body["errors"] == [
        "Product name is required",
        "Product description is required",
        "Price must be greater than zero",
        "Category ID is required",
    ]
    assert body["statusCode"] == 400


@pytest.mark.asyncio
async def test_create_duplicate_name(client):
    category_id = await _category_id(client)

    response = await client.post("/api/products", json=_payload(category_id, name="Wireless Mouse"))

    assert response.status_code == 400
    assert (await response.get_json())["error"] == "A product with the name 'Wireless Mouse' already exists"


@pytest.mark.asyncio
async def test_create_with_wrong_types_is_bad_request(client):
    response = await client.post("/api/products", json={"name": "A", "price": "cheap"})

    assert response.status_code == 400


@pytest.mark.asyncio
async def test_create_with_non_object_body_is_bad_request(client):
    response = await client.post("/api/products", json=[1, 2, 3])

    assert response.status_code == 400
    assert (await response.get_json())["error"] == "Request body must be a JSON object"


@pytest.mark.asyncio
async def test_unknown_product_is_404(client):
    product_id = uuid.uuid4()

    get = await client.get(f"/api/products/{product_id}")
    put = await client.put(
        f"/api/products/{product_id}", json={"name": "A", "description": "B", "price": 1}
    )
    delete = await client.delete(f"/api/products/{product_id}")
    stock = await client.patch(f"/api/products/{product_id}/stock", json=1)

    assert [r.status_code for r in (get, put, delete, stock)] == [404, 404, 404, 404]
    assert (await get.get_json())["error"] == f"Product with ID {product_id} not found"


@pytest.mark.asyncio
async def test_update_and_delete(client):
    category_id = await _category_id(client)
    created = await (await client.post("/api/products", json=_payload(category_id))).get_json()

    put = await client.put(
        f"/api/products/{created['id']}",
        json={"name": "Trackball", "description": "Thumb", "price": 12.5, "imageUrl": None},
    )
    assert put.status_code == 204

    delete = await client.delete(f"/api/products/{created['id']}")
    assert delete.status_code == 204

    after = await (await client.get(f"/api/products/{created['id']}")).get_json()
    assert after["name"] == "Trackball"
    assert after["isActive"] is False


@pytest.mark.asyncio
async def test_update_with_invalid_fields_is_400(client):
    category_id = await _category_id(client)
    created = await (await client.post("/api/products", json=_payload(category_id))).get_json()

    response = await client.put(f"/api/products/{created['id']}", json={"name": "", "description": "x", "price": 1})

    assert response.status_code == 400
    assert (await response.get_json())["errors"] == ["Product name is required"]


@pytest.mark.asyncio
async def test_stock_accepts_bare_integer_and_object(client):
    category_id = await _category_id(client)
    created = await (await client.post("/api/products", json=_payload(category_id))).get_json()
    url = f"/api/products/{created['id']}/stock"

    bare = await client.patch(url, json=3)
    wrapped = await client.patch(url, json={"quantity": -2})
    too_many = await client.patch(url, json=-100)
    not_int = await client.patch(url, json="ten")

    assert bare.status_code == 200
    assert await bare.get_json() == {"message": "Stock updated successfully"}
    assert wrapped.status_code == 200
    assert too_many.status_code == 400
    assert (await too_many.get_json())["error"].startswith("Insufficient stock")
    assert not_int.status_code == 400
    product = await (await client.get(f"/api/products/{created['id']}")).get_json()
    assert product["stockQuantity"] == 6


@pytest.mark.asyncio
async def test_categories_endpoints(client):
    listing = await client.get("/api/categories")
    categories = await listing.get_json()
    electronics = next(c for c in categories if c["name"] == "Electronics")

    detail = await client.get(f"/api/categories/{electronics['id']}")
    missing = await client.get(f"/api/categories/{uuid.uuid4()}")

    assert listing.status_code == 200
    assert sorted(c["name"] for c in categories) == ["Books", "Clothing", "Electronics"]
    assert detail.status_code == 200
    assert sorted(p["name"] for p in (await detail.get_json())["products"]) == [
        'Laptop Pro 15"',
        "Wireless Mouse",
    ]
    assert missing.status_code == 404


@pytest.mark.asyncio
async def test_unknown_route_uses_error_envelope(client):
    response = await client.get("/api/nowhere")

    assert response.status_code == 404
    body = await response.get_json()
    assert body["statusCode"] == 404


@pytest.mark.asyncio
async def test_metrics_are_exposed(client):
    await client.get("/health")

    response = await client.get("/metrics")

    assert response.status_code == 200
    assert "http_requests_total" in (await response.get_data(as_text=True))


@pytest.mark.asyncio
async def test_mouse_scenario_over_http(client):
    category_id = await _category_id(client)

    created = await client.post("/api/products", json=_payload(category_id))
    assert created.status_code == 201
    mouse = await created.get_json()
    assert mouse["stockQuantity"] == 5 and mouse["isActive"] is True
    url = f"/api/products/{mouse['id']}"

    assert (await client.patch(f"{url}/stock", json=-10)).status_code == 400
    assert (await (await client.get(url)).get_json())["stockQuantity"] == 5

    assert (await client.patch(f"{url}/stock", json=-5)).status_code == 200
    assert (await (await client.get(url)).get_json())["stockQuantity"] == 0

    assert (await client.delete(url)).status_code == 204
    assert (await (await client.get(url)).get_json())["isActive"] is False

    again = await client.post("/api/products", json=_payload(category_id))
    assert again.status_code == 201


@pytest.mark.asyncio
async def test_page_number_beyond_database_range_is_bad_request(client):
    response = await client.get("/api/products?pageNumber=99999999999999999999")

    assert response.status_code == 400
    assert (await response.get_json())["error"] == "pageNumber is too large"


@pytest.mark.asyncio
async def test_out_of_range_quantities_are_bad_request(client):
    category_id = await _category_id(client)
    created = await (await client.post("/api/products", json=_payload(category_id))).get_json()
    url = f"/api/products/{created['id']}/stock"

    huge = await client.patch(url, json=10**20)
    wrapped = await client.patch(url, json={"quantity": -(10**20)})
    create = await client.post("/api/products", json=_payload(category_id, name="Pad", stockQuantity=10**20))

    assert [r.status_code for r in (huge, wrapped, create)] == [400, 400, 400]
    assert (await (await client.get(f"/api/products/{created['id']}")).get_json())["stockQuantity"] == 5


@pytest.mark.asyncio
async def test_sub_cent_price_is_rejected_over_http(client):
    category_id = await _category_id(client)

    response = await client.post("/api/products", json=_payload(category_id, price=0.001))

    assert response.status_code == 400
    assert (await response.get_json())["errors"] == ["Price cannot have more than 2 decimal places"]


@pytest.mark.asyncio
async def test_null_name_reports_rule_messages(client):
    category_id = await _category_id(client)

    response = await client.post("/api/products", json=_payload(category_id, name=None, description=None))

    assert response.status_code == 400
    assert (await response.get_json())["errors"] == [
        "Product name is required",
        "Product description is required",
    ]
