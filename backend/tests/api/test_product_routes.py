"""Product catalog — display order, image resolution, inactive products."""

from decimal import Decimal
from uuid import uuid4

import pytest

from backoffice.api.dependencies import get_signed_url_issuer
from backoffice.main import app
from backoffice.models.product import Product


def _product(name, category, image_url=None, is_active=True):
    return Product(
        id=uuid4(), name=name, category=category, image_url=image_url,
        price_wholesale=Decimal("10.00"), price_retail=Decimal("12.90"),
        current_stock=Decimal("4.250"), is_active=is_active,
    )


@pytest.fixture
async def catalog(test_db):
    test_db.add_all([
        _product("Carvão 5kg", "CARVAO", "https://cdn.example.com/carvao.jpg"),
        _product("hambúrguer bovino", "HAMBURGUER", "products/burger.jpg"),
        _product("Espeto de Alcatra", "ESPETO", None),
        _product("Avental", None, "/local/avental.png"),
        _product("Espeto Antigo", "ESPETO", "products/old.jpg", is_active=False),
    ])
    await test_db.commit()


async def test_empty_catalog(client, auth):
    res = await client.get("/api/v1/products", headers=auth("CUSTOMER"))
    assert res.status_code == 200
    assert res.json() == []


async def test_catalog_order_and_images(client, auth, catalog, issuer):
    res = await client.get("/api/v1/products", headers=auth("CUSTOMER"))
    body = res.json()

    assert [p["name"] for p in body] == [
        "Espeto de Alcatra", "hambúrguer bovino", "Carvão 5kg", "Avental",
    ]
    images = {p["name"]: p["image_url"] for p in body}
    assert images["Espeto de Alcatra"] == "/placeholder-product.jpg"
    assert images["hambúrguer bovino"].startswith("https://storage.test/products/burger.jpg")
    assert images["Carvão 5kg"] == "https://cdn.example.com/carvao.jpg"
    assert images["Avental"] == "/placeholder-product.jpg"
    assert issuer.calls == ["products/burger.jpg"]
    assert body[0]["price_retail"] == "12.90"
    assert body[0]["current_stock"] == "4.250"


async def test_inactive_products_admin_only(client, auth, admin_headers, catalog):
    denied = await client.get(
        "/api/v1/products?include_inactive=true", headers=auth("SELLER"),
    )
    allowed = await client.get(
        "/api/v1/products?include_inactive=true", headers=admin_headers,
    )
    assert denied.status_code == 403
    assert "Espeto Antigo" in [p["name"] for p in allowed.json()]


async def test_category_filter(client, admin_headers, catalog):
    res = await client.get("/api/v1/products?category=espeto", headers=admin_headers)
    assert [p["name"] for p in res.json()] == ["Espeto de Alcatra"]


async def test_without_storage_images_fall_back_to_placeholder(client, admin_headers, catalog):
    app.dependency_overrides[get_signed_url_issuer] = lambda: None
    res = await client.get("/api/v1/products", headers=admin_headers)
    images = {p["name"]: p["image_url"] for p in res.json()}
    assert images["hambúrguer bovino"] == "/placeholder-product.jpg"
