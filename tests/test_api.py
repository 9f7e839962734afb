"""
HTTP surface tests against a temporary data directory.
"""
from __future__ import annotations

import json

from fastapi.testclient import TestClient

from food_ordering.main import create_app, get_archive

PLACEHOLDER = "https://via.placeholder.com/300"


def test_list_products_returns_seed(client):
    response = client.get("/products")

    assert response.status_code == 200
    assert [p["id"] for p in response.json()] == ["1", "2", "3"]


def test_add_product_example(client):
    response = client.post(
        "/products",
        json={"name": "Idli", "description": "Steamed rice cake", "price": "1.5"},
    )

    assert response.status_code == 201
    assert response.json() == {
        "id": "4",
        "name": "Idli",
        "description": "Steamed rice cake",
        "price": 1.5,
        "image": PLACEHOLDER,
    }


def test_read_after_write_matches_document(client, settings):
    client.post("/products", json={"name": "Vada", "price": 1.25, "image": "vada.png"})
    client.delete("/products/1")

    on_disk = json.loads(settings.products_file.read_text(encoding="utf-8"))
    assert client.get("/products").json() == on_disk
    assert [p["id"] for p in on_disk] == ["2", "3", "4"]


def test_delete_unknown_product_is_404(client):
    response = client.delete("/products/99")

    assert response.status_code == 404
    assert response.json() == {"message": "Product not found"}
    assert len(client.get("/products").json()) == 3


def test_delete_product(client):
    response = client.delete("/products/3")

    assert response.status_code == 200
    assert response.json() == {"message": "Product deleted successfully"}
    assert [p["id"] for p in client.get("/products").json()] == ["1", "2"]


def test_delete_all_products_then_create_restarts_at_one(client):
    response = client.delete("/products")
    assert response.status_code == 200
    assert response.json() == {"message": "All products deleted successfully"}
    assert client.get("/products").json() == []

    assert client.post("/products", json={"name": "Idli", "price": "1.5"}).json()["id"] == "1"


def test_delete_all_products_on_empty_catalog(client):
    client.delete("/products")
    response = client.delete("/products")

    assert response.status_code == 200
    assert response.json() == {"message": "All products deleted successfully"}


def test_product_ids_survive_restart(data_dir):
    with TestClient(create_app()) as first:
        assert first.post("/products", json={"name": "Idli", "price": 1.5}).json()["id"] == "4"

    with TestClient(create_app()) as second:
        assert len(second.get("/products").json()) == 4
        assert second.post("/products", json={"name": "Vada", "price": 1}).json()["id"] == "5"


def test_orders_flow(client):
    body = {
        "customerName": "Asha Menon",
        "deliveryAddress": "Block 4, Beach Road",
        "phoneNumber": "96512345678",
        "paymentMethod": "cash",
        "items": [{"id": "1", "name": "Masala Dosa", "price": 2.5, "quantity": 2, "image": PLACEHOLDER}],
        "totalAmount": 5.0,
        "notes": "Ring the bell",
    }

    first = client.post("/orders", json=body)
    second = client.post("/orders", json=body)

    assert first.status_code == 201
    assert first.json()["id"] == "1"
    assert first.json()["notes"] == "Ring the bell"
    assert "createdAt" in first.json()
    assert second.json()["id"] == "2"
    assert [o["id"] for o in client.get("/orders").json()] == ["1", "2"]

    response = client.delete("/orders/1")
    assert response.status_code == 200
    assert response.json() == {"message": "Order deleted successfully"}

    response = client.delete("/orders/1")
    assert response.status_code == 404
    assert response.json() == {"message": "Order not found"}

    response = client.delete("/orders")
    assert response.status_code == 200
    assert response.json() == {"message": "All orders deleted successfully"}
    assert client.get("/orders").json() == []


def test_order_body_must_be_an_object(client):
    assert client.post("/orders", json=["not", "an", "order"]).status_code == 422


def test_order_body_is_stored_verbatim(client, settings):
    bodies = [
        {"customerName": "Asha", "totalAmount": "abc"},
        {"customerName": "Ravi", "items": [{"id": "1", "quantity": 1.5}]},
        {"customerName": "Meera", "items": "two dosas", "totalAmount": 5},
    ]

    for body in bodies:
        response = client.post("/orders", json=body)
        assert response.status_code == 201
        created = response.json()
        assert {k: created[k] for k in body} == body

    stored = json.loads(settings.orders_file.read_text(encoding="utf-8"))
    assert stored[0]["totalAmount"] == "abc"
    assert stored[1]["items"] == [{"id": "1", "quantity": 1.5}]
    assert stored[2]["items"] == "two dosas"
    assert type(stored[2]["totalAmount"]) is int


def test_order_id_of_deleted_latest_order_is_not_reissued_after_restart(data_dir):
    with TestClient(create_app()) as first:
        for _ in range(3):
            first.post("/orders", json={"customerName": "Asha"})
        assert first.delete("/orders/3").status_code == 200

    with TestClient(create_app()) as second:
        assert [o["id"] for o in second.get("/orders").json()] == ["1", "2"]
        assert second.post("/orders", json={"customerName": "Ravi"}).json()["id"] == "4"


def test_storage_failure_on_create_is_generic_500(client, monkeypatch):
    catalog = client.app.state.catalog

    def broken(payload):
        raise RuntimeError("boom")

    monkeypatch.setattr(catalog, "add_product", broken)
    response = client.post("/products", json={"name": "Idli"})

    assert response.status_code == 500
    assert response.json() == {"message": "Failed to add product"}


def test_health_reports_disabled_document_store(client):
    data = client.get("/health").json()

    assert data["status"] == "operational"
    assert data["products"] == "healthy"
    assert data["orders"] == "healthy"
    assert data["document_store"] == "disabled"


def test_health_reads_services_through_dependencies(client):
    class DownArchive:
        async def health_check(self):
            return False

    client.app.dependency_overrides[get_archive] = lambda: DownArchive()
    try:
        data = client.get("/health").json()
    finally:
        client.app.dependency_overrides.clear()

    assert data["document_store"] == "unhealthy"
    assert data["status"] == "degraded"


def test_cors_allows_configured_origin_only(client):
    allowed = client.get("/products", headers={"Origin": "https://your-admin-app.netlify.app"})
    denied = client.get("/products", headers={"Origin": "https://elsewhere.example"})

    assert allowed.headers.get("access-control-allow-origin") == "https://your-admin-app.netlify.app"
    assert "access-control-allow-origin" not in denied.headers
