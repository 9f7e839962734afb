"""
Document store (order archive) against a temporary SQLite database.
"""
from __future__ import annotations

import sqlite3

import pytest
from fastapi.testclient import TestClient

from food_ordering.core import config as core_config
from food_ordering.main import create_app

ORDER = {
    "customerName": "Asha Menon",
    "deliveryAddress": "Block 4, Beach Road",
    "phoneNumber": "96512345678",
    "paymentMethod": "cash",
    "items": [
        {"id": "1", "name": "Masala Dosa", "price": 2.5, "quantity": 2, "image": "dosa.png"},
        {"id": "3", "name": "Veg Biryani", "price": 3.0, "quantity": 1, "image": "biryani.png"},
    ],
    "totalAmount": 8.0,
}


@pytest.fixture()
def archive_db(data_dir, tmp_path, monkeypatch):
    db_file = tmp_path / "archive.db"
    monkeypatch.setenv("DATABASE_URL", f"sqlite+aiosqlite:///{db_file}")
    core_config.get_settings.cache_clear()
    return db_file


def rows(db_file, query):
    with sqlite3.connect(db_file) as conn:
        return conn.execute(query).fetchall()


def test_created_order_is_archived_with_items(archive_db):
    with TestClient(create_app()) as client:
        response = client.post("/orders", json=ORDER)
        assert response.status_code == 201
        assert client.get("/health").json()["document_store"] == "healthy"

    assert rows(archive_db, "SELECT order_ref, customer_name, total_amount FROM order_documents") == [
        ("1", "Asha Menon", 8.0)
    ]
    assert rows(
        archive_db,
        "SELECT product_id, name, quantity FROM order_item_documents ORDER BY position",
    ) == [("1", "Masala Dosa", 2), ("3", "Veg Biryani", 1)]


def test_incomplete_order_is_stored_but_not_archived(archive_db):
    with TestClient(create_app()) as client:
        response = client.post("/orders", json={"customerName": "Ravi"})
        assert response.status_code == 201
        assert [o["id"] for o in client.get("/orders").json()] == ["1"]

    assert rows(archive_db, "SELECT COUNT(*) FROM order_documents") == [(0,)]


def test_deletes_do_not_reach_the_archive(archive_db):
    with TestClient(create_app()) as client:
        client.post("/orders", json=ORDER)
        client.delete("/orders")

    assert rows(archive_db, "SELECT COUNT(*) FROM order_documents") == [(1,)]


def test_order_with_free_form_amount_is_stored_but_not_archived(archive_db):
    with TestClient(create_app()) as client:
        response = client.post("/orders", json=dict(ORDER, totalAmount="abc"))
        assert response.status_code == 201
        assert client.get("/orders").json()[0]["totalAmount"] == "abc"

    assert rows(archive_db, "SELECT COUNT(*) FROM order_documents") == [(0,)]
