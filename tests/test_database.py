import pytest

from database import Backend, BackendError, serialize_doc, to_storage_key


def test_storage_keys_are_snake_case():
    assert to_storage_key("pricePerKg") == "price_per_kg"
    assert to_storage_key("isActive") == "is_active"
    assert to_storage_key("name_en") == "name_en"


def test_create_stores_snake_case_rows_with_flag_strings(backend, mongo):
    backend.products.create({"id": "prod_1", "nameEn": "Pork", "isActive": True, "price_per_kg": 25})

    raw = mongo["products"].find_one({"_id": "prod_1"})
    assert raw["name_en"] == "Pork"
    assert raw["is_active"] == "1"
    assert "created_at" in raw and "updated_at" in raw


def test_list_returns_ids_and_iso_timestamps(backend):
    backend.pages.create({"id": "page_1", "title_en": "About", "is_published": False})

    rows = backend.pages.list()
    assert len(rows) == 1
    assert rows[0]["id"] == "page_1"
    assert rows[0]["is_published"] == "0"
    assert isinstance(rows[0]["created_at"], str)


def test_list_where_order_and_limit(backend):
    for i, active in enumerate([True, False, True, True]):
        backend.menu_items.create({"id": f"menu_{i}", "title_en": f"T{i}", "order_index": 10 - i, "is_active": active})

    active = backend.menu_items.list(where={"isActive": "1"}, order_by=("orderIndex", "asc"))
    assert [r["id"] for r in active] == ["menu_3", "menu_2", "menu_0"]

    limited = backend.menu_items.list(order_by=("order_index", "desc"), limit=2)
    assert [r["id"] for r in limited] == ["menu_0", "menu_1"]


def test_where_on_id(backend):
    backend.users.create({"id": "user_1", "email": "a@piwkina.ge"})
    backend.users.create({"id": "user_2", "email": "b@piwkina.ge"})

    rows = backend.users.list(where={"id": "user_2"})
    assert [r["email"] for r in rows] == ["b@piwkina.ge"]


def test_update_and_delete(backend):
    backend.orders.create({"id": "order_1", "status": "pending"})

    backend.orders.update("order_1", {"status": "completed"})
    assert backend.orders.list()[0]["status"] == "completed"

    backend.orders.delete("order_1")
    assert backend.orders.list() == []


def test_missing_rows_are_rejected(backend):
    with pytest.raises(BackendError):
        backend.orders.update("nope", {"status": "completed"})
    with pytest.raises(BackendError):
        backend.orders.delete("nope")


def test_create_requires_explicit_id(backend):
    with pytest.raises(BackendError):
        backend.products.create({"name_en": "No id"})


def test_unavailable_database_raises_backend_error():
    backend = Backend(None)
    with pytest.raises(BackendError, match="Database not available"):
        backend.products.list()
    assert backend.status()["database"] == "Not Available"


def test_serialize_doc_handles_empty():
    assert serialize_doc(None) is None
    assert serialize_doc({"_id": "x", "a": 1}) == {"id": "x", "a": 1}
