import json
from decimal import Decimal

import pytest

from core.errors import StoreUnavailableError
from core.repositories import JsonCatalogStore, JsonDocument, JsonUserStore
from core.repositories.json_store import PRODUCTS_KEY, USERS_KEY


def _fields(**overrides):
    fields = {
        "name": "Hammer",
        "category": "Tools",
        "sku": "TOO-001",
        "current_stock": 5,
        "min_stock_level": 15,
        "max_stock_level": 40,
        "cost_price": "8.00",
        "selling_price": "15.99",
    }
    fields.update(overrides)
    return fields


def test_create_and_list_persist_to_disk(catalog, document):
    product = catalog.create(_fields())

    assert product.id
    assert product.cost_price == Decimal("8.00")
    assert product.created_at == product.updated_at
    assert catalog.list() == [product]
    assert catalog.get(product.id) == product

    raw = json.loads(document.path.read_text(encoding="utf-8"))
    assert raw[PRODUCTS_KEY][0]["cost_price"] == "8.00"
    assert raw[PRODUCTS_KEY][0]["name"] == "Hammer"


def test_create_assigns_unique_ids(catalog):
    first = catalog.create(_fields())
    second = catalog.create(_fields())
    assert first.id != second.id


def test_get_missing_returns_none(catalog):
    assert catalog.get("missing") is None


def test_update_applies_patch_and_bumps_timestamp(catalog):
    product = catalog.create(_fields())

    updated = catalog.update(product.id, {"name": "Claw Hammer", "selling_price": "19.5", "unknown": "x"})

    assert updated.name == "Claw Hammer"
    assert updated.selling_price == Decimal("19.50")
    assert updated.sku == "TOO-001"
    assert updated.created_at == product.created_at
    assert updated.updated_at > product.updated_at
    assert catalog.get(product.id) == updated


def test_update_missing_returns_none(catalog):
    assert catalog.update("missing", {"name": "x"}) is None


def test_adjust_stock_adds_quantity(catalog):
    product = catalog.create(_fields(current_stock=5))

    restocked = catalog.adjust_stock(product.id, 35)

    assert restocked.current_stock == 40
    assert restocked.updated_at > product.updated_at
    again = catalog.adjust_stock(product.id, 10)
    assert again.current_stock == 50
    assert again.updated_at > restocked.updated_at


def test_adjust_stock_missing_returns_none(catalog):
    assert catalog.adjust_stock("missing", 3) is None


def test_delete(catalog):
    product = catalog.create(_fields())
    catalog.create(_fields(name="Other"))

    assert catalog.delete("missing") is False
    assert len(catalog.list()) == 2
    assert catalog.delete(product.id) is True
    assert catalog.get(product.id) is None
    assert len(catalog.list()) == 1


def test_unreadable_document_raises_store_unavailable(tmp_path):
    path = tmp_path / "broken.json"
    path.write_text("{not json", encoding="utf-8")
    store = JsonCatalogStore(JsonDocument(path))

    with pytest.raises(StoreUnavailableError):
        store.list()
    with pytest.raises(StoreUnavailableError):
        store.create(_fields())
    assert path.read_text(encoding="utf-8") == "{not json"


def test_user_store_shares_document(document):
    users = JsonUserStore(document)
    catalog = JsonCatalogStore(document)
    catalog.create(_fields())

    account = users.add("admin@stockpile.com", "hash", "admin")

    assert users.count() == 1
    assert users.get_by_email("admin@stockpile.com") == account
    assert users.get_by_email("nobody@stockpile.com") is None
    raw = json.loads(document.path.read_text(encoding="utf-8"))
    assert set(raw) == {USERS_KEY, PRODUCTS_KEY}
