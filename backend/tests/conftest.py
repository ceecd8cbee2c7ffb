"""Shared pytest fixtures for backend tests."""

from __future__ import annotations

import os
import sys
from pathlib import Path

import pytest
from fastapi.testclient import TestClient

# Add project root to path
ROOT = Path(__file__).resolve().parent.parent.parent
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

os.environ.setdefault("APP_ENV", "test")
os.environ.setdefault("SKIP_SEED", "1")


@pytest.fixture
def stores(tmp_path):
    """Stores JSON isolés par test, pré-remplis avec les données par défaut."""
    from core.repositories import JsonCatalogStore, JsonDocument, JsonUserStore, StoreBundle
    from core.seed_data import seed_defaults

    document = JsonDocument(tmp_path / "api.json")
    bundle = StoreBundle(catalog=JsonCatalogStore(document), users=JsonUserStore(document))
    seed_defaults(bundle.catalog, bundle.users, iterations=1_000)
    return bundle


@pytest.fixture
def client(stores) -> TestClient:
    """Create a TestClient instance for the FastAPI app."""
    from backend.dependencies.stores import get_stores
    from backend.main import app

    app.dependency_overrides[get_stores] = lambda: stores
    yield TestClient(app)
    app.dependency_overrides.clear()


def _headers_for(stores, email: str) -> dict[str, str]:
    from backend.dependencies.security import token_for_user

    account = stores.users.get_by_email(email)
    return {"Authorization": f"Bearer {token_for_user(account.user)}"}


@pytest.fixture
def admin_headers(stores) -> dict[str, str]:
    return _headers_for(stores, "admin@stockpile.com")


@pytest.fixture
def associate_headers(stores) -> dict[str, str]:
    return _headers_for(stores, "user@stockpile.com")


@pytest.fixture
def product_ids(stores) -> dict[str, str]:
    """SKU -> identifiant pour les produits par défaut."""
    return {product.sku: product.id for product in stores.catalog.list()}
