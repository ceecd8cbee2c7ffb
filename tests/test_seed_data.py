from core.repositories.users import ROLE_ADMIN, ROLE_ASSOCIATE
from core.seed_data import DEFAULT_PRODUCTS, seed_defaults
from core.user_service import authenticate_user
from tests.sample_data import FAST_HASH


def test_seed_defaults_fills_empty_stores(catalog, users):
    created = seed_defaults(catalog, users, **FAST_HASH)

    assert created == {"users": 2, "products": len(DEFAULT_PRODUCTS)}
    assert [product.sku for product in catalog.list()] == [
        "TOO-001",
        "TOO-002",
        "ELE-001",
        "PLU-001",
        "PAI-001",
    ]
    assert authenticate_user(users, "admin@stockpile.com", "admin123").role == ROLE_ADMIN
    assert authenticate_user(users, "user@stockpile.com", "user123").role == ROLE_ASSOCIATE


def test_seed_defaults_is_idempotent(catalog, users):
    seed_defaults(catalog, users, **FAST_HASH)

    assert seed_defaults(catalog, users, **FAST_HASH) == {"users": 0, "products": 0}
    assert users.count() == 2
    assert len(catalog.list()) == 5
