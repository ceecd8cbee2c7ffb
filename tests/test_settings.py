import pytest

from core import database_url
from core.repositories import JsonCatalogStore, SqlCatalogStore, build_stores
from core.settings import AppSettings


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for name in (
        "APP_ENV",
        "ENV",
        "CATALOG_BACKEND",
        "STOCKPILE_DATA_FILE",
        "DATABASE_URL",
        "CORS_ALLOWED_ORIGINS",
        "JWT_SECRET_KEY",
        "JWT_SECRET_KEYS",
        "SKIP_SEED",
        "POSTGRES_HOST",
        "POSTGRES_DB",
        "DB_HOST",
        "DB_NAME",
    ):
        monkeypatch.delenv(name, raising=False)


def test_defaults():
    settings = AppSettings.load()

    assert settings.app_env == "development"
    assert settings.catalog_backend == "json"
    assert settings.data_file == "stockpile_data.json"
    assert settings.seed_defaults is True
    assert settings.cors_allowed_origins == []
    assert settings.jwt_secret_keys == []


def test_environment_overrides(monkeypatch):
    monkeypatch.setenv("CATALOG_BACKEND", "SQL")
    monkeypatch.setenv("SKIP_SEED", "1")
    monkeypatch.setenv("CORS_ALLOWED_ORIGINS", "http://a.test, ,http://b.test")
    monkeypatch.setenv("JWT_SECRET_KEYS", "k1,k2")

    settings = AppSettings.load()

    assert settings.catalog_backend == "sql"
    assert settings.seed_defaults is False
    assert settings.cors_allowed_origins == ["http://a.test", "http://b.test"]
    assert settings.jwt_secret_keys == ["k1", "k2"]


def test_invalid_backend(monkeypatch):
    monkeypatch.setenv("CATALOG_BACKEND", "redis")
    with pytest.raises(ValueError):
        AppSettings.load()


def test_database_url_falls_back_to_sqlite():
    assert database_url.get_database_url() == database_url.DEFAULT_SQLITE_URL


def test_database_url_prefers_explicit_value(monkeypatch):
    monkeypatch.setenv("DATABASE_URL", "postgresql+psycopg2://u:p@db:5432/stockpile")
    assert database_url.get_database_url() == "postgresql+psycopg2://u:p@db:5432/stockpile"


def test_build_stores_json(tmp_path, monkeypatch):
    monkeypatch.setenv("STOCKPILE_DATA_FILE", str(tmp_path / "data.json"))

    stores = build_stores()

    assert isinstance(stores.catalog, JsonCatalogStore)
    assert stores.catalog.list() == []
    assert stores.users.count() == 0


def test_build_stores_sql_creates_schema(tmp_path, monkeypatch):
    from core import data_repository

    db_path = tmp_path / "stockpile.db"
    monkeypatch.setenv("CATALOG_BACKEND", "sql")
    monkeypatch.setenv("DATABASE_URL", f"sqlite:///{db_path}")
    data_repository.get_engine.cache_clear()
    try:
        stores = build_stores()
        assert isinstance(stores.catalog, SqlCatalogStore)
        assert stores.catalog.list() == []
        assert stores.users.count() == 0
    finally:
        data_repository.get_engine().dispose()
        data_repository.get_engine.cache_clear()
