"""
Store factory - builds the catalog/user stores selected by ``CATALOG_BACKEND``.
"""

from __future__ import annotations

from dataclasses import dataclass

from core.settings import AppSettings

from .base import CatalogStore, UserStore
from .json_store import JsonCatalogStore, JsonDocument, JsonUserStore
from .sql_store import SqlCatalogStore, SqlUserStore


@dataclass(frozen=True)
class StoreBundle:
    catalog: CatalogStore
    users: UserStore


def build_stores(settings: AppSettings | None = None) -> StoreBundle:
    settings = settings or AppSettings.load()
    if settings.catalog_backend == "sql":
        catalog = SqlCatalogStore()
        users = SqlUserStore()
        catalog.ensure_schema()
        users.ensure_schema()
        return StoreBundle(catalog=catalog, users=users)

    document = JsonDocument(settings.data_file)
    return StoreBundle(catalog=JsonCatalogStore(document), users=JsonUserStore(document))
