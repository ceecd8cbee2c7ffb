"""
Repository Layer - data access for the catalog and user accounts.

This module provides:
- Store protocols (``CatalogStore``, ``UserStore``)
- A local JSON document implementation and a SQLAlchemy implementation
- A factory selecting the implementation from the settings
"""

from .base import CatalogStore, UserStore
from .factory import StoreBundle, build_stores
from .json_store import JsonCatalogStore, JsonDocument, JsonUserStore
from .products import Product
from .sql_store import SqlCatalogStore, SqlUserStore
from .users import ALLOWED_ROLES, ROLE_ADMIN, ROLE_ASSOCIATE, User, UserCredentials

__all__ = [
    # Base
    "CatalogStore",
    "UserStore",
    "StoreBundle",
    "build_stores",
    # Entities
    "Product",
    "User",
    "UserCredentials",
    "ALLOWED_ROLES",
    "ROLE_ADMIN",
    "ROLE_ASSOCIATE",
    # Implementations
    "JsonDocument",
    "JsonCatalogStore",
    "JsonUserStore",
    "SqlCatalogStore",
    "SqlUserStore",
]
