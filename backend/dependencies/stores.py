"""Reusable dependencies resolving the configured stores and the request session."""

from __future__ import annotations

from functools import lru_cache

from fastapi import Depends

from backend.dependencies.security import AuthenticatedUser, get_current_user
from backend.settings import Settings
from core.repositories import CatalogStore, StoreBundle, UserStore, build_stores
from core.seed_data import seed_defaults
from core.session import Session


@lru_cache(maxsize=1)
def get_stores() -> StoreBundle:
    """Construit les stores une seule fois par processus, avec les données par défaut si activées."""

    settings = Settings.load()
    stores = build_stores(settings)
    if settings.seed_defaults:
        seed_defaults(stores.catalog, stores.users)
    return stores


def get_catalog_store(stores: StoreBundle = Depends(get_stores)) -> CatalogStore:
    return stores.catalog


def get_user_store(stores: StoreBundle = Depends(get_stores)) -> UserStore:
    return stores.users


def get_session(user: AuthenticatedUser = Depends(get_current_user)) -> Session:
    return Session.for_user(user.to_user())
