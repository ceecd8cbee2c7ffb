"""Shared fixtures for service-level tests."""

from __future__ import annotations

import pytest

from core.repositories import JsonCatalogStore, JsonDocument, JsonUserStore
from core.repositories.users import ROLE_ADMIN, ROLE_ASSOCIATE, User
from core.session import Session


@pytest.fixture()
def document(tmp_path):
    return JsonDocument(tmp_path / "stockpile.json")


@pytest.fixture()
def catalog(document):
    return JsonCatalogStore(document)


@pytest.fixture()
def users(document):
    return JsonUserStore(document)


@pytest.fixture()
def admin_session():
    return Session.for_user(User(id="u-admin", email="admin@stockpile.com", role=ROLE_ADMIN))


@pytest.fixture()
def associate_session():
    return Session.for_user(User(id="u-assoc", email="user@stockpile.com", role=ROLE_ASSOCIATE))
