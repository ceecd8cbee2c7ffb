import pytest

from core.access_policy import CatalogAction, can_perform, ensure_permitted
from core.errors import InvalidCredentialsError, PermissionDeniedError
from core.repositories.users import ROLE_ADMIN, ROLE_ASSOCIATE, User
from core.session import Session
from core.user_service import create_user
from tests.sample_data import FAST_HASH

ADMIN = User(id="1", email="admin@stockpile.com", role=ROLE_ADMIN)
ASSOCIATE = User(id="2", email="user@stockpile.com", role=ROLE_ASSOCIATE)


def test_sign_in_and_out(users):
    create_user(users, "admin@stockpile.com", "admin123", ROLE_ADMIN, **FAST_HASH)
    session = Session(users)

    assert session.current_user() is None
    user = session.sign_in("admin@stockpile.com", "admin123")
    assert session.current_user() == user
    assert session.require_user() == user

    session.sign_out()
    assert session.current_user() is None
    with pytest.raises(PermissionDeniedError):
        session.require_user()


def test_failed_sign_in_keeps_previous_state(users):
    create_user(users, "user@stockpile.com", "user123", **FAST_HASH)
    session = Session(users)

    with pytest.raises(InvalidCredentialsError):
        session.sign_in("user@stockpile.com", "nope")
    assert session.current_user() is None


def test_sessions_are_independent(users):
    create_user(users, "admin@stockpile.com", "admin123", ROLE_ADMIN, **FAST_HASH)
    first, second = Session(users), Session(users)

    first.sign_in("admin@stockpile.com", "admin123")

    assert second.current_user() is None


def test_sign_in_without_user_store():
    with pytest.raises(RuntimeError):
        Session().sign_in("admin@stockpile.com", "admin123")


@pytest.mark.parametrize("action", [CatalogAction.CREATE, CatalogAction.UPDATE, CatalogAction.DELETE])
def test_catalog_mutations_are_admin_only(action):
    assert can_perform(ADMIN, action)
    assert not can_perform(ASSOCIATE, action)
    assert not can_perform(None, action)
    with pytest.raises(PermissionDeniedError):
        ensure_permitted(ASSOCIATE, action)


def test_restock_is_open_to_any_signed_in_user():
    assert ensure_permitted(ASSOCIATE, CatalogAction.RESTOCK) == ASSOCIATE
    assert ensure_permitted(ADMIN, CatalogAction.RESTOCK) == ADMIN
    with pytest.raises(PermissionDeniedError):
        ensure_permitted(None, CatalogAction.RESTOCK)
