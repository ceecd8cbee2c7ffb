import pytest

from core.errors import InvalidCredentialsError, ValidationError
from core.repositories.users import ROLE_ADMIN, ROLE_ASSOCIATE
from core.user_service import (
    authenticate_user,
    create_user,
    hash_password,
    normalize_email,
    verify_password,
)
from tests.sample_data import FAST_HASH


def test_hash_and_verify_password():
    encoded = hash_password("admin123", **FAST_HASH)

    assert encoded.startswith("pbkdf2_sha256$1000$")
    assert verify_password("admin123", encoded)
    assert not verify_password("admin124", encoded)
    assert not verify_password("admin123", "garbage")
    assert not verify_password("admin123", "md5$1$00$00")


def test_hash_password_is_salted():
    assert hash_password("secret", **FAST_HASH) != hash_password("secret", **FAST_HASH)


def test_normalize_email():
    assert normalize_email("  Admin@Stockpile.COM ") == "admin@stockpile.com"
    assert normalize_email(None) == ""


def test_create_then_authenticate(users):
    created = create_user(users, "Admin@Stockpile.com", "admin123", ROLE_ADMIN, **FAST_HASH)

    assert created.email == "admin@stockpile.com"
    assert created.is_admin
    assert authenticate_user(users, "admin@stockpile.com", "admin123") == created
    assert authenticate_user(users, " ADMIN@stockpile.com", "admin123") == created


@pytest.mark.parametrize(
    "email, password",
    [
        ("admin@stockpile.com", "wrong"),
        ("nobody@stockpile.com", "admin123"),
        ("", "admin123"),
        ("admin@stockpile.com", ""),
    ],
)
def test_authenticate_rejects_bad_credentials(users, email, password):
    create_user(users, "admin@stockpile.com", "admin123", ROLE_ADMIN, **FAST_HASH)

    with pytest.raises(InvalidCredentialsError):
        authenticate_user(users, email, password)


def test_create_user_validation(users):
    with pytest.raises(ValidationError):
        create_user(users, "not-an-email", "secret1", **FAST_HASH)
    with pytest.raises(ValidationError):
        create_user(users, "a@b.com", "123", **FAST_HASH)
    with pytest.raises(ValidationError):
        create_user(users, "a@b.com", "secret1", "manager", **FAST_HASH)

    create_user(users, "a@b.com", "secret1", **FAST_HASH)
    with pytest.raises(ValidationError):
        create_user(users, "A@B.com", "secret2", **FAST_HASH)


def test_default_role_is_associate(users):
    assert create_user(users, "user@stockpile.com", "user123", **FAST_HASH).role == ROLE_ASSOCIATE
