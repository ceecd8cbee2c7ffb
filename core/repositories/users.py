"""
User Repository - User entity (identité de session) and roles.
"""

from __future__ import annotations

from dataclasses import dataclass

ROLE_ADMIN = "admin"
ROLE_ASSOCIATE = "associate"
ALLOWED_ROLES: tuple[str, ...] = (ROLE_ADMIN, ROLE_ASSOCIATE)


@dataclass(frozen=True)
class User:
    """User entity, without credentials."""

    id: str
    email: str
    role: str

    @property
    def is_admin(self) -> bool:
        return self.role == ROLE_ADMIN


@dataclass(frozen=True)
class UserCredentials:
    """Stored account: the public user plus its password hash."""

    user: User
    password_hash: str
