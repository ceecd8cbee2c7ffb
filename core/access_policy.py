"""Contrôle d'accès par rôle appliqué avant toute mutation du catalogue."""

from __future__ import annotations

from enum import Enum

from .errors import PermissionDeniedError
from .repositories.users import ROLE_ADMIN, User


class CatalogAction(str, Enum):
    CREATE = "create"
    UPDATE = "update"
    DELETE = "delete"
    RESTOCK = "restock"


# Le réassort reste ouvert à tout utilisateur authentifié.
_ADMIN_ONLY = {CatalogAction.CREATE, CatalogAction.UPDATE, CatalogAction.DELETE}

_DENIED_MESSAGES = {
    CatalogAction.CREATE: "Seuls les administrateurs peuvent ajouter des produits.",
    CatalogAction.UPDATE: "Seuls les administrateurs peuvent modifier des produits.",
    CatalogAction.DELETE: "Seuls les administrateurs peuvent supprimer des produits.",
}


def can_perform(user: User | None, action: CatalogAction) -> bool:
    if user is None:
        return False
    if action in _ADMIN_ONLY:
        return user.role == ROLE_ADMIN
    return True


def ensure_permitted(user: User | None, action: CatalogAction) -> User:
    """Retourne l'utilisateur si l'action est autorisée, lève PermissionDeniedError sinon."""

    if user is None:
        raise PermissionDeniedError("Authentification requise.")
    if not can_perform(user, action):
        raise PermissionDeniedError(_DENIED_MESSAGES.get(action, "Action non autorisée."))
    return user


__all__ = ["CatalogAction", "can_perform", "ensure_permitted"]
