"""Session utilisateur explicite, transmise aux services qui ont besoin d'une identité."""

from __future__ import annotations

import logging

from .errors import PermissionDeniedError
from .repositories.base import UserStore
from .repositories.users import User
from .user_service import authenticate_user

logger = logging.getLogger(__name__)


class Session:
    """Fournisseur de session : connexion, déconnexion, utilisateur courant.

    Aucune variable globale : chaque requête (ou chaque script) construit sa
    propre session et la passe aux opérations qui en ont besoin.
    """

    def __init__(self, users: UserStore | None = None, user: User | None = None):
        self._users = users
        self._user = user

    @classmethod
    def for_user(cls, user: User) -> "Session":
        return cls(user=user)

    def sign_in(self, email: str, password: str) -> User:
        if self._users is None:
            raise RuntimeError("Session créée sans store utilisateurs : connexion impossible.")
        self._user = authenticate_user(self._users, email, password)
        logger.info("Connexion de %s (%s)", self._user.email, self._user.role)
        return self._user

    def sign_out(self) -> None:
        self._user = None

    def current_user(self) -> User | None:
        return self._user

    def require_user(self) -> User:
        if self._user is None:
            raise PermissionDeniedError("Authentification requise.")
        return self._user


__all__ = ["Session"]
