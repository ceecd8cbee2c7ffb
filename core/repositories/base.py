"""
Base Repository - Store interfaces using Protocol.

The catalog and user stores have two implementations: a local JSON document
(``json_store``) and a SQL table (``sql_store``). Services only depend on the
protocols below.
"""

from __future__ import annotations

from abc import abstractmethod
from typing import Any, Mapping, Protocol, Sequence

from .products import Product
from .users import UserCredentials


class CatalogStore(Protocol):
    """Catalog store interface."""

    @abstractmethod
    def list(self) -> Sequence[Product]:
        """Return a snapshot of every product, in storage order."""
        ...

    @abstractmethod
    def get(self, product_id: str) -> Product | None:
        ...

    @abstractmethod
    def create(self, fields: Mapping[str, Any]) -> Product:
        """Insert a product; assigns ``id``, ``created_at`` and ``updated_at``."""
        ...

    @abstractmethod
    def update(self, product_id: str, patch: Mapping[str, Any]) -> Product | None:
        """Merge ``patch`` over the record and refresh ``updated_at``. Last write wins."""
        ...

    @abstractmethod
    def adjust_stock(self, product_id: str, delta: int) -> Product | None:
        """Atomically add ``delta`` to ``current_stock`` and refresh ``updated_at``."""
        ...

    @abstractmethod
    def delete(self, product_id: str) -> bool:
        """Delete by ID. Returns True if a record was removed."""
        ...


class UserStore(Protocol):
    """User store interface (lookup by email, account creation)."""

    @abstractmethod
    def get_by_email(self, email: str) -> UserCredentials | None:
        ...

    @abstractmethod
    def add(self, email: str, password_hash: str, role: str) -> UserCredentials:
        ...

    @abstractmethod
    def count(self) -> int:
        ...
