"""
JSON Store - Local key-value persistence mirroring the relational schema.

A single JSON document holds one array per "table" (``stockpile_users``,
``stockpile_products``). Every write rewrites the whole document through a
temporary file so a crash never leaves a half-written catalog behind.
"""

from __future__ import annotations

import json
import logging
import os
import tempfile
import threading
import uuid
from dataclasses import replace
from pathlib import Path
from typing import Any, Callable, Mapping

from core.errors import StoreUnavailableError

from .products import (
    Product,
    next_timestamp,
    normalize_fields,
    product_from_record,
    product_to_record,
)
from .users import User, UserCredentials

logger = logging.getLogger(__name__)

USERS_KEY = "stockpile_users"
PRODUCTS_KEY = "stockpile_products"


class JsonDocument:
    """Fichier JSON partagé par les stores, protégé par un verrou de processus."""

    def __init__(self, path: str | Path):
        self.path = Path(path)
        self._lock = threading.RLock()

    def _read(self) -> dict[str, Any]:
        if not self.path.exists():
            return {}
        try:
            with self.path.open("r", encoding="utf-8") as handle:
                content = handle.read()
            return json.loads(content) if content.strip() else {}
        except (OSError, json.JSONDecodeError) as exc:
            logger.warning("Lecture impossible du fichier %s: %s", self.path, exc)
            raise StoreUnavailableError(f"Stockage local illisible ({self.path.name}).") from exc

    def _write(self, data: dict[str, Any]) -> None:
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(prefix=f".{self.path.name}.", dir=self.path.parent)
            with os.fdopen(fd, "w", encoding="utf-8") as handle:
                json.dump(data, handle, ensure_ascii=False, indent=2)
            os.replace(tmp_name, self.path)
        except OSError as exc:
            logger.warning("Écriture impossible du fichier %s: %s", self.path, exc)
            raise StoreUnavailableError(f"Stockage local non inscriptible ({self.path.name}).") from exc

    def read_table(self, key: str) -> list[dict[str, Any]]:
        with self._lock:
            return list(self._read().get(key) or [])

    def mutate_table(self, key: str, mutator: Callable[[list[dict[str, Any]]], Any]) -> Any:
        """Charge la table, applique ``mutator`` puis réécrit le document sous le même verrou."""

        with self._lock:
            data = self._read()
            rows = list(data.get(key) or [])
            outcome = mutator(rows)
            data[key] = rows
            self._write(data)
            return outcome


class JsonCatalogStore:
    """CatalogStore backed by the ``stockpile_products`` array."""

    def __init__(self, document: JsonDocument):
        self._document = document

    def list(self) -> list[Product]:
        return [product_from_record(row) for row in self._document.read_table(PRODUCTS_KEY)]

    def get(self, product_id: str) -> Product | None:
        for row in self._document.read_table(PRODUCTS_KEY):
            if str(row.get("id")) == str(product_id):
                return product_from_record(row)
        return None

    def create(self, fields: Mapping[str, Any]) -> Product:
        now = next_timestamp()
        product = product_from_record(
            {
                **normalize_fields(fields),
                "id": uuid.uuid4().hex,
                "created_at": now,
                "updated_at": now,
            }
        )
        self._document.mutate_table(PRODUCTS_KEY, lambda rows: rows.append(product_to_record(product)))
        return product

    def _replace_row(self, product_id: str, build: Callable[[Product], Product]) -> Product | None:
        def _mutator(rows: list[dict[str, Any]]) -> Product | None:
            for index, row in enumerate(rows):
                if str(row.get("id")) == str(product_id):
                    updated = build(product_from_record(row))
                    rows[index] = product_to_record(updated)
                    return updated
            return None

        return self._document.mutate_table(PRODUCTS_KEY, _mutator)

    def update(self, product_id: str, patch: Mapping[str, Any]) -> Product | None:
        changes = normalize_fields(patch)
        return self._replace_row(
            product_id,
            lambda current: replace(current, **changes, updated_at=next_timestamp(current.updated_at)),
        )

    def adjust_stock(self, product_id: str, delta: int) -> Product | None:
        # Lecture et écriture sous le même verrou : deux réassorts concurrents s'additionnent.
        return self._replace_row(
            product_id,
            lambda current: replace(
                current,
                current_stock=current.current_stock + int(delta),
                updated_at=next_timestamp(current.updated_at),
            ),
        )

    def delete(self, product_id: str) -> bool:
        def _mutator(rows: list[dict[str, Any]]) -> bool:
            kept = [row for row in rows if str(row.get("id")) != str(product_id)]
            removed = len(kept) != len(rows)
            rows[:] = kept
            return removed

        return self._document.mutate_table(PRODUCTS_KEY, _mutator)


class JsonUserStore:
    """UserStore backed by the ``stockpile_users`` array."""

    def __init__(self, document: JsonDocument):
        self._document = document

    @staticmethod
    def _to_credentials(row: Mapping[str, Any]) -> UserCredentials:
        return UserCredentials(
            user=User(id=str(row["id"]), email=str(row["email"]), role=str(row["role"])),
            password_hash=str(row.get("password_hash") or ""),
        )

    def get_by_email(self, email: str) -> UserCredentials | None:
        for row in self._document.read_table(USERS_KEY):
            if str(row.get("email")) == email:
                return self._to_credentials(row)
        return None

    def add(self, email: str, password_hash: str, role: str) -> UserCredentials:
        row = {"id": uuid.uuid4().hex, "email": email, "password_hash": password_hash, "role": role}
        self._document.mutate_table(USERS_KEY, lambda rows: rows.append(row))
        return self._to_credentials(row)

    def count(self) -> int:
        return len(self._document.read_table(USERS_KEY))


__all__ = ["JsonDocument", "JsonCatalogStore", "JsonUserStore"]
