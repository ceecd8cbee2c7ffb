"""
SQL Store - Catalog and users persisted in SQL tables (PostgreSQL or SQLite).
"""

from __future__ import annotations

import logging
import uuid
from contextlib import contextmanager
from typing import Any, Iterator, Mapping

from sqlalchemy import text
from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError

from core.data_repository import exec_sql, get_engine, query_df
from core.errors import StoreUnavailableError

from .products import (
    EDITABLE_FIELDS,
    PRODUCT_MONEY_FIELDS,
    Product,
    as_timestamp,
    next_timestamp,
    normalize_fields,
    product_from_record,
)
from .users import User, UserCredentials

logger = logging.getLogger(__name__)

_PRODUCTS_TABLE_SQL = """
CREATE TABLE IF NOT EXISTS products (
    id TEXT PRIMARY KEY,
    name TEXT NOT NULL,
    description TEXT NOT NULL DEFAULT '',
    category TEXT NOT NULL DEFAULT '',
    brand TEXT NOT NULL DEFAULT '',
    sku TEXT NOT NULL DEFAULT '',
    barcode TEXT,
    current_stock INTEGER NOT NULL DEFAULT 0,
    min_stock_level INTEGER NOT NULL DEFAULT 0,
    max_stock_level INTEGER NOT NULL DEFAULT 0,
    cost_price NUMERIC(12, 2) NOT NULL DEFAULT 0,
    selling_price NUMERIC(12, 2) NOT NULL DEFAULT 0,
    supplier TEXT NOT NULL DEFAULT '',
    location TEXT NOT NULL DEFAULT '',
    created_at TEXT NOT NULL,
    updated_at TEXT NOT NULL
)
"""

_USERS_TABLE_SQL = """
CREATE TABLE IF NOT EXISTS app_users (
    id TEXT PRIMARY KEY,
    email TEXT UNIQUE NOT NULL,
    password_hash TEXT NOT NULL,
    role TEXT NOT NULL DEFAULT 'associate'
)
"""

PRODUCT_COLUMNS = (
    "id, name, description, category, brand, sku, barcode, current_stock, min_stock_level, "
    "max_stock_level, cost_price, selling_price, supplier, location, created_at, updated_at"
)

# Ordre stable des colonnes modifiables, utilisé pour construire les UPDATE.
_UPDATABLE_COLUMNS = tuple(sorted(EDITABLE_FIELDS))


@contextmanager
def _guard(action: str) -> Iterator[None]:
    try:
        yield
    except SQLAlchemyError as exc:
        logger.warning("Échec SQL pendant %s: %s", action, exc)
        raise StoreUnavailableError(f"Base de données indisponible ({action}).") from exc


def _bind_product(product: Product) -> dict[str, Any]:
    params: dict[str, Any] = {
        "id": product.id,
        "name": product.name,
        "description": product.description,
        "category": product.category,
        "brand": product.brand,
        "sku": product.sku,
        "barcode": product.barcode,
        "current_stock": product.current_stock,
        "min_stock_level": product.min_stock_level,
        "max_stock_level": product.max_stock_level,
        "supplier": product.supplier,
        "location": product.location,
        "created_at": product.created_at.isoformat(),
        "updated_at": product.updated_at.isoformat(),
    }
    # Les montants voyagent en chaîne : SQLite ne sait pas lier un Decimal.
    for key in PRODUCT_MONEY_FIELDS:
        params[key] = str(getattr(product, key))
    return params


class SqlCatalogStore:
    """CatalogStore backed by the ``products`` table."""

    def __init__(self, engine: Engine | None = None):
        self._engine = engine

    @property
    def engine(self) -> Engine:
        return self._engine or get_engine()

    def ensure_schema(self) -> None:
        with _guard("création du schéma"):
            exec_sql(_PRODUCTS_TABLE_SQL, engine=self.engine)

    def list(self) -> list[Product]:
        with _guard("lecture du catalogue"):
            df = query_df(
                f"SELECT {PRODUCT_COLUMNS} FROM products ORDER BY created_at ASC, id ASC",
                engine=self.engine,
            )
        if df.empty:
            return []
        return [product_from_record(record) for record in df.to_dict("records")]

    def get(self, product_id: str) -> Product | None:
        with _guard("lecture d'un produit"):
            df = query_df(
                f"SELECT {PRODUCT_COLUMNS} FROM products WHERE id = :pid",
                params={"pid": str(product_id)},
                engine=self.engine,
            )
        if df.empty:
            return None
        return product_from_record(df.iloc[0].to_dict())

    def create(self, fields: Mapping[str, Any]) -> Product:
        now = next_timestamp()
        product = product_from_record(
            {**normalize_fields(fields), "id": uuid.uuid4().hex, "created_at": now, "updated_at": now}
        )
        placeholders = ", ".join(f":{column.strip()}" for column in PRODUCT_COLUMNS.split(","))
        with _guard("création d'un produit"):
            exec_sql(
                f"INSERT INTO products ({PRODUCT_COLUMNS}) VALUES ({placeholders})",
                _bind_product(product),
                engine=self.engine,
            )
        return product

    def update(self, product_id: str, patch: Mapping[str, Any]) -> Product | None:
        changes = normalize_fields(patch)
        with _guard("mise à jour d'un produit"):
            with self.engine.begin() as conn:
                row = conn.execute(
                    text("SELECT updated_at FROM products WHERE id = :pid"),
                    {"pid": str(product_id)},
                ).fetchone()
                if row is None:
                    return None
                params: dict[str, Any] = {
                    "pid": str(product_id),
                    "updated_at": next_timestamp(as_timestamp(row[0])).isoformat(),
                }
                assignments = ["updated_at = :updated_at"]
                for column in _UPDATABLE_COLUMNS:
                    if column not in changes:
                        continue
                    value = changes[column]
                    params[column] = str(value) if column in PRODUCT_MONEY_FIELDS else value
                    assignments.append(f"{column} = :{column}")
                conn.execute(
                    text(f"UPDATE products SET {', '.join(assignments)} WHERE id = :pid"),
                    params,
                )
        return self.get(product_id)

    def adjust_stock(self, product_id: str, delta: int) -> Product | None:
        with _guard("ajustement de stock"):
            with self.engine.begin() as conn:
                row = conn.execute(
                    text("SELECT updated_at FROM products WHERE id = :pid"),
                    {"pid": str(product_id)},
                ).fetchone()
                if row is None:
                    return None
                # Incrément côté base : pas de fenêtre lecture/écriture sur le stock.
                conn.execute(
                    text(
                        """
                        UPDATE products
                        SET current_stock = current_stock + :delta,
                            updated_at = :updated_at
                        WHERE id = :pid
                        """
                    ),
                    {
                        "pid": str(product_id),
                        "delta": int(delta),
                        "updated_at": next_timestamp(as_timestamp(row[0])).isoformat(),
                    },
                )
        return self.get(product_id)

    def delete(self, product_id: str) -> bool:
        with _guard("suppression d'un produit"):
            deleted = exec_sql(
                "DELETE FROM products WHERE id = :pid",
                {"pid": str(product_id)},
                engine=self.engine,
            )
        return deleted > 0


class SqlUserStore:
    """UserStore backed by the ``app_users`` table."""

    def __init__(self, engine: Engine | None = None):
        self._engine = engine

    @property
    def engine(self) -> Engine:
        return self._engine or get_engine()

    def ensure_schema(self) -> None:
        with _guard("création du schéma"):
            exec_sql(_USERS_TABLE_SQL, engine=self.engine)

    def get_by_email(self, email: str) -> UserCredentials | None:
        with _guard("lecture d'un utilisateur"):
            df = query_df(
                "SELECT id, email, role, password_hash FROM app_users WHERE email = :email LIMIT 1",
                params={"email": email},
                engine=self.engine,
            )
        if df.empty:
            return None
        row = df.iloc[0]
        return UserCredentials(
            user=User(id=str(row["id"]), email=str(row["email"]), role=str(row["role"])),
            password_hash=str(row["password_hash"]),
        )

    def add(self, email: str, password_hash: str, role: str) -> UserCredentials:
        user = User(id=uuid.uuid4().hex, email=email, role=role)
        with _guard("création d'un utilisateur"):
            exec_sql(
                """
                INSERT INTO app_users (id, email, password_hash, role)
                VALUES (:id, :email, :password_hash, :role)
                """,
                {"id": user.id, "email": email, "password_hash": password_hash, "role": role},
                engine=self.engine,
            )
        return UserCredentials(user=user, password_hash=password_hash)

    def count(self) -> int:
        with _guard("comptage des utilisateurs"):
            df = query_df("SELECT COUNT(*) AS total FROM app_users", engine=self.engine)
        if df.empty:
            return 0
        return int(df.iloc[0]["total"])


__all__ = ["SqlCatalogStore", "SqlUserStore"]
