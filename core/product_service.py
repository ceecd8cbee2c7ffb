"""Services de gestion du catalogue : consultation, ajout, modification, suppression."""

from __future__ import annotations

import logging
import time
from typing import Any, Mapping

from .access_policy import CatalogAction, ensure_permitted
from .errors import NotFoundError, ValidationError
from .inventory_policy import StockFilter, filter_products
from .repositories.base import CatalogStore
from .repositories.products import (
    EDITABLE_FIELDS,
    PRODUCT_INT_FIELDS,
    PRODUCT_MONEY_FIELDS,
    Product,
    as_money,
    as_quantity,
)
from .session import Session

logger = logging.getLogger(__name__)

NULLABLE_FIELDS = frozenset({"barcode"})

PRODUCT_CATEGORIES: tuple[str, ...] = (
    "Hardware",
    "Tools",
    "Electrical",
    "Plumbing",
    "Paint & Supplies",
    "Fasteners",
    "Building Materials",
    "Safety Equipment",
    "Garden & Outdoor",
    "Other",
)


def generate_sku(category: str | None, *, timestamp_ms: int | None = None) -> str:
    """SKU de la forme ``TOO-123456`` : trois lettres de catégorie puis six chiffres d'horodatage."""

    prefix = category[:3].upper() if category else "PRD"
    stamp = str(timestamp_ms if timestamp_ms is not None else int(time.time() * 1000))
    return f"{prefix}-{stamp[-6:]}"


def _validate_fields(fields: Mapping[str, Any], *, creating: bool) -> None:
    for key, value in fields.items():
        # Seul le code-barres accepte null.
        if value is None and key in EDITABLE_FIELDS and key not in NULLABLE_FIELDS:
            raise ValidationError(f"{key} ne peut pas être nul.")
    if creating or "name" in fields:
        if not str(fields.get("name") or "").strip():
            raise ValidationError("Le nom du produit est obligatoire.")
    for key in PRODUCT_INT_FIELDS:
        if key in fields and fields[key] is not None and as_quantity(fields[key]) < 0:
            raise ValidationError(f"{key} doit être positif ou nul.")
    for key in PRODUCT_MONEY_FIELDS:
        if key in fields and fields[key] is not None and as_money(fields[key]) < 0:
            raise ValidationError(f"{key} doit être positif ou nul.")


def list_products(
    catalog: CatalogStore,
    *,
    search: str | None = None,
    category: str | None = None,
    stock: StockFilter | str = StockFilter.ALL,
) -> list[Product]:
    return filter_products(catalog.list(), search=search, category=category, stock=stock)


def get_product(catalog: CatalogStore, product_id: str) -> Product:
    product = catalog.get(product_id)
    if product is None:
        raise NotFoundError(product_id)
    return product


def create_product(session: Session, catalog: CatalogStore, fields: Mapping[str, Any]) -> Product:
    """Ajoute un produit (administrateurs uniquement). Le SKU est généré s'il est vide."""

    user = ensure_permitted(session.current_user(), CatalogAction.CREATE)
    _validate_fields(fields, creating=True)

    payload = dict(fields)
    payload["name"] = str(payload["name"]).strip()
    if not str(payload.get("sku") or "").strip():
        payload["sku"] = generate_sku(payload.get("category"))

    product = catalog.create(payload)
    logger.info("Produit %s (%s) créé par %s", product.id, product.sku, user.email)
    return product


def update_product(
    session: Session,
    catalog: CatalogStore,
    product_id: str,
    patch: Mapping[str, Any],
) -> Product:
    ensure_permitted(session.current_user(), CatalogAction.UPDATE)
    _validate_fields(patch, creating=False)
    updated = catalog.update(product_id, patch)
    if updated is None:
        raise NotFoundError(product_id)
    return updated


def delete_product(session: Session, catalog: CatalogStore, product_id: str) -> bool:
    """Supprime un produit. Retourne False si l'identifiant n'existe pas."""

    user = ensure_permitted(session.current_user(), CatalogAction.DELETE)
    removed = catalog.delete(product_id)
    if removed:
        logger.info("Produit %s supprimé par %s", product_id, user.email)
    return removed


__all__ = [
    "PRODUCT_CATEGORIES",
    "generate_sku",
    "list_products",
    "get_product",
    "create_product",
    "update_product",
    "delete_product",
]
