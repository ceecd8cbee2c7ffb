"""Réassort : liste des produits à réapprovisionner et validation des quantités."""

from __future__ import annotations

import logging

from .access_policy import CatalogAction, ensure_permitted
from .errors import NotFoundError, ValidationError
from .inventory_policy import RestockItem, restock_candidates
from .repositories.base import CatalogStore
from .repositories.products import Product
from .session import Session

logger = logging.getLogger(__name__)


def list_restock_items(catalog: CatalogStore) -> list[RestockItem]:
    return restock_candidates(catalog.list())


def commit_restock(session: Session, catalog: CatalogStore, product_id: str, quantity: int) -> Product:
    """Ajoute ``quantity`` unités au stock courant en une seule mise à jour du store."""

    user = ensure_permitted(session.current_user(), CatalogAction.RESTOCK)
    quantity = int(quantity)
    if quantity < 0:
        raise ValidationError("La quantité de réassort ne peut pas être négative.")
    if quantity == 0:
        raise ValidationError("La quantité de réassort doit être supérieure à zéro.")

    product = catalog.adjust_stock(product_id, quantity)
    if product is None:
        raise NotFoundError(product_id)

    logger.info(
        "Réassort de %s unités sur %s par %s (stock: %s)",
        quantity,
        product_id,
        user.email,
        product.current_stock,
    )
    return product


__all__ = ["commit_restock", "list_restock_items"]
