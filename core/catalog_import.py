"""Import de produits depuis un fichier CSV (colonnes au nom des champs produit).

Le chargeur lit le fichier avec pandas puis, pour chaque ligne :
1. Normalise les en-têtes (``Current Stock`` -> ``current_stock``).
2. Ignore les lignes dont le SKU existe déjà dans le catalogue.
3. Crée le produit via ``product_service`` (contrôle de rôle inclus).
Les lignes refusées sont collectées dans un résumé, l'import ne s'interrompt pas."""

from __future__ import annotations  # Active les annotations différées

import logging  # Journalisation
from pathlib import Path  # Gestion de chemins
from typing import Any, Dict, Iterable, List, Mapping  # Types utilitaires

import pandas as pd  # Lecture du CSV

from .errors import ValidationError  # Saisie refusée
from .product_service import create_product  # Création avec contrôle de rôle
from .repositories.base import CatalogStore  # Interface du catalogue
from .repositories.products import EDITABLE_FIELDS  # Colonnes acceptées
from .session import Session  # Session de l'opérateur

logger = logging.getLogger(__name__)


def _empty_summary(rows_received: int = 0) -> Dict[str, Any]:
    return {
        "rows_received": rows_received,  # Lignes reçues
        "created": 0,  # Produits créés
        "skipped_duplicates": 0,  # SKU déjà présents
        "rejected_rows": [],  # Lignes refusées (numéro + motif)
    }


def _normalize_header(value: Any) -> str:
    return "_".join(str(value).strip().lower().split())  # "Min Stock Level" -> "min_stock_level"


def read_products_csv(path: str | Path) -> List[Dict[str, Any]]:
    """Charge le CSV en liste de dicts, en conservant uniquement les colonnes produit."""

    df = pd.read_csv(path, dtype=str, keep_default_na=False)  # Tout en texte, cellules vides = ""
    df.columns = [_normalize_header(column) for column in df.columns]
    if "name" not in df.columns:
        raise ValidationError("Colonne 'name' manquante dans le fichier importé.")
    kept = [column for column in df.columns if column in EDITABLE_FIELDS]
    return df[kept].to_dict(orient="records")


def import_products(
    session: Session,
    catalog: CatalogStore,
    rows: Iterable[Mapping[str, Any]],
) -> Dict[str, Any]:
    rows = list(rows)
    summary = _empty_summary(len(rows))
    known_skus = {product.sku for product in catalog.list() if product.sku}

    for line_number, row in enumerate(rows, start=2):  # Ligne 1 = en-têtes
        fields = {key: value for key, value in row.items() if value != ""}
        sku = str(fields.get("sku") or "").strip()
        if sku and sku in known_skus:
            summary["skipped_duplicates"] += 1
            continue
        try:
            product = create_product(session, catalog, fields)
        except ValidationError as exc:
            summary["rejected_rows"].append({"line": line_number, "reason": str(exc)})
            continue
        known_skus.add(product.sku)
        summary["created"] += 1

    logger.info(
        "Import catalogue: %s lignes, %s créées, %s doublons, %s rejetées",
        summary["rows_received"],
        summary["created"],
        summary["skipped_duplicates"],
        len(summary["rejected_rows"]),
    )
    return summary


__all__ = ["import_products", "read_products_csv"]
