"""Dashboard aggregations for the SPA home screen."""

from __future__ import annotations

from typing import Any, Dict

from backend.schemas.catalog import ProductOut
from core.inventory_policy import build_dashboard_stats
from core.repositories.base import CatalogStore


def fetch_dashboard_metrics(catalog: CatalogStore) -> Dict[str, Any]:
    """Compteurs du tableau de bord et cinq premières alertes de stock bas."""

    stats = build_dashboard_stats(catalog.list())
    return {
        "total_products": stats.total_products,
        "low_stock_items": stats.low_stock_items,
        "out_of_stock_items": stats.out_of_stock_items,
        "total_value": stats.total_value,
        "low_stock_products": [ProductOut.from_product(product) for product in stats.low_stock_products],
    }


__all__ = ["fetch_dashboard_metrics"]
