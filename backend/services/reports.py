"""Reporting aggregations for analytics and CSV exports."""

from __future__ import annotations

from dataclasses import asdict
from datetime import date
from typing import Any, Dict, Tuple

from backend.schemas.catalog import ProductOut
from core.inventory_policy import build_report
from core.report_export import format_report_csv, report_filename
from core.repositories.base import CatalogStore


def build_overview(catalog: CatalogStore) -> Dict[str, Any]:
    """Assemble KPI, répartition par catégorie, niveaux de stock et alertes."""

    report = build_report(catalog.list())
    return {
        "kpis": {
            "total_products": report.total_products,
            "total_inventory_value": report.total_inventory_value,
            "low_stock_count": report.low_stock_count,
            "out_of_stock_count": report.out_of_stock_count,
        },
        "category_breakdown": [asdict(entry) for entry in report.category_breakdown],
        "stock_levels": [asdict(level) for level in report.stock_levels],
        "low_stock_alerts": [ProductOut.from_product(product) for product in report.low_stock_alerts],
    }


def export_report(catalog: CatalogStore, *, on: date | None = None) -> Tuple[str, str]:
    """Return (filename, csv payload) for the inventory report download."""

    report = build_report(catalog.list())
    return report_filename(on), format_report_csv(report)


__all__ = ["build_overview", "export_report"]
