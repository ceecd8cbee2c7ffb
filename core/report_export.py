"""Export CSV du rapport d'inventaire (répartition par catégorie et niveaux de stock)."""

from __future__ import annotations

import csv
import io
from datetime import date

from .inventory_policy import InventoryReport

EXPORT_MEDIA_TYPE = "text/csv"


def report_filename(on: date | None = None) -> str:
    """Nom du fichier téléchargé, horodaté au format ISO (``inventory-report-2024-05-01.csv``)."""

    stamp = (on or date.today()).isoformat()
    return f"inventory-report-{stamp}.csv"


def format_report_csv(report: InventoryReport) -> str:
    """Sérialise les deux sections du rapport.

    Les champs texte sont entre guillemets, les compteurs restent nus, les
    montants ont deux décimales et les pourcentages une décimale.
    """

    buffer = io.StringIO()
    writer = csv.writer(buffer, quoting=csv.QUOTE_NONNUMERIC, lineterminator="\n")

    buffer.write("Category,Product Count,Inventory Value\n")
    for entry in report.category_breakdown:
        writer.writerow([entry.category, entry.count, f"${entry.value:.2f}"])

    buffer.write("\nStock Level,Count,Percentage\n")
    if report.total_products > 0:
        for level in report.stock_levels:
            writer.writerow([level.label, level.count, f"{level.percentage:.1f}%"])

    return buffer.getvalue()


__all__ = ["EXPORT_MEDIA_TYPE", "format_report_csv", "report_filename"]
