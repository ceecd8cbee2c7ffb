"""Moteur de politique de stock : statuts, réassort, valorisation et rapports.

Toutes les fonctions de ce module sont pures : elles lisent un instantané du
catalogue (séquence de ``Product``) et ne lèvent aucune erreur métier. Les
valeurs aberrantes (stock négatif, min > max) sont tolérées telles quelles.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal
from enum import Enum
from typing import Iterable, Sequence

from core.repositories.products import Product

MIN_ORDER_QUANTITY = 10  # Quantité minimale de commande, non configurable
LOW_STOCK_ALERT_LIMIT = 5
HIGH_URGENCY_RATIO = Decimal("0.5")
PERCENT_STEP = Decimal("0.01")


class StockStatus(str, Enum):
    OUT_OF_STOCK = "out_of_stock"
    LOW_STOCK = "low_stock"
    IN_STOCK = "in_stock"


class Urgency(str, Enum):
    CRITICAL = "critical"
    HIGH = "high"
    MEDIUM = "medium"


class StockFilter(str, Enum):
    ALL = "all"
    LOW = "low"
    OUT = "out"


STATUS_LABELS = {
    StockStatus.OUT_OF_STOCK: "Out of Stock",
    StockStatus.LOW_STOCK: "Low Stock",
    StockStatus.IN_STOCK: "In Stock",
}

URGENCY_LABELS = {
    Urgency.CRITICAL: "Critical - Out of Stock",
    Urgency.HIGH: "High Priority",
    Urgency.MEDIUM: "Medium Priority",
}


@dataclass(frozen=True)
class CategoryBreakdown:
    category: str
    count: int
    value: Decimal
    share: float
    value_share: Decimal = Decimal("0.00")  # Part de la valeur totale, en pourcentage


@dataclass(frozen=True)
class StockLevel:
    level: str
    label: str
    count: int
    percentage: float


@dataclass(frozen=True)
class DashboardStats:
    total_products: int
    low_stock_items: int
    out_of_stock_items: int
    total_value: Decimal
    low_stock_products: list[Product]


@dataclass(frozen=True)
class InventoryReport:
    total_products: int
    total_inventory_value: Decimal
    low_stock_count: int
    out_of_stock_count: int
    category_breakdown: list[CategoryBreakdown]
    stock_levels: list[StockLevel]
    low_stock_alerts: list[Product]


@dataclass(frozen=True)
class RestockItem:
    product: Product
    suggested_quantity: int
    actual_quantity: int
    urgency: Urgency

    @property
    def estimated_cost(self) -> Decimal:
        return self.actual_quantity * self.product.cost_price


# --------------------------------------------------------------------------
# Classification
# --------------------------------------------------------------------------


def classify_stock(product: Product) -> StockStatus:
    """Statut de stock, évalué dans l'ordre : épuisé, bas, disponible."""

    if product.current_stock == 0:
        return StockStatus.OUT_OF_STOCK
    if product.current_stock <= product.min_stock_level:
        return StockStatus.LOW_STOCK
    return StockStatus.IN_STOCK


def needs_restock(product: Product) -> bool:
    return classify_stock(product) is not StockStatus.IN_STOCK


# --------------------------------------------------------------------------
# Réassort
# --------------------------------------------------------------------------


def restock_deficit(product: Product) -> int:
    """Écart brut au plus grand des deux seuils (peut être nul ou négatif)."""

    return max(
        product.max_stock_level - product.current_stock,
        product.min_stock_level - product.current_stock,
    )


def suggest_restock_quantity(product: Product) -> int:
    """Quantité suggérée : l'écart brut, relevé au minimum de commande.

    Le plancher ne réduit jamais une suggestion : ``max(écart, 10)``.
    """

    return max(restock_deficit(product), MIN_ORDER_QUANTITY)


def initial_restock_quantity(product: Product) -> int:
    """Valeur initiale proposée à l'opérateur avant validation."""

    deficit = restock_deficit(product)
    return deficit if deficit > 0 else MIN_ORDER_QUANTITY


def adjust_quantity(quantity: int, step: int = 0) -> int:
    """Applique un incrément/décrément saisi par l'opérateur, saturé à 0."""

    return max(0, int(quantity) + int(step))


def urgency_level(product: Product) -> Urgency:
    if product.current_stock == 0:
        return Urgency.CRITICAL
    if product.current_stock <= product.min_stock_level * HIGH_URGENCY_RATIO:
        return Urgency.HIGH
    return Urgency.MEDIUM


def restock_candidates(products: Iterable[Product]) -> list[RestockItem]:
    """Produits épuisés ou bas, du stock le plus faible au plus élevé."""

    flagged = [product for product in products if needs_restock(product)]
    flagged.sort(key=lambda product: product.current_stock)
    return [
        RestockItem(
            product=product,
            suggested_quantity=suggest_restock_quantity(product),
            actual_quantity=initial_restock_quantity(product),
            urgency=urgency_level(product),
        )
        for product in flagged
    ]


# --------------------------------------------------------------------------
# Valorisation et agrégats
# --------------------------------------------------------------------------


def line_value(product: Product) -> Decimal:
    return product.current_stock * product.cost_price


def inventory_value(products: Iterable[Product]) -> Decimal:
    """Valeur d'achat du stock, en Decimal pour ne perdre aucun centime."""

    return sum((line_value(product) for product in products), Decimal("0.00"))


def low_stock_alerts(products: Iterable[Product], limit: int = LOW_STOCK_ALERT_LIMIT) -> list[Product]:
    """Premiers produits en stock bas, dans l'ordre de l'instantané."""

    alerts: list[Product] = []
    for product in products:
        if len(alerts) >= limit:
            break
        if classify_stock(product) is StockStatus.LOW_STOCK:
            alerts.append(product)
    return alerts


def _percentage(count: int, total: int) -> float:
    if total <= 0:
        return 0.0
    return 100.0 * count / total


def _value_share(value: Decimal, total_value: Decimal) -> Decimal:
    if total_value <= 0:
        return Decimal("0.00")
    return (value * 100 / total_value).quantize(PERCENT_STEP, rounding=ROUND_HALF_UP)


def category_breakdown(products: Sequence[Product]) -> list[CategoryBreakdown]:
    """Regroupe par catégorie brute (sensible à la casse), tri par nombre décroissant.

    ``share`` rapporte le nombre de produits au total, ``value_share`` la valeur
    de la catégorie à la valeur totale (0 lorsque le stock ne vaut rien).

    Le tri est stable : à égalité, l'ordre de première apparition est conservé.
    """

    counts: dict[str, int] = {}
    values: dict[str, Decimal] = {}
    for product in products:
        counts[product.category] = counts.get(product.category, 0) + 1
        values[product.category] = values.get(product.category, Decimal("0.00")) + line_value(product)

    total = len(products)
    total_value = sum(values.values(), Decimal("0.00"))
    entries = [
        CategoryBreakdown(
            category=category,
            count=count,
            value=values[category],
            share=_percentage(count, total),
            value_share=_value_share(values[category], total_value),
        )
        for category, count in counts.items()
    ]
    entries.sort(key=lambda entry: entry.count, reverse=True)
    return entries


def stock_level_distribution(products: Sequence[Product]) -> list[StockLevel]:
    total = len(products)
    counts = {status: 0 for status in StockStatus}
    for product in products:
        counts[classify_stock(product)] += 1

    buckets = (
        ("good", "Good Stock", StockStatus.IN_STOCK),
        ("low", "Low Stock", StockStatus.LOW_STOCK),
        ("out", "Out of Stock", StockStatus.OUT_OF_STOCK),
    )
    return [
        StockLevel(level=level, label=label, count=counts[status], percentage=_percentage(counts[status], total))
        for level, label, status in buckets
    ]


def build_dashboard_stats(products: Sequence[Product]) -> DashboardStats:
    statuses = [classify_stock(product) for product in products]
    return DashboardStats(
        total_products=len(products),
        low_stock_items=statuses.count(StockStatus.LOW_STOCK),
        out_of_stock_items=statuses.count(StockStatus.OUT_OF_STOCK),
        total_value=inventory_value(products),
        low_stock_products=low_stock_alerts(products),
    )


def build_report(products: Sequence[Product]) -> InventoryReport:
    """Assemble l'ensemble des agrégats affichés par l'écran Rapports."""

    products = list(products)
    statuses = [classify_stock(product) for product in products]
    return InventoryReport(
        total_products=len(products),
        total_inventory_value=inventory_value(products),
        low_stock_count=statuses.count(StockStatus.LOW_STOCK),
        out_of_stock_count=statuses.count(StockStatus.OUT_OF_STOCK),
        category_breakdown=category_breakdown(products),
        stock_levels=stock_level_distribution(products),
        low_stock_alerts=low_stock_alerts(products),
    )


# --------------------------------------------------------------------------
# Navigation dans l'inventaire
# --------------------------------------------------------------------------


def filter_products(
    products: Iterable[Product],
    *,
    search: str | None = None,
    category: str | None = None,
    stock: StockFilter | str = StockFilter.ALL,
) -> list[Product]:
    """Filtre de l'écran inventaire : recherche nom/SKU/marque, catégorie exacte, état du stock."""

    stock_filter = StockFilter(stock)
    needle = (search or "").lower()
    selected: list[Product] = []
    for product in products:
        if needle and not any(
            needle in field.lower() for field in (product.name, product.sku, product.brand)
        ):
            continue
        if category and product.category != category:
            continue
        status = classify_stock(product)
        if stock_filter is StockFilter.LOW and status is not StockStatus.LOW_STOCK:
            continue
        if stock_filter is StockFilter.OUT and status is not StockStatus.OUT_OF_STOCK:
            continue
        selected.append(product)
    return selected


__all__ = [
    "MIN_ORDER_QUANTITY",
    "StockStatus",
    "StockFilter",
    "Urgency",
    "CategoryBreakdown",
    "StockLevel",
    "DashboardStats",
    "InventoryReport",
    "RestockItem",
    "classify_stock",
    "needs_restock",
    "restock_deficit",
    "suggest_restock_quantity",
    "initial_restock_quantity",
    "adjust_quantity",
    "urgency_level",
    "restock_candidates",
    "line_value",
    "inventory_value",
    "low_stock_alerts",
    "category_breakdown",
    "stock_level_distribution",
    "build_dashboard_stats",
    "build_report",
    "filter_products",
]
