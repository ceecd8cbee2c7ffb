"""
Product Repository - Product entity and record conversions shared by the stores.
"""

from __future__ import annotations

import math
from dataclasses import asdict, dataclass
from datetime import datetime, timedelta, timezone
from decimal import Decimal, InvalidOperation, ROUND_HALF_UP
from typing import Any, Mapping

CENT = Decimal("0.01")

PRODUCT_TEXT_FIELDS: tuple[str, ...] = (
    "name",
    "description",
    "category",
    "brand",
    "sku",
    "supplier",
    "location",
)
PRODUCT_INT_FIELDS: tuple[str, ...] = ("current_stock", "min_stock_level", "max_stock_level")
PRODUCT_MONEY_FIELDS: tuple[str, ...] = ("cost_price", "selling_price")
EDITABLE_FIELDS = frozenset(PRODUCT_TEXT_FIELDS + PRODUCT_INT_FIELDS + PRODUCT_MONEY_FIELDS + ("barcode",))


@dataclass(frozen=True)
class Product:
    """Product entity. Stores hand out immutable snapshots."""

    id: str
    name: str
    category: str
    sku: str
    current_stock: int
    min_stock_level: int
    max_stock_level: int
    cost_price: Decimal
    selling_price: Decimal
    created_at: datetime
    updated_at: datetime
    description: str = ""
    brand: str = ""
    barcode: str | None = None
    supplier: str = ""
    location: str = ""


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def next_timestamp(previous: datetime | None = None) -> datetime:
    """Horodatage courant, strictement postérieur à ``previous`` lorsqu'il est fourni."""

    now = utc_now()
    if previous is not None and now <= previous:
        return previous + timedelta(microseconds=1)
    return now


def _is_missing(value: Any) -> bool:
    return value is None or (isinstance(value, float) and math.isnan(value))


def as_money(value: Any) -> Decimal:
    """Convertit un montant (str, float, Decimal...) en Decimal arrondi au centime."""

    if _is_missing(value):
        return Decimal("0.00")
    try:
        return Decimal(str(value)).quantize(CENT, rounding=ROUND_HALF_UP)
    except (InvalidOperation, TypeError, ValueError):
        return Decimal("0.00")


def as_quantity(value: Any) -> int:
    if _is_missing(value):
        return 0
    try:
        return int(Decimal(str(value)))
    except (InvalidOperation, TypeError, ValueError):
        return 0


def as_timestamp(value: Any) -> datetime:
    if _is_missing(value):
        return utc_now()
    if isinstance(value, datetime):
        stamp = value.to_pydatetime() if hasattr(value, "to_pydatetime") else value
    else:
        # toISOString() côté navigateur produit un suffixe "Z".
        stamp = datetime.fromisoformat(str(value).strip().replace("Z", "+00:00"))
    if stamp.tzinfo is None:
        stamp = stamp.replace(tzinfo=timezone.utc)
    return stamp


def _as_text(value: Any) -> str:
    return "" if _is_missing(value) else str(value)


def normalize_fields(fields: Mapping[str, Any]) -> dict[str, Any]:
    """Filtre et convertit un patch/une création vers les types de l'entité."""

    cleaned: dict[str, Any] = {}
    for key, value in fields.items():
        if key not in EDITABLE_FIELDS:
            continue
        if key in PRODUCT_INT_FIELDS:
            cleaned[key] = as_quantity(value)
        elif key in PRODUCT_MONEY_FIELDS:
            cleaned[key] = as_money(value)
        elif key == "barcode":
            text_value = _as_text(value).strip()
            cleaned[key] = text_value or None
        else:
            cleaned[key] = _as_text(value)
    return cleaned


def product_from_record(record: Mapping[str, Any]) -> Product:
    """Construit un Product depuis un dict JSON ou une ligne SQL."""

    barcode = record.get("barcode")
    return Product(
        id=str(record["id"]),
        name=_as_text(record.get("name")),
        description=_as_text(record.get("description")),
        category=_as_text(record.get("category")),
        brand=_as_text(record.get("brand")),
        sku=_as_text(record.get("sku")),
        barcode=None if _is_missing(barcode) or barcode == "" else str(barcode),
        current_stock=as_quantity(record.get("current_stock")),
        min_stock_level=as_quantity(record.get("min_stock_level")),
        max_stock_level=as_quantity(record.get("max_stock_level")),
        cost_price=as_money(record.get("cost_price")),
        selling_price=as_money(record.get("selling_price")),
        supplier=_as_text(record.get("supplier")),
        location=_as_text(record.get("location")),
        created_at=as_timestamp(record.get("created_at")),
        updated_at=as_timestamp(record.get("updated_at")),
    )


def product_to_record(product: Product) -> dict[str, Any]:
    """Sérialise un Product en dict JSON (montants en chaîne pour garder les centimes)."""

    record = asdict(product)
    for key in PRODUCT_MONEY_FIELDS:
        record[key] = str(record[key])
    record["created_at"] = product.created_at.isoformat()
    record["updated_at"] = product.updated_at.isoformat()
    return record


__all__ = [
    "Product",
    "EDITABLE_FIELDS",
    "as_money",
    "next_timestamp",
    "normalize_fields",
    "product_from_record",
    "product_to_record",
]
