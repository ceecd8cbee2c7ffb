"""Pydantic schemas for reporting endpoints."""

from __future__ import annotations

from decimal import Decimal
from typing import List

from pydantic import BaseModel, Field

from backend.schemas.catalog import ProductOut


class ReportKPIs(BaseModel):
    total_products: int = Field(0, ge=0)
    total_inventory_value: Decimal = Decimal("0.00")
    low_stock_count: int = Field(0, ge=0)
    out_of_stock_count: int = Field(0, ge=0)


class CategoryBreakdownEntry(BaseModel):
    category: str
    count: int
    value: Decimal
    share: float
    value_share: Decimal


class StockLevelEntry(BaseModel):
    level: str
    label: str
    count: int
    percentage: float


class ReportsOverview(BaseModel):
    kpis: ReportKPIs
    category_breakdown: List[CategoryBreakdownEntry]
    stock_levels: List[StockLevelEntry]
    low_stock_alerts: List[ProductOut]


__all__ = ["ReportsOverview"]
