"""Schemas for dashboard metrics."""

from __future__ import annotations

from decimal import Decimal
from typing import List

from pydantic import BaseModel

from backend.schemas.catalog import ProductOut


class DashboardResponse(BaseModel):
    total_products: int
    low_stock_items: int
    out_of_stock_items: int
    total_value: Decimal
    low_stock_products: List[ProductOut]


__all__ = ['DashboardResponse']
