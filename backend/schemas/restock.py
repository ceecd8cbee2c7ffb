"""Schemas for restock endpoints."""

from __future__ import annotations

from decimal import Decimal
from typing import List

from pydantic import BaseModel, Field

from backend.schemas.catalog import ProductOut
from core.inventory_policy import URGENCY_LABELS, RestockItem


class RestockItemOut(BaseModel):
    product: ProductOut
    suggested_quantity: int
    actual_quantity: int
    urgency: str
    urgency_label: str
    estimated_cost: Decimal

    @classmethod
    def from_item(cls, item: RestockItem) -> "RestockItemOut":
        return cls(
            product=ProductOut.from_product(item.product),
            suggested_quantity=item.suggested_quantity,
            actual_quantity=item.actual_quantity,
            urgency=item.urgency.value,
            urgency_label=URGENCY_LABELS[item.urgency],
            estimated_cost=item.estimated_cost,
        )


class RestockListResponse(BaseModel):
    items: List[RestockItemOut]


class RestockCommitRequest(BaseModel):
    quantity: int = Field(..., ge=0, description="Unités ajoutées au stock courant")


class RestockCommitResponse(BaseModel):
    product: ProductOut
    quantity_added: int


__all__ = [
    "RestockItemOut",
    "RestockListResponse",
    "RestockCommitRequest",
    "RestockCommitResponse",
]
