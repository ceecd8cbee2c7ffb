from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from typing import List, Optional

from pydantic import BaseModel, Field

from core.inventory_policy import STATUS_LABELS, classify_stock
from core.repositories.products import Product


class ProductBase(BaseModel):
    name: str = Field(..., min_length=1, max_length=255)
    description: str = ""
    category: str = Field("", max_length=120)
    brand: str = ""
    sku: str = Field("", description="Laisser vide pour générer automatiquement")
    barcode: Optional[str] = None
    current_stock: int = Field(0, ge=0)
    min_stock_level: int = Field(0, ge=0)
    max_stock_level: int = Field(0, ge=0)
    cost_price: Decimal = Field(Decimal("0"), ge=0)
    selling_price: Decimal = Field(Decimal("0"), ge=0)
    supplier: str = ""
    location: str = ""


class ProductCreate(ProductBase):
    pass


class ProductUpdate(BaseModel):
    name: Optional[str] = Field(default=None, min_length=1, max_length=255)
    description: Optional[str] = None
    category: Optional[str] = Field(default=None, max_length=120)
    brand: Optional[str] = None
    sku: Optional[str] = None
    barcode: Optional[str] = None
    current_stock: Optional[int] = Field(default=None, ge=0)
    min_stock_level: Optional[int] = Field(default=None, ge=0)
    max_stock_level: Optional[int] = Field(default=None, ge=0)
    cost_price: Optional[Decimal] = Field(default=None, ge=0)
    selling_price: Optional[Decimal] = Field(default=None, ge=0)
    supplier: Optional[str] = None
    location: Optional[str] = None


class ProductOut(BaseModel):
    """Projection renvoyée au client ; les valeurs stockées ne sont pas revalidées."""

    id: str
    name: str
    description: str = ""
    category: str = ""
    brand: str = ""
    sku: str = ""
    barcode: Optional[str] = None
    current_stock: int
    min_stock_level: int
    max_stock_level: int
    cost_price: Decimal
    selling_price: Decimal
    supplier: str = ""
    location: str = ""
    created_at: datetime
    updated_at: datetime
    status: str = Field("in_stock")
    status_label: str = Field("In Stock")

    @classmethod
    def from_product(cls, product: Product) -> "ProductOut":
        status = classify_stock(product)
        return cls(
            id=product.id,
            name=product.name,
            description=product.description,
            category=product.category,
            brand=product.brand,
            sku=product.sku,
            barcode=product.barcode,
            current_stock=product.current_stock,
            min_stock_level=product.min_stock_level,
            max_stock_level=product.max_stock_level,
            cost_price=product.cost_price,
            selling_price=product.selling_price,
            supplier=product.supplier,
            location=product.location,
            created_at=product.created_at,
            updated_at=product.updated_at,
            status=status.value,
            status_label=STATUS_LABELS[status],
        )


class ProductList(BaseModel):
    items: List[ProductOut]
    total: int


__all__ = ["ProductCreate", "ProductUpdate", "ProductOut", "ProductList"]
