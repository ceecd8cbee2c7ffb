"""Catalogue endpoints: browse, create, edit and delete products."""

from __future__ import annotations

from typing import List

from fastapi import APIRouter, Depends, HTTPException, Query, status

from backend.api.errors import to_http_exception
from backend.dependencies.stores import get_catalog_store, get_session
from backend.schemas.catalog import ProductCreate, ProductList, ProductOut, ProductUpdate
from core import product_service
from core.errors import StockpileError
from core.inventory_policy import StockFilter
from core.repositories.base import CatalogStore
from core.session import Session

router = APIRouter(prefix="/products", tags=["catalog"])


@router.get("", response_model=ProductList)
def list_products(
    search: str | None = Query(default=None, description="Nom, SKU ou marque (insensible à la casse)"),
    category: str | None = Query(default=None),
    stock: StockFilter = Query(default=StockFilter.ALL),
    catalog: CatalogStore = Depends(get_catalog_store),
) -> ProductList:
    try:
        products = product_service.list_products(catalog, search=search, category=category, stock=stock)
    except StockpileError as exc:
        raise to_http_exception(exc) from exc
    items = [ProductOut.from_product(product) for product in products]
    return ProductList(items=items, total=len(items))


@router.get("/categories", response_model=List[str])
def list_categories() -> List[str]:
    return list(product_service.PRODUCT_CATEGORIES)


@router.get("/{product_id}", response_model=ProductOut)
def read_product(product_id: str, catalog: CatalogStore = Depends(get_catalog_store)) -> ProductOut:
    try:
        product = product_service.get_product(catalog, product_id)
    except StockpileError as exc:
        raise to_http_exception(exc) from exc
    return ProductOut.from_product(product)


@router.post("", response_model=ProductOut, status_code=status.HTTP_201_CREATED)
def create_product(
    payload: ProductCreate,
    session: Session = Depends(get_session),
    catalog: CatalogStore = Depends(get_catalog_store),
) -> ProductOut:
    try:
        product = product_service.create_product(session, catalog, payload.model_dump())
    except StockpileError as exc:
        raise to_http_exception(exc) from exc
    return ProductOut.from_product(product)


@router.patch("/{product_id}", response_model=ProductOut)
def update_product(
    product_id: str,
    payload: ProductUpdate,
    session: Session = Depends(get_session),
    catalog: CatalogStore = Depends(get_catalog_store),
) -> ProductOut:
    patch = payload.model_dump(exclude_unset=True)
    try:
        product = product_service.update_product(session, catalog, product_id, patch)
    except StockpileError as exc:
        raise to_http_exception(exc) from exc
    return ProductOut.from_product(product)


@router.delete("/{product_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_product(
    product_id: str,
    session: Session = Depends(get_session),
    catalog: CatalogStore = Depends(get_catalog_store),
) -> None:
    try:
        removed = product_service.delete_product(session, catalog, product_id)
    except StockpileError as exc:
        raise to_http_exception(exc) from exc
    if not removed:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=f"Produit {product_id} introuvable.")
