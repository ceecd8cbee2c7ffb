"""Restock endpoints."""

from __future__ import annotations

from fastapi import APIRouter, Depends

from backend.api.errors import to_http_exception
from backend.dependencies.stores import get_catalog_store, get_session
from backend.schemas.catalog import ProductOut
from backend.schemas.restock import (
    RestockCommitRequest,
    RestockCommitResponse,
    RestockItemOut,
    RestockListResponse,
)
from core.errors import StockpileError
from core.repositories.base import CatalogStore
from core.restock_service import commit_restock, list_restock_items
from core.session import Session

router = APIRouter(prefix="/restock", tags=["restock"])


@router.get("", response_model=RestockListResponse)
def get_restock_items(catalog: CatalogStore = Depends(get_catalog_store)) -> RestockListResponse:
    try:
        items = list_restock_items(catalog)
    except StockpileError as exc:
        raise to_http_exception(exc) from exc
    return RestockListResponse(items=[RestockItemOut.from_item(item) for item in items])


@router.post("/{product_id}", response_model=RestockCommitResponse)
def post_restock(
    product_id: str,
    payload: RestockCommitRequest,
    session: Session = Depends(get_session),
    catalog: CatalogStore = Depends(get_catalog_store),
) -> RestockCommitResponse:
    try:
        product = commit_restock(session, catalog, product_id, payload.quantity)
    except StockpileError as exc:
        raise to_http_exception(exc) from exc
    return RestockCommitResponse(product=ProductOut.from_product(product), quantity_added=payload.quantity)
