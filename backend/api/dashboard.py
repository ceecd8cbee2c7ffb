from __future__ import annotations

from fastapi import APIRouter, Depends

from backend.api.errors import to_http_exception
from backend.dependencies.stores import get_catalog_store
from backend.schemas.dashboard import DashboardResponse
from backend.services import dashboard as dashboard_service
from core.errors import StockpileError
from core.repositories.base import CatalogStore

router = APIRouter(prefix="/dashboard", tags=["dashboard"])


@router.get("", response_model=DashboardResponse)
def get_dashboard(catalog: CatalogStore = Depends(get_catalog_store)) -> DashboardResponse:
    try:
        metrics = dashboard_service.fetch_dashboard_metrics(catalog)
    except StockpileError as exc:
        raise to_http_exception(exc) from exc
    return DashboardResponse(**metrics)
