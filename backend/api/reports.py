"""Reports API router."""

from __future__ import annotations

from fastapi import APIRouter, Depends
from fastapi.responses import StreamingResponse

from backend.api.errors import to_http_exception
from backend.dependencies.stores import get_catalog_store
from backend.schemas.reports import ReportsOverview
from backend.services import reports as reports_service
from core.errors import StockpileError
from core.report_export import EXPORT_MEDIA_TYPE
from core.repositories.base import CatalogStore

router = APIRouter(prefix="/reports", tags=["reports"])


@router.get("/overview", response_model=ReportsOverview)
def get_reports_overview(catalog: CatalogStore = Depends(get_catalog_store)):
    """Return aggregated analytics for the reports workspace."""

    try:
        data = reports_service.build_overview(catalog)
    except StockpileError as exc:
        raise to_http_exception(exc) from exc
    return ReportsOverview(**data)


@router.get("/export")
def export_inventory_report(catalog: CatalogStore = Depends(get_catalog_store)):
    """Stream the inventory report as a CSV download."""

    try:
        filename, payload = reports_service.export_report(catalog)
    except StockpileError as exc:
        raise to_http_exception(exc) from exc

    return StreamingResponse(
        iter([payload]),
        media_type=EXPORT_MEDIA_TYPE,
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )
