"""Traduction des erreurs métier en réponses HTTP."""

from __future__ import annotations

from fastapi import HTTPException, status

from core.errors import (
    InvalidCredentialsError,
    NotFoundError,
    PermissionDeniedError,
    StockpileError,
    StoreUnavailableError,
    ValidationError,
)

_STATUS_BY_ERROR: tuple[tuple[type[StockpileError], int], ...] = (
    (NotFoundError, status.HTTP_404_NOT_FOUND),
    (InvalidCredentialsError, status.HTTP_401_UNAUTHORIZED),
    (PermissionDeniedError, status.HTTP_403_FORBIDDEN),
    (StoreUnavailableError, status.HTTP_503_SERVICE_UNAVAILABLE),
    (ValidationError, status.HTTP_400_BAD_REQUEST),
)


def to_http_exception(exc: StockpileError) -> HTTPException:
    for error_type, status_code in _STATUS_BY_ERROR:
        if isinstance(exc, error_type):
            return HTTPException(status_code=status_code, detail=str(exc))
    return HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=str(exc))
