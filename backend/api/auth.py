"""Authentication endpoints (OAuth2 password flow with JWT)."""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, HTTPException, status
from fastapi.security import OAuth2PasswordRequestForm

from backend.api.errors import to_http_exception
from backend.dependencies.security import (
    ACCESS_TOKEN_EXPIRE_MINUTES,
    AuthenticatedUser,
    get_current_user,
    oauth2_scheme,
    revoke_token,
    token_for_user,
)
from backend.dependencies.stores import get_user_store
from backend.schemas.auth import AuthenticatedUserPayload, TokenResponse
from core.errors import InvalidCredentialsError, StockpileError
from core.repositories.base import UserStore
from core.session import Session

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/auth", tags=["auth"])


@router.post("/token", response_model=TokenResponse)
def issue_token(
    form_data: OAuth2PasswordRequestForm = Depends(),
    users: UserStore = Depends(get_user_store),
) -> TokenResponse:
    """Le champ ``username`` du formulaire OAuth2 porte l'adresse e-mail."""

    session = Session(users)
    try:
        user = session.sign_in(form_data.username, form_data.password)
    except InvalidCredentialsError as exc:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=str(exc),
            headers={"WWW-Authenticate": "Bearer"},
        ) from exc
    except StockpileError as exc:
        raise to_http_exception(exc) from exc

    return TokenResponse(
        access_token=token_for_user(user),
        expires_in=ACCESS_TOKEN_EXPIRE_MINUTES * 60,
        user=AuthenticatedUserPayload(id=user.id, email=user.email, role=user.role),
    )


@router.post("/logout", status_code=status.HTTP_204_NO_CONTENT)
def logout(
    token: str = Depends(oauth2_scheme),
    user: AuthenticatedUser = Depends(get_current_user),
) -> None:
    revoke_token(token)
    logger.info("Déconnexion de %s", user.email)


@router.get("/me", response_model=AuthenticatedUserPayload)
def read_current_user(user: AuthenticatedUser = Depends(get_current_user)) -> AuthenticatedUserPayload:
    return AuthenticatedUserPayload(id=user.id, email=user.email, role=user.role)
