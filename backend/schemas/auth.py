from __future__ import annotations

from pydantic import BaseModel, Field


class AuthenticatedUserPayload(BaseModel):
    id: str
    email: str
    role: str = Field(description="admin | associate")


class TokenResponse(BaseModel):
    access_token: str
    token_type: str = "bearer"
    expires_in: int
    user: AuthenticatedUserPayload


__all__ = ["AuthenticatedUserPayload", "TokenResponse"]
