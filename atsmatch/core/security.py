from __future__ import annotations

from fastapi import HTTPException, status

from atsmatch.core.config import settings


def bearer_token(authorization: str | None) -> str | None:
    if not authorization:
        return None
    scheme, _, token = authorization.strip().partition(" ")
    if scheme.lower() != "bearer" or not token.strip():
        return None
    return token.strip()


def check_api_key(x_api_key: str | None, authorization: str | None = None) -> None:
    """Accept the key either as ``X-API-Key`` or as a bearer token."""
    if not settings.api_key:
        return
    if settings.api_key in {x_api_key, bearer_token(authorization)}:
        return
    raise HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail="Please provide a valid API key to use keyword extraction.",
    )
