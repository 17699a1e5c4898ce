"""Authentication dependency helpers."""

from __future__ import annotations

from typing import Annotated, Optional

from fastapi import Depends, Header, HTTPException, status

from ...services.auth import AuthError, AuthService, get_auth_service


def _unauthorized(message: str, error: str = "unauthorized") -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail={"error": error, "message": message},
    )


def get_requester_id(
    auth_service: Annotated[AuthService, Depends(get_auth_service)],
    authorization: Annotated[Optional[str], Header(alias="Authorization")] = None,
    x_user_id: Annotated[Optional[str], Header(alias="X-User-Id")] = None,
) -> Optional[str]:
    """
    Resolve the caller's user id, or None for anonymous callers.

    Raises HTTPException when a bearer token is presented but rejected and
    the development bypass is off.
    """
    try:
        return auth_service.resolve_user_id(authorization, x_user_id)
    except AuthError as exc:
        raise HTTPException(
            status_code=exc.status_code,
            detail={"error": exc.error, "message": exc.message, "detail": exc.detail or None},
        ) from exc


def require_requester_id(
    requester_id: Annotated[Optional[str], Depends(get_requester_id)],
) -> str:
    """Like get_requester_id, but anonymous callers get a 401."""
    if not requester_id:
        raise _unauthorized("Authentication required")
    return requester_id


__all__ = ["get_requester_id", "require_requester_id"]
