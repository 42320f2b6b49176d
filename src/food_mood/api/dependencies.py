"""Request dependencies shared by API routers."""

from __future__ import annotations

from uuid import UUID

from fastapi import Header, HTTPException, status


async def require_user(x_user_id: str | None = Header(default=None)) -> UUID:
    """Return the caller id forwarded by the identity layer."""
    if not x_user_id:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED)
    try:
        return UUID(x_user_id)
    except ValueError as exc:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED) from exc
