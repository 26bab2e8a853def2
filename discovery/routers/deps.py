"""
Shared FastAPI dependencies — client identity, admin auth, cron auth, and
the vendor-proxy origin allow-list.
"""

from __future__ import annotations

import fnmatch
import hmac
import logging
from typing import Optional

from fastapi import Cookie, Header, HTTPException, Request, status

from discovery.config import settings

logger = logging.getLogger(__name__)

ADMIN_COOKIE = "admin-token"


def client_ip(request: Request) -> str:
    """Best-effort client IP: X-Forwarded-For (first hop), X-Real-IP, then the socket peer."""
    forwarded = request.headers.get("x-forwarded-for")
    if forwarded:
        return forwarded.split(",")[0].strip()
    real_ip = request.headers.get("x-real-ip")
    if real_ip:
        return real_ip.strip()
    if request.client is not None:
        return request.client.host
    return "unknown"


def _bearer_token(authorization: Optional[str]) -> Optional[str]:
    if not authorization:
        return None
    scheme, _, token = authorization.partition(" ")
    if scheme.lower() != "bearer" or not token:
        return None
    return token.strip()


def _matches_secret(candidate: Optional[str], secret: str) -> bool:
    if not candidate or not secret:
        return False
    return hmac.compare_digest(candidate.encode(), secret.encode())


async def require_admin(
    authorization: Optional[str] = Header(default=None),
    admin_token: Optional[str] = Cookie(default=None, alias=ADMIN_COOKIE),
) -> None:
    """Admin routes: Bearer token or admin-token cookie must equal ADMIN_TOKEN."""
    token = _bearer_token(authorization) or admin_token
    if not _matches_secret(token, settings.admin_token):
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Unauthorized",
        )


async def require_cron(authorization: Optional[str] = Header(default=None)) -> None:
    """Cron routes: Bearer CRON_SECRET."""
    if not _matches_secret(_bearer_token(authorization), settings.cron_secret):
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Unauthorized",
        )


def is_origin_allowed(origin: Optional[str]) -> bool:
    """
    Requests without an Origin header (server-to-server) are allowed.
    Patterns in ALLOWED_ORIGINS may use '*' wildcards.
    """
    if not origin:
        return True
    return any(
        fnmatch.fnmatchcase(origin, pattern) for pattern in settings.allowed_origins_list
    )


async def require_vendor_proxy(origin: Optional[str] = Header(default=None)) -> None:
    """Gate for the Google Places proxy routes."""
    if not settings.enable_vendor_proxy:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Places proxy disabled",
        )
    if not is_origin_allowed(origin):
        logger.warning("Origin not allowed: %s", origin)
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Unauthorized origin",
        )
