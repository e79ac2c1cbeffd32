"""Shared-secret check for the provider HTTP service."""

from __future__ import annotations

import hmac

import structlog
from fastapi import HTTPException, Request

from dokploy_client.config import get_settings

logger = structlog.get_logger()


async def require_service_key(request: Request) -> None:
    """FastAPI dependency validating the ``x-service-key`` header.

    Skips validation when ``service_api_key`` is empty (dev mode).
    """
    expected = get_settings().service_api_key
    if not expected:
        logger.warning(
            "service_auth_disabled",
            path=request.url.path,
            hint="Set DOKPLOY_SERVICE_API_KEY to require a key",
        )
        return

    provided = request.headers.get("x-service-key", "")
    if not provided:
        raise HTTPException(status_code=401, detail="Missing service key")
    if not hmac.compare_digest(provided, expected):
        logger.warning(
            "service_auth_failed",
            path=request.url.path,
            remote=request.client.host if request.client else "unknown",
        )
        raise HTTPException(status_code=401, detail="Invalid service key")
