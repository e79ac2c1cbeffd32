"""Request executor for the Dokploy API.

The platform speaks JSON over HTTP with RPC-style endpoint names
(``application.one``, ``mounts.create``, ...) relative to a base URL.
"""

from __future__ import annotations

import json as jsonlib
from typing import Any

import httpx
import structlog

from dokploy_client.config import Settings
from dokploy_client.errors import ApiError, DecodeError, NotFoundError

logger = structlog.get_logger()


class DokployClient:
    """Synchronous client for one Dokploy instance.

    All connection state lives on the instance; nothing is shared at module
    level, so several clients for different instances can coexist.
    """

    def __init__(
        self,
        settings: Settings,
        http_client: httpx.Client | None = None,
        transport: httpx.BaseTransport | None = None,
    ):
        self.settings = settings
        self.base_url = settings.host.rstrip("/")
        self._owns_client = http_client is None
        if http_client is None:
            http_client = httpx.Client(
                base_url=self.base_url,
                headers={
                    "x-api-key": settings.api_key,
                    "Content-Type": "application/json",
                },
                timeout=settings.timeout_seconds,
                transport=transport,
            )
        self._http = http_client

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    def close(self) -> None:
        if self._owns_client:
            self._http.close()

    def __enter__(self) -> DokployClient:
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    # ------------------------------------------------------------------
    # Core request
    # ------------------------------------------------------------------

    def request(
        self,
        method: str,
        endpoint: str,
        *,
        params: dict[str, Any] | None = None,
        json: Any = None,
    ) -> bytes:
        """Perform one call and return the raw response body.

        Raises:
            httpx.TransportError: connection or timeout failure, unchanged.
            NotFoundError: the platform answered 404.
            ApiError: any other status >= 400.
        """
        if params:
            params = {k: v for k, v in params.items() if v is not None}
        logger.debug("dokploy_request", method=method, endpoint=endpoint)

        resp = self._http.request(method, endpoint, params=params or None, json=json)
        body = resp.content

        if resp.status_code == 404:
            logger.debug("dokploy_not_found", endpoint=endpoint)
            raise NotFoundError(resp.text, endpoint=endpoint)
        if resp.status_code >= 400:
            logger.warning(
                "dokploy_response_error",
                endpoint=endpoint,
                status=resp.status_code,
                body=resp.text[:500],
            )
            raise ApiError(resp.status_code, resp.reason_phrase, resp.text, endpoint=endpoint)
        return body

    def get(self, endpoint: str, **params: Any) -> bytes:
        return self.request("GET", endpoint, params=params)

    def post(self, endpoint: str, payload: dict | None = None) -> bytes:
        return self.request("POST", endpoint, json=payload)

    def get_json(self, endpoint: str, what: str, **params: Any) -> Any:
        """GET and parse the body as JSON, naming *what* in the error."""
        return parse_json(self.get(endpoint, **params), what)

    def post_json(self, endpoint: str, payload: dict | None, what: str) -> Any:
        return parse_json(self.post(endpoint, payload), what)


def parse_json(raw: bytes, what: str) -> Any:
    """Parse a response body, raising ``DecodeError`` on malformed JSON."""
    try:
        return jsonlib.loads(raw)
    except ValueError as e:
        raise DecodeError(f"failed to parse {what} response ({e})", raw) from e
