"""Error taxonomy for the Dokploy client.

Transport failures (connection refused, timeouts) are not wrapped: they
surface as the ``httpx.TransportError`` hierarchy exactly as httpx raised
them.
"""

from __future__ import annotations


class DokployError(Exception):
    """Base class for every error raised by this package."""


class NotFoundError(DokployError):
    """The platform answered 404 for the requested resource."""

    def __init__(self, body: str = "", endpoint: str | None = None):
        self.body = body
        self.endpoint = endpoint
        detail = f": {body}" if body else ""
        super().__init__(f"resource not found{detail}")


class ApiError(DokployError):
    """The platform answered with a status >= 400 (other than 404)."""

    def __init__(self, status_code: int, reason: str, body: str, endpoint: str | None = None):
        self.status_code = status_code
        self.reason = reason
        self.body = body
        self.endpoint = endpoint
        super().__init__(f"API error: {status_code} {reason} - {body}")


class DecodeError(DokployError):
    """A response matched none of the shapes we know how to read."""

    def __init__(self, message: str, body: bytes | str | None = None):
        if isinstance(body, bytes):
            body = body.decode("utf-8", errors="replace")
        self.body = body
        if body is not None:
            message = f"{message}: {body}"
        super().__init__(message)


class EnvUpdateConflictError(DokployError):
    """The stored env blob differs from the one just written (concurrent writer)."""


class UnsupportedTypeError(DokployError, ValueError):
    """A database or service type outside the supported set was requested."""

    def __init__(self, kind: str, value: str):
        self.kind = kind
        self.value = value
        super().__init__(f"unsupported {kind}: {value}")
