"""Python client for the Dokploy deployment platform API."""

from dokploy_client.api import Dokploy
from dokploy_client.client import DokployClient
from dokploy_client.config import Settings, get_settings
from dokploy_client.errors import (
    ApiError,
    DecodeError,
    DokployError,
    EnvUpdateConflictError,
    NotFoundError,
    UnsupportedTypeError,
)

__all__ = [
    "ApiError",
    "DecodeError",
    "Dokploy",
    "DokployClient",
    "DokployError",
    "EnvUpdateConflictError",
    "NotFoundError",
    "Settings",
    "UnsupportedTypeError",
    "get_settings",
]
