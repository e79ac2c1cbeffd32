"""Shared plumbing for the per-entity API classes."""

from __future__ import annotations

from typing import Any, Sequence, TypeVar

from dokploy_client.client import DokployClient
from dokploy_client.decoding import parse_list, parse_model
from dokploy_client.errors import UnsupportedTypeError
from dokploy_client.schemas.base import WireModel

M = TypeVar("M", bound=WireModel)

# Service type -> (read endpoint, id parameter). Child collections such as
# mounts and backups are only exposed embedded in these responses.
SERVICE_ENDPOINTS: dict[str, tuple[str, str]] = {
    "application": ("application.one", "applicationId"),
    "postgres": ("postgres.one", "postgresId"),
    "mysql": ("mysql.one", "mysqlId"),
    "mariadb": ("mariadb.one", "mariadbId"),
    "mongo": ("mongo.one", "mongoId"),
    "redis": ("redis.one", "redisId"),
    "compose": ("compose.one", "composeId"),
}


class BaseAPI:
    """One entity family. Holds the client; keeps no other state."""

    def __init__(self, client: DokployClient):
        self.client = client

    def _get(self, endpoint: str, model: type[M], what: str, **params: Any) -> M:
        return parse_model(model, self.client.get_json(endpoint, what, **params), what)

    def _list(
        self,
        endpoint: str,
        model: type[M],
        what: str,
        keys: Sequence[str] = (),
        **params: Any,
    ) -> list[M]:
        return parse_list(model, self.client.get_json(endpoint, what, **params), what, keys)

    def _service_json(self, service_type: str, service_id: str) -> dict[str, Any]:
        """Read a service (application, database or compose) as raw JSON."""
        try:
            endpoint, id_param = SERVICE_ENDPOINTS[service_type]
        except KeyError:
            raise UnsupportedTypeError("service type", service_type) from None
        data = self.client.get_json(endpoint, f"{service_type} service", **{id_param: service_id})
        return data if isinstance(data, dict) else {}

    def _children(
        self, service_type: str, service_id: str, key: str, model: type[M]
    ) -> list[M]:
        """List a child collection embedded in a service response."""
        data = self._service_json(service_type, service_id)
        return parse_list(model, data.get(key) or [], f"{service_type} {key}")
