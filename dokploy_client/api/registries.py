from __future__ import annotations

from dokploy_client.api.base import BaseAPI
from dokploy_client.decoding import decode, direct, refetch, wrapped
from dokploy_client.payload import omit_empty
from dokploy_client.schemas.infra import Registry


class RegistriesAPI(BaseAPI):
    def create(self, registry: Registry) -> Registry:
        payload = {
            "registryName": registry.registry_name,
            "username": registry.username,
            "password": registry.password,
            "registryUrl": registry.registry_url,
            "registryType": registry.registry_type or "cloud",
            "imagePrefix": registry.image_prefix,
        }
        payload.update(omit_empty(serverId=registry.server_id))
        raw = self.client.post("registry.create", payload)
        return decode(raw, [direct(Registry), wrapped(Registry, "registry")], "registry")

    def get(self, registry_id: str) -> Registry:
        return self._get("registry.one", Registry, "registry", registryId=registry_id)

    def update(self, registry: Registry) -> Registry:
        payload = {"registryId": registry.registry_id}
        payload.update(
            omit_empty(
                registryName=registry.registry_name,
                username=registry.username,
                password=registry.password,
                registryUrl=registry.registry_url,
                registryType=registry.registry_type,
                imagePrefix=registry.image_prefix,
                serverId=registry.server_id,
            )
        )
        raw = self.client.post("registry.update", payload)
        return decode(
            raw,
            [direct(Registry), refetch(lambda: self.get(registry.registry_id), always=True)],
            "registry",
        )

    def delete(self, registry_id: str) -> None:
        self.client.post("registry.remove", {"registryId": registry_id})

    def list(self) -> list[Registry]:
        return self._list("registry.all", Registry, "registries")
