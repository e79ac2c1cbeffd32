from __future__ import annotations

from dokploy_client.api.base import BaseAPI
from dokploy_client.decoding import decode, direct, match_submitted, refetch
from dokploy_client.payload import omit_empty
from dokploy_client.schemas.applications import Port


class PortsAPI(BaseAPI):
    def create(self, port: Port) -> Port:
        payload = {
            "publishedPort": port.published_port,
            "targetPort": port.target_port,
            "applicationId": port.application_id,
        }
        payload.update(omit_empty(protocol=port.protocol, publishMode=port.publish_mode))
        raw = self.client.post("port.create", payload)

        def matches(candidate: Port) -> bool:
            if candidate.published_port != port.published_port or candidate.target_port != port.target_port:
                return False
            return not port.protocol or candidate.protocol == port.protocol

        def find_created() -> Port:
            return match_submitted(self.list_by_application(port.application_id), matches, "port")

        return decode(raw, [direct(Port), refetch(find_created)], "port")

    def get(self, port_id: str) -> Port:
        return self._get("port.one", Port, "port", portId=port_id)

    def update(self, port: Port) -> Port:
        payload = {
            "portId": port.port_id,
            "publishedPort": port.published_port,
            "targetPort": port.target_port,
        }
        payload.update(omit_empty(protocol=port.protocol, publishMode=port.publish_mode))
        self.client.post("port.update", payload)
        return self.get(port.port_id)

    def delete(self, port_id: str) -> None:
        self.client.post("port.delete", {"portId": port_id})

    def list_by_application(self, application_id: str) -> list[Port]:
        return self._children("application", application_id, "ports", Port)
