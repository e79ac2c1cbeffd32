from __future__ import annotations

from typing import Any

from dokploy_client.api.base import BaseAPI
from dokploy_client.decoding import decode, direct, match_submitted, parse_model, refetch, wrapped
from dokploy_client.payload import omit_empty
from dokploy_client.schemas.infra import Server, SSHKey


class ServersAPI(BaseAPI):
    def _payload(self, server: Server) -> dict[str, Any]:
        payload: dict[str, Any] = {
            "name": server.name,
            "ipAddress": server.ip_address,
            "port": server.port or 22,
            "username": server.username or "root",
            "sshKeyId": server.ssh_key_id,
            "serverType": server.server_type or "deploy",
        }
        payload.update(omit_empty(description=server.description))
        return payload

    def create(self, server: Server) -> Server:
        raw = self.client.post("server.create", self._payload(server))
        return decode(raw, [direct(Server), wrapped(Server, "server")], "server")

    def get(self, server_id: str) -> Server:
        data = self.client.get_json("server.one", "server", serverId=server_id)
        if isinstance(data, dict) and isinstance(data.get("server"), dict):
            data = data["server"]
        return parse_model(Server, data, "server")

    def update(self, server: Server) -> Server:
        payload = self._payload(server)
        payload["serverId"] = server.server_id
        payload.update(omit_empty(command=server.command))
        raw = self.client.post("server.update", payload)
        return decode(
            raw,
            [direct(Server), refetch(lambda: self.get(server.server_id), always=True)],
            "server",
        )

    def delete(self, server_id: str) -> None:
        self.client.post("server.remove", {"serverId": server_id})

    def list(self) -> list[Server]:
        return self._list("server.all", Server, "servers", keys=("servers",))


class SSHKeysAPI(BaseAPI):
    def create(self, key: SSHKey) -> SSHKey:
        user = self.client.get_json("user.get", "current user")
        organization_id = user.get("organizationId", "") if isinstance(user, dict) else ""
        raw = self.client.post(
            "sshKey.create",
            {
                "name": key.name,
                "description": key.description,
                "privateKey": key.private_key,
                "publicKey": key.public_key,
                "organizationId": organization_id,
            },
        )

        def find_created() -> SSHKey:
            return match_submitted(self.list(), lambda k: k.name == key.name, "SSH key")

        # A body without an id falls through to the lookup by name.
        return decode(
            raw,
            [wrapped(SSHKey, "sshKey"), direct(SSHKey), refetch(find_created, always=True)],
            "SSH key",
        )

    def get(self, ssh_key_id: str) -> SSHKey:
        return self._get("sshKey.one", SSHKey, "SSH key", sshKeyId=ssh_key_id)

    def update(self, key: SSHKey) -> SSHKey:
        self.client.post(
            "sshKey.update",
            {"sshKeyId": key.ssh_key_id, "name": key.name, "description": key.description},
        )
        return self.get(key.ssh_key_id)

    def delete(self, ssh_key_id: str) -> None:
        self.client.post("sshKey.remove", {"sshKeyId": ssh_key_id})

    def list(self) -> list[SSHKey]:
        return self._list("sshKey.all", SSHKey, "SSH keys", keys=("sshKeys",))
