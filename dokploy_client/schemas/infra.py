"""Servers and the credentials around them."""

from __future__ import annotations

from dokploy_client.schemas.base import WireModel


class SSHKey(WireModel):
    ID_FIELD = "ssh_key_id"

    ssh_key_id: str = ""
    name: str = ""
    description: str = ""
    private_key: str = ""
    public_key: str = ""


class Server(WireModel):
    ID_FIELD = "server_id"

    server_id: str = ""
    name: str = ""
    description: str = ""
    ip_address: str = ""
    port: int = 0
    username: str = ""
    ssh_key_id: str = ""
    server_status: str = ""
    server_type: str = ""  # deploy, build
    created_at: str = ""
    organization_id: str = ""
    app_name: str = ""
    enable_docker_cleanup: bool = False
    command: str = ""


class Registry(WireModel):
    ID_FIELD = "registry_id"

    registry_id: str = ""
    registry_name: str = ""
    username: str = ""
    password: str = ""
    registry_url: str = ""
    registry_type: str = ""  # cloud
    image_prefix: str = ""
    server_id: str = ""
    organization_id: str = ""
    created_at: str = ""


class Certificate(WireModel):
    ID_FIELD = "certificate_id"

    certificate_id: str = ""
    name: str = ""
    certificate_data: str = ""
    private_key: str = ""
    certificate_path: str = ""
    auto_renew: bool | None = None
    organization_id: str = ""
    server_id: str = ""
