"""Servers and the credentials and certificates around them."""

from __future__ import annotations

from pydantic import Field

from dokploy_client.schemas import Certificate, Registry, Server, SSHKey
from dokploy_provider.resources.base import (
    DataSource,
    Resource,
    StateModel,
    computed,
    from_entity,
    replaces,
    sensitive,
    to_entity,
)


class RegistryState(StateModel):
    registry_name: str = Field(description="Display name.")
    registry_url: str = Field(description="Registry host, e.g. ghcr.io.")
    username: str = Field(description="Login user.")
    password: str = sensitive("Login password or token.", default=...)
    registry_type: str = Field(default="cloud", description="Registry kind.")
    image_prefix: str | None = Field(default=None, description="Prefix prepended to pushed images.")
    server_id: str | None = None


class RegistryResource(Resource[RegistryState]):
    type_name = "dokploy_registry"
    state_model = RegistryState
    description = "A docker registry the platform can pull from and push to."

    def create(self, plan: RegistryState) -> RegistryState:
        return from_entity(RegistryState, self.api.registries.create(to_entity(Registry, plan)), plan)

    def fetch(self, state: RegistryState) -> RegistryState:
        return from_entity(RegistryState, self.api.registries.get(state.id), state)

    def update(self, plan: RegistryState, prior: RegistryState) -> RegistryState:
        plan = plan.model_copy(update={"id": prior.id})
        return from_entity(RegistryState, self.api.registries.update(to_entity(Registry, plan)), plan)

    def remove(self, state: RegistryState) -> None:
        self.api.registries.delete(state.id)


class SSHKeyState(StateModel):
    name: str = Field(description="Display name.")
    description: str | None = None
    private_key: str = Field(
        description="Private key (PEM).",
        json_schema_extra={"sensitive": True, "requires_replace": True},
    )
    public_key: str = replaces("Public key.")


class SSHKeyResource(Resource[SSHKeyState]):
    type_name = "dokploy_ssh_key"
    state_model = SSHKeyState
    description = "An SSH key pair used for servers and private git remotes."

    def create(self, plan: SSHKeyState) -> SSHKeyState:
        return from_entity(SSHKeyState, self.api.ssh_keys.create(to_entity(SSHKey, plan)), plan)

    def fetch(self, state: SSHKeyState) -> SSHKeyState:
        return from_entity(SSHKeyState, self.api.ssh_keys.get(state.id), state)

    def update(self, plan: SSHKeyState, prior: SSHKeyState) -> SSHKeyState:
        plan = plan.model_copy(update={"id": prior.id})
        return from_entity(SSHKeyState, self.api.ssh_keys.update(to_entity(SSHKey, plan)), plan)

    def remove(self, state: SSHKeyState) -> None:
        self.api.ssh_keys.delete(state.id)


class ServerState(StateModel):
    name: str = Field(description="Display name.")
    description: str | None = None
    ip_address: str = Field(description="Address the platform connects to.")
    port: int = Field(default=22, description="SSH port.")
    username: str = Field(default="root", description="SSH user.")
    ssh_key_id: str = Field(description="SSH key used to connect.")
    server_type: str = Field(default="deploy", description="deploy or build.")
    command: str | None = Field(default=None, description="Custom setup command.")
    server_status: str | None = computed("active or inactive.")


class ServerResource(Resource[ServerState]):
    type_name = "dokploy_server"
    state_model = ServerState
    description = "A remote server services can be deployed to."

    def create(self, plan: ServerState) -> ServerState:
        return from_entity(ServerState, self.api.servers.create(to_entity(Server, plan)), plan)

    def fetch(self, state: ServerState) -> ServerState:
        return from_entity(ServerState, self.api.servers.get(state.id), state)

    def update(self, plan: ServerState, prior: ServerState) -> ServerState:
        plan = plan.model_copy(update={"id": prior.id})
        return from_entity(ServerState, self.api.servers.update(to_entity(Server, plan)), plan)

    def remove(self, state: ServerState) -> None:
        self.api.servers.delete(state.id)


class CertificateState(StateModel):
    name: str = replaces("Display name.")
    certificate_data: str = replaces("Certificate chain (PEM).")
    private_key: str = Field(
        description="Private key (PEM).",
        json_schema_extra={"sensitive": True, "requires_replace": True},
    )
    certificate_path: str | None = computed("Where the platform stored the files.")
    auto_renew: bool | None = replaces("Renew automatically.", default=None)
    organization_id: str | None = replaces("Owning organization; the current one when omitted.", default=None)
    server_id: str | None = replaces("Server the certificate is installed on.", default=None)


class CertificateResource(Resource[CertificateState]):
    """Certificates cannot be edited; every change recreates them."""

    type_name = "dokploy_certificate"
    state_model = CertificateState
    description = "A custom TLS certificate."

    def create(self, plan: CertificateState) -> CertificateState:
        organization_id = plan.organization_id or self.api.users.current_organization_id()
        cert = self.api.certificates.create(to_entity(Certificate, plan, organization_id=organization_id))
        return from_entity(CertificateState, cert, plan)

    def fetch(self, state: CertificateState) -> CertificateState:
        return from_entity(CertificateState, self.api.certificates.get(state.id), state)

    def update(self, plan: CertificateState, prior: CertificateState) -> CertificateState:
        return self.fetch(prior)

    def remove(self, state: CertificateState) -> None:
        self.api.certificates.delete(state.id)


# ---- Data sources ----


class ServerSummary(StateModel):
    name: str | None = None
    ip_address: str | None = None
    port: int | None = None
    username: str | None = None
    server_type: str | None = None
    server_status: str | None = None


class ServerList(StateModel):
    servers: list[ServerSummary] = computed("All servers of the organization.")


class ServersDataSource(DataSource[ServerList]):
    type_name = "dokploy_servers"
    state_model = ServerList
    description = "List remote servers."

    def read(self, config: ServerList) -> ServerList:
        servers = self.api.servers.list()
        return config.model_copy(
            update={"id": "servers", "servers": [from_entity(ServerSummary, s) for s in servers]}
        )
