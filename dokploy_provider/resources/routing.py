"""Traffic into an application: domains, published ports, redirects."""

from __future__ import annotations

from pydantic import Field

from dokploy_client.schemas import Domain, Port, Redirect
from dokploy_provider.resources.base import Resource, StateModel, from_entity, replaces, to_entity


class DomainState(StateModel):
    host: str = Field(description="Host name, e.g. app.example.com.")
    path: str = Field(default="/", description="Path prefix routed to the service.")
    port: int = Field(default=3000, description="Container port traffic is sent to.")
    https: bool = False
    certificate_type: str | None = Field(
        default=None,
        description="letsencrypt, none or custom. Forced to none without https; letsencrypt when omitted with https.",
    )
    application_id: str | None = replaces("Application to route to.", default=None)
    compose_id: str | None = replaces("Compose service to route to.", default=None)
    service_name: str | None = Field(default=None, description="Service inside the compose file.")


class DomainResource(Resource[DomainState]):
    type_name = "dokploy_domain"
    state_model = DomainState
    description = "A domain routed to an application or a compose service."

    def create(self, plan: DomainState) -> DomainState:
        domain = self.api.domains.create(to_entity(Domain, plan))
        return from_entity(DomainState, domain, plan, keep=("application_id", "compose_id"))

    def fetch(self, state: DomainState) -> DomainState:
        domain = self.api.domains.get(state.id)
        return from_entity(DomainState, domain, state, keep=("application_id", "compose_id"))

    def update(self, plan: DomainState, prior: DomainState) -> DomainState:
        domain = self.api.domains.update(to_entity(Domain, plan, domain_id=prior.id))
        return from_entity(
            DomainState, domain, plan.model_copy(update={"id": prior.id}), keep=("application_id", "compose_id")
        )

    def remove(self, state: DomainState) -> None:
        self.api.domains.delete(state.id)


class PortState(StateModel):
    application_id: str = replaces("Application publishing the port.")
    published_port: int = Field(description="Port on the host / swarm ingress.")
    target_port: int = Field(description="Port inside the container.")
    protocol: str = Field(default="tcp", description="tcp or udp.")
    publish_mode: str | None = Field(default=None, description="ingress or host.")


class PortResource(Resource[PortState]):
    type_name = "dokploy_port"
    state_model = PortState
    description = "A port published by an application."

    def create(self, plan: PortState) -> PortState:
        return from_entity(PortState, self.api.ports.create(to_entity(Port, plan)), plan)

    def fetch(self, state: PortState) -> PortState:
        return from_entity(PortState, self.api.ports.get(state.id), state)

    def update(self, plan: PortState, prior: PortState) -> PortState:
        port = self.api.ports.update(to_entity(Port, plan, port_id=prior.id))
        return from_entity(PortState, port, plan.model_copy(update={"id": prior.id}))

    def remove(self, state: PortState) -> None:
        self.api.ports.delete(state.id)


class RedirectState(StateModel):
    application_id: str = replaces("Application the rule applies to.")
    regex: str = Field(description="Pattern matched against the request URL.")
    replacement: str = Field(description="Target URL; may reference capture groups.")
    permanent: bool = Field(default=False, description="301 instead of 302.")


class RedirectResource(Resource[RedirectState]):
    type_name = "dokploy_redirect"
    state_model = RedirectState
    description = "A URL redirect rule on an application."

    def create(self, plan: RedirectState) -> RedirectState:
        return from_entity(RedirectState, self.api.redirects.create(to_entity(Redirect, plan)), plan)

    def fetch(self, state: RedirectState) -> RedirectState:
        return from_entity(RedirectState, self.api.redirects.get(state.id), state)

    def update(self, plan: RedirectState, prior: RedirectState) -> RedirectState:
        redirect = self.api.redirects.update(to_entity(Redirect, plan, redirect_id=prior.id))
        return from_entity(RedirectState, redirect, plan.model_copy(update={"id": prior.id}))

    def remove(self, state: RedirectState) -> None:
        self.api.redirects.delete(state.id)
