from __future__ import annotations

from dokploy_client.api.base import BaseAPI
from dokploy_client.client import parse_json
from dokploy_client.decoding import decode, direct, refetch, wrapped
from dokploy_client.errors import DecodeError
from dokploy_client.payload import omit_empty
from dokploy_client.schemas.applications import Domain

DEFAULT_CERTIFICATE_TYPE = "letsencrypt"


def certificate_type(domain: Domain) -> str:
    """``none`` for plain HTTP; otherwise the declared type or Let's Encrypt."""
    if not domain.https:
        return "none"
    return domain.certificate_type or DEFAULT_CERTIFICATE_TYPE


class DomainsAPI(BaseAPI):
    def create(self, domain: Domain) -> Domain:
        payload = {
            "host": domain.host,
            "path": domain.path,
            "port": domain.port,
            "https": domain.https,
            "certificateType": certificate_type(domain),
        }
        payload.update(
            omit_empty(
                applicationId=domain.application_id,
                composeId=domain.compose_id,
                serviceName=domain.service_name,
            )
        )
        raw = self.client.post("domain.create", payload)
        return decode(raw, [wrapped(Domain, "domain"), direct(Domain)], "domain")

    def get(self, domain_id: str) -> Domain:
        return self._get("domain.one", Domain, "domain", domainId=domain_id)

    def update(self, domain: Domain) -> Domain:
        raw = self.client.post(
            "domain.update",
            {
                "domainId": domain.domain_id,
                "host": domain.host,
                "path": domain.path,
                "port": domain.port,
                "https": domain.https,
                "serviceName": domain.service_name,
                "certificateType": certificate_type(domain),
            },
        )
        return decode(
            raw,
            [
                wrapped(Domain, "domain"),
                direct(Domain),
                refetch(lambda: self.get(domain.domain_id), always=True),
            ],
            "domain",
        )

    def delete(self, domain_id: str) -> None:
        self.client.post("domain.remove", {"domainId": domain_id})

    def list_by_application(self, application_id: str) -> list[Domain]:
        return self._children("application", application_id, "domains", Domain)

    def list_by_compose(self, compose_id: str) -> list[Domain]:
        return self._children("compose", compose_id, "domains", Domain)

    def generate(self, app_name: str) -> str:
        """Ask the platform for a free ``*.traefik.me`` style host name."""
        raw = self.client.post("domain.generateDomain", {"appName": app_name})
        try:
            data = parse_json(raw, "generated domain")
        except DecodeError:
            return raw.decode("utf-8", errors="replace").strip().strip('"')
        if isinstance(data, dict):
            return str(data.get("domain") or "")
        if isinstance(data, str):
            return data
        return raw.decode("utf-8", errors="replace").strip().strip('"')
