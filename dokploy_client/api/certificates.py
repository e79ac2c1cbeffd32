from __future__ import annotations

from dokploy_client.api.base import BaseAPI
from dokploy_client.decoding import decode, direct, wrapped
from dokploy_client.payload import omit_empty
from dokploy_client.schemas.infra import Certificate


class CertificatesAPI(BaseAPI):
    def create(self, cert: Certificate) -> Certificate:
        payload = {
            "name": cert.name,
            "certificateData": cert.certificate_data,
            "privateKey": cert.private_key,
            "organizationId": cert.organization_id,
        }
        payload.update(
            omit_empty(
                certificatePath=cert.certificate_path,
                autoRenew=cert.auto_renew,
                serverId=cert.server_id,
            )
        )
        raw = self.client.post("certificates.create", payload)
        return decode(raw, [direct(Certificate), wrapped(Certificate, "certificate")], "certificate")

    def get(self, certificate_id: str) -> Certificate:
        return self._get("certificates.one", Certificate, "certificate", certificateId=certificate_id)

    def delete(self, certificate_id: str) -> None:
        self.client.post("certificates.remove", {"certificateId": certificate_id})

    def list(self) -> list[Certificate]:
        return self._list("certificates.all", Certificate, "certificates")
