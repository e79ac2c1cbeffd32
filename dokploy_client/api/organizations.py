from __future__ import annotations

from dokploy_client.api.base import BaseAPI
from dokploy_client.decoding import decode, direct, refetch, wrapped
from dokploy_client.payload import omit_empty
from dokploy_client.schemas.users import Organization


class OrganizationsAPI(BaseAPI):
    def create(self, name: str, logo: str = "") -> Organization:
        payload = {"name": name}
        payload.update(omit_empty(logo=logo))
        raw = self.client.post("organization.create", payload)
        return decode(raw, [direct(Organization), wrapped(Organization, "organization")], "organization")

    def get(self, organization_id: str) -> Organization:
        return self._get("organization.one", Organization, "organization", organizationId=organization_id)

    def update(self, organization_id: str, name: str, logo: str = "") -> Organization:
        payload = {"organizationId": organization_id, "name": name}
        payload.update(omit_empty(logo=logo))
        raw = self.client.post("organization.update", payload)
        return decode(
            raw,
            [direct(Organization), refetch(lambda: self.get(organization_id), always=True)],
            "organization",
        )

    def delete(self, organization_id: str) -> None:
        self.client.post("organization.delete", {"organizationId": organization_id})

    def list(self) -> list[Organization]:
        return self._list("organization.all", Organization, "organizations")
