"""Organization members, their permissions and API keys."""

from __future__ import annotations

from typing import Any

from dokploy_client.api.base import BaseAPI
from dokploy_client.decoding import decode, direct
from dokploy_client.errors import NotFoundError
from dokploy_client.payload import omit_empty
from dokploy_client.schemas.users import ApiKey, OrganizationMember, UserPermissions


class UsersAPI(BaseAPI):
    def current(self) -> OrganizationMember:
        """The member the API key belongs to."""
        return self._get("user.get", OrganizationMember, "current user")

    def current_organization_id(self) -> str:
        return self.current().organization_id

    def list(self) -> list[OrganizationMember]:
        return self._list("user.all", OrganizationMember, "users")

    def by_user_id(self, user_id: str) -> OrganizationMember:
        for member in self.list():
            if member.user_id == user_id:
                return member
        raise NotFoundError(f"user {user_id} not found", endpoint="user.all")

    def by_member_id(self, member_id: str) -> OrganizationMember:
        for member in self.list():
            if member.member_id == member_id:
                return member
        raise NotFoundError(f"member {member_id} not found", endpoint="user.all")

    def assign_permissions(self, perms: UserPermissions) -> UserPermissions:
        payload: dict[str, Any] = perms.model_dump(by_alias=True)
        self.client.post("user.assignPermissions", payload)
        return self.by_member_id(perms.member_id).permissions()

    # ---- API keys ----

    def create_api_key(
        self,
        name: str,
        metadata: dict[str, Any] | None = None,
        expires_in: int = 0,
        rate_limit_enabled: bool | None = None,
        rate_limit_max: int = 0,
        rate_limit_time_window: int = 0,
    ) -> ApiKey:
        """Create a key for the current user. The secret is only returned here."""
        payload: dict[str, Any] = {"name": name, "metadata": metadata or {}}
        payload.update(
            omit_empty(
                expiresIn=expires_in or None,
                rateLimitEnabled=rate_limit_enabled,
                rateLimitMax=rate_limit_max or None,
                rateLimitTimeWindow=rate_limit_time_window or None,
            )
        )
        raw = self.client.post("user.createApiKey", payload)
        return decode(raw, [direct(ApiKey)], "API key")

    def get_api_key(self, api_key_id: str) -> ApiKey:
        for key in self.current().user.api_keys:
            if key.id == api_key_id:
                return key
        raise NotFoundError(f"API key {api_key_id} not found", endpoint="user.get")

    def delete_api_key(self, api_key_id: str) -> None:
        self.client.post("user.deleteApiKey", {"apiKeyId": api_key_id})
