"""Organizations, members, API keys and AI provider settings."""

from __future__ import annotations

from typing import Any

from pydantic import Field

from dokploy_client.schemas.base import WireModel


class ApiKey(WireModel):
    ID_FIELD = "id"

    id: str = ""
    name: str = ""
    start: str = ""
    key: str = ""  # only returned on creation
    user_id: str = ""
    enabled: bool = False
    rate_limit_enabled: bool = False
    rate_limit_time_window: int = 0
    rate_limit_max: int = 0
    request_count: int = 0
    expires_at: str = ""
    created_at: str = ""
    updated_at: str = ""
    last_request: str = ""
    metadata: dict[str, Any] | str | None = None


class UserDetails(WireModel):
    ID_FIELD = "id"

    id: str = ""
    first_name: str = ""
    last_name: str = ""
    email: str = ""
    email_verified: bool = False
    two_factor_enabled: bool = False
    created_at: str = ""
    updated_at: str = ""
    image: str = ""
    role: str = ""
    is_registered: bool = False
    enable_paid_features: bool = False
    allow_impersonation: bool = False
    servers_quantity: int = 0
    api_keys: list[ApiKey] = Field(default_factory=list)


class UserPermissions(WireModel):
    """The permission flags of one organization member."""

    ID_FIELD = "member_id"

    member_id: str = Field(default="", alias="id")
    accessed_projects: list[str] = Field(default_factory=list)
    accessed_environments: list[str] = Field(default_factory=list)
    accessed_services: list[str] = Field(default_factory=list)
    can_create_projects: bool = False
    can_create_services: bool = False
    can_delete_projects: bool = False
    can_delete_services: bool = False
    can_access_to_docker: bool = False
    can_access_to_traefik_files: bool = False
    can_access_to_api: bool = Field(default=False, alias="canAccessToAPI")
    can_access_to_ssh_keys: bool = Field(default=False, alias="canAccessToSSHKeys")
    can_access_to_git_providers: bool = False
    can_delete_environments: bool = False
    can_create_environments: bool = False


class OrganizationMember(UserPermissions):
    """A user's membership in an organization; ``id`` is the member id."""

    organization_id: str = ""
    user_id: str = ""
    role: str = ""
    created_at: str = ""
    team_id: str = ""
    is_default: bool = False
    user: UserDetails = Field(default_factory=UserDetails)

    def permissions(self) -> UserPermissions:
        return UserPermissions.model_validate(self.model_dump())


class User(WireModel):
    """The short form of the current member: who and in which organization."""

    ID_FIELD = "user_id"

    user_id: str = ""
    email: str = ""
    organization_id: str = ""


class Organization(WireModel):
    ID_FIELD = "id"

    id: str = ""
    name: str = ""
    slug: str = ""
    logo: str = ""
    created_at: str = ""
    owner_id: str = ""


class AI(WireModel):
    ID_FIELD = "ai_id"

    ai_id: str = ""
    name: str = ""
    api_url: str = ""
    api_key: str = ""
    model: str = ""
    is_enabled: bool = False
    organization_id: str = ""
    created_at: str = ""


class AIModel(WireModel):
    ID_FIELD = "id"

    id: str = ""
    object: str = ""
    created: int = 0
    owned_by: str = Field(default="", alias="owned_by")
