"""Organizations, members, permissions and API keys."""

from __future__ import annotations

from pydantic import Field

from dokploy_client.schemas import OrganizationMember, UserPermissions
from dokploy_provider.resources.base import (
    DataSource,
    Resource,
    StateModel,
    computed,
    from_entity,
    replaces,
    to_entity,
)


class OrganizationState(StateModel):
    name: str = Field(description="Organization name.")
    logo: str | None = Field(default=None, description="Logo URL.")
    slug: str | None = computed("URL slug.")
    owner_id: str | None = computed("User owning the organization.")


class OrganizationResource(Resource[OrganizationState]):
    type_name = "dokploy_organization"
    state_model = OrganizationState
    description = "An organization."

    def create(self, plan: OrganizationState) -> OrganizationState:
        org = self.api.organizations.create(plan.name, plan.logo or "")
        return from_entity(OrganizationState, org, plan)

    def fetch(self, state: OrganizationState) -> OrganizationState:
        return from_entity(OrganizationState, self.api.organizations.get(state.id), state)

    def update(self, plan: OrganizationState, prior: OrganizationState) -> OrganizationState:
        org = self.api.organizations.update(prior.id, plan.name, plan.logo or "")
        return from_entity(OrganizationState, org, plan.model_copy(update={"id": prior.id}))

    def remove(self, state: OrganizationState) -> None:
        self.api.organizations.delete(state.id)


class ApiKeyState(StateModel):
    name: str = replaces("Key name.")
    organization_id: str | None = replaces("Organization the key acts in; the current one when omitted.", default=None)
    expires_in: int | None = replaces("Lifetime in seconds.", default=None)
    rate_limit_enabled: bool | None = replaces("Enable rate limiting.", default=None)
    rate_limit_max: int | None = replaces("Requests allowed per window.", default=None)
    rate_limit_time_window: int | None = replaces("Window length in milliseconds.", default=None)
    key: str | None = Field(
        default=None,
        description="The secret; only known right after creation.",
        json_schema_extra={"computed": True, "sensitive": True},
    )
    start: str | None = computed("First characters of the key, for display.")
    user_id: str | None = computed("Owner of the key.")
    expires_at: str | None = computed("Expiry timestamp.")


class ApiKeyResource(Resource[ApiKeyState]):
    """API keys are immutable; every change recreates them."""

    type_name = "dokploy_api_key"
    state_model = ApiKeyState
    description = "An API key of the current user."

    def create(self, plan: ApiKeyState) -> ApiKeyState:
        organization_id = plan.organization_id or self.api.users.current_organization_id()
        key = self.api.users.create_api_key(
            plan.name,
            metadata={"organizationId": organization_id},
            expires_in=plan.expires_in or 0,
            rate_limit_enabled=plan.rate_limit_enabled,
            rate_limit_max=plan.rate_limit_max or 0,
            rate_limit_time_window=plan.rate_limit_time_window or 0,
        )
        return from_entity(ApiKeyState, key, plan.model_copy(update={"organization_id": organization_id}))

    def fetch(self, state: ApiKeyState) -> ApiKeyState:
        key = self.api.users.get_api_key(state.id)
        # The secret is never listed again.
        return from_entity(ApiKeyState, key, state, keep=("key",))

    def update(self, plan: ApiKeyState, prior: ApiKeyState) -> ApiKeyState:
        return self.fetch(prior)

    def remove(self, state: ApiKeyState) -> None:
        self.api.users.delete_api_key(state.id)


class UserPermissionsState(StateModel):
    user_id: str = replaces("User whose membership is managed.")
    member_id: str | None = computed("Membership id in the organization.")
    accessed_projects: list[str] = Field(default_factory=list)
    accessed_environments: list[str] = Field(default_factory=list)
    accessed_services: list[str] = Field(default_factory=list)
    can_create_projects: bool = False
    can_create_services: bool = False
    can_delete_projects: bool = False
    can_delete_services: bool = False
    can_access_to_docker: bool = False
    can_access_to_traefik_files: bool = False
    can_access_to_api: bool = False
    can_access_to_ssh_keys: bool = False
    can_access_to_git_providers: bool = False
    can_delete_environments: bool = False
    can_create_environments: bool = False


class UserPermissionsResource(Resource[UserPermissionsState]):
    """Permissions of one member. Deleting resets every flag."""

    type_name = "dokploy_user_permissions"
    state_model = UserPermissionsState
    description = "The permission flags of an organization member."

    def _assign(self, plan: UserPermissionsState, member_id: str) -> UserPermissionsState:
        perms = self.api.users.assign_permissions(to_entity(UserPermissions, plan, member_id=member_id))
        return from_entity(
            UserPermissionsState, perms, plan.model_copy(update={"id": member_id, "member_id": member_id})
        )

    def create(self, plan: UserPermissionsState) -> UserPermissionsState:
        member = self.api.users.by_user_id(plan.user_id)
        return self._assign(plan, member.member_id)

    def fetch(self, state: UserPermissionsState) -> UserPermissionsState:
        member = self.api.users.by_member_id(state.id)
        return from_entity(UserPermissionsState, member, state)

    def update(self, plan: UserPermissionsState, prior: UserPermissionsState) -> UserPermissionsState:
        return self._assign(plan, prior.id)

    def remove(self, state: UserPermissionsState) -> None:
        self.api.users.assign_permissions(UserPermissions(member_id=state.id))


# ---- Data sources ----


class UserState(StateModel):
    user_id: str | None = None
    organization_id: str | None = None
    role: str | None = None
    email: str | None = None
    first_name: str | None = None
    last_name: str | None = None


def _user_state(member: OrganizationMember) -> UserState:
    return UserState(
        id=member.member_id,
        user_id=member.user_id or None,
        organization_id=member.organization_id or None,
        role=member.role or None,
        email=member.user.email or None,
        first_name=member.user.first_name or None,
        last_name=member.user.last_name or None,
    )


class UserDataSource(DataSource[UserState]):
    type_name = "dokploy_user"
    state_model = UserState
    description = "The member the provider's API key belongs to, or one member by user id."

    def read(self, config: UserState) -> UserState:
        if config.user_id:
            return _user_state(self.api.users.by_user_id(config.user_id))
        return _user_state(self.api.users.current())


class UserList(StateModel):
    users: list[UserState] = computed("Members of the current organization.")


class UsersDataSource(DataSource[UserList]):
    type_name = "dokploy_users"
    state_model = UserList
    description = "List members of the current organization."

    def read(self, config: UserList) -> UserList:
        members = self.api.users.list()
        return config.model_copy(update={"id": "users", "users": [_user_state(m) for m in members]})


class OrganizationSummary(StateModel):
    name: str | None = None
    slug: str | None = None
    owner_id: str | None = None


class OrganizationList(StateModel):
    organizations: list[OrganizationSummary] = computed("Organizations the user belongs to.")


class OrganizationsDataSource(DataSource[OrganizationList]):
    type_name = "dokploy_organizations"
    state_model = OrganizationList
    description = "List organizations."

    def read(self, config: OrganizationList) -> OrganizationList:
        orgs = self.api.organizations.list()
        return config.model_copy(
            update={
                "id": "organizations",
                "organizations": [from_entity(OrganizationSummary, o) for o in orgs],
            }
        )
