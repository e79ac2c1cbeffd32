"""Git hosting integrations and their lookups."""

from __future__ import annotations

from typing import Any, ClassVar

from pydantic import Field

from dokploy_client.api.git_providers import GitProvidersAPI
from dokploy_client.schemas import BitbucketProvider, GiteaProvider, GitlabProvider
from dokploy_client.schemas.base import WireModel
from dokploy_provider.resources.base import (
    DataSource,
    Resource,
    StateModel,
    computed,
    from_entity,
    sensitive,
    to_entity,
)


class GitProviderState(StateModel):
    name: str = Field(description="Display name.")
    git_provider_id: str | None = computed("Id of the shared git provider record; used for deletion.")
    auth_id: str | None = Field(default=None, description="Owning user; the current one when omitted.")


class GitlabProviderState(GitProviderState):
    gitlab_url: str = Field(default="https://gitlab.com", description="GitLab instance URL.")
    application_id: str | None = Field(default=None, description="OAuth application id.")
    redirect_uri: str | None = None
    secret: str | None = sensitive("OAuth application secret.")
    access_token: str | None = sensitive("OAuth access token.")
    refresh_token: str | None = sensitive("OAuth refresh token.")
    expires_at: int | None = Field(default=None, description="Access token expiry as a Unix timestamp.")
    group_name: str | None = Field(default=None, description="Restrict to this group.")


class BitbucketProviderState(GitProviderState):
    bitbucket_username: str | None = None
    bitbucket_email: str | None = None
    app_password: str | None = sensitive("Bitbucket app password.")
    api_token: str | None = sensitive("Bitbucket API token.")
    bitbucket_workspace_name: str | None = None


class GiteaProviderState(GitProviderState):
    gitea_url: str = Field(description="Gitea instance URL.")
    redirect_uri: str | None = None
    client_id: str | None = None
    client_secret: str | None = sensitive("OAuth client secret.")
    access_token: str | None = sensitive("OAuth access token.")
    refresh_token: str | None = sensitive("OAuth refresh token.")
    expires_at: int | None = Field(default=None, description="Access token expiry as a Unix timestamp.")
    scopes: str | None = Field(default=None, description="Granted OAuth scopes.")
    last_authenticated_at: int | None = Field(default=None, description="Unix timestamp of the last OAuth login.")
    gitea_username: str | None = None
    organization_name: str | None = None


def _with_shared_id(provider: Any) -> Any:
    """Fill ``git_provider_id`` from the nested record when only that carries it."""
    if not provider.git_provider_id and provider.git_provider is not None:
        return provider.model_copy(update={"git_provider_id": provider.git_provider.git_provider_id})
    return provider


class GitProviderResource(Resource[GitProviderState]):
    """Shared lifecycle for GitLab, Bitbucket and Gitea providers."""

    model: ClassVar[type[WireModel]]
    kind: ClassVar[str]

    def _api(self) -> GitProvidersAPI:
        return getattr(self.api, self.kind)

    def create(self, plan: GitProviderState) -> GitProviderState:
        auth_id = plan.auth_id or self.api.users.current().user_id
        provider = self._api().create(to_entity(self.model, plan, auth_id=auth_id))
        return from_entity(
            self.state_model,
            _with_shared_id(provider),
            plan.model_copy(update={"auth_id": auth_id}),
            keep=("auth_id",),
        )

    def fetch(self, state: GitProviderState) -> GitProviderState:
        provider = self._api().get(state.id)
        return from_entity(self.state_model, _with_shared_id(provider), state, keep=("auth_id",))

    def update(self, plan: GitProviderState, prior: GitProviderState) -> GitProviderState:
        plan = plan.model_copy(update={"id": prior.id, "git_provider_id": prior.git_provider_id})
        provider = self._api().update(to_entity(self.model, plan))
        return from_entity(self.state_model, _with_shared_id(provider), plan, keep=("auth_id",))

    def remove(self, state: GitProviderState) -> None:
        self._api().delete(state.git_provider_id or "")


class GitlabProviderResource(GitProviderResource):
    type_name = "dokploy_gitlab_provider"
    state_model = GitlabProviderState
    model = GitlabProvider
    kind = "gitlab"
    description = "A GitLab integration."


class BitbucketProviderResource(GitProviderResource):
    type_name = "dokploy_bitbucket_provider"
    state_model = BitbucketProviderState
    model = BitbucketProvider
    kind = "bitbucket"
    description = "A Bitbucket integration."


class GiteaProviderResource(GitProviderResource):
    type_name = "dokploy_gitea_provider"
    state_model = GiteaProviderState
    model = GiteaProvider
    kind = "gitea"
    description = "A Gitea integration."


# ---- Data sources ----


class ProviderSummary(StateModel):
    name: str | None = None
    git_provider_id: str | None = None
    provider_type: str | None = None
    url: str | None = None


class ProviderList(StateModel):
    providers: list[ProviderSummary] = computed("Configured providers.")


class ProvidersDataSource(DataSource[ProviderList]):
    kind: ClassVar[str]

    def read(self, config: ProviderList) -> ProviderList:
        summaries = [
            ProviderSummary(
                id=item.identifier,
                name=item.git_provider.name or None,
                git_provider_id=item.git_provider.git_provider_id or None,
                provider_type=item.git_provider.provider_type or self.kind,
                url=getattr(item, f"{self.kind}_url", "") or None,
            )
            for item in getattr(self.api, self.kind).list()
        ]
        return config.model_copy(update={"id": self.kind, "providers": summaries})


class GithubProvidersDataSource(ProvidersDataSource):
    type_name = "dokploy_github_providers"
    state_model = ProviderList
    kind = "github"
    description = "List GitHub app integrations."


class GitlabProvidersDataSource(ProvidersDataSource):
    type_name = "dokploy_gitlab_providers"
    state_model = ProviderList
    kind = "gitlab"
    description = "List GitLab integrations."


class BitbucketProvidersDataSource(ProvidersDataSource):
    type_name = "dokploy_bitbucket_providers"
    state_model = ProviderList
    kind = "bitbucket"
    description = "List Bitbucket integrations."


class GiteaProvidersDataSource(ProvidersDataSource):
    type_name = "dokploy_gitea_providers"
    state_model = ProviderList
    kind = "gitea"
    description = "List Gitea integrations."
