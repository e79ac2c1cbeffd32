"""Git hosting integrations (GitHub, GitLab, Bitbucket, Gitea).

Every provider wraps a shared ``gitProvider`` record holding the display
name; deleting goes through that record rather than the typed one.
"""

from __future__ import annotations

from pydantic import Field

from dokploy_client.schemas.base import WireModel


class GitProviderInfo(WireModel):
    ID_FIELD = "git_provider_id"

    git_provider_id: str = ""
    name: str = ""
    provider_type: str = ""
    created_at: str = ""
    organization_id: str = ""
    user_id: str = ""


class GithubProvider(WireModel):
    ID_FIELD = "github_id"

    github_id: str = ""
    git_provider: GitProviderInfo = Field(default_factory=GitProviderInfo)


class GitlabProviderListItem(WireModel):
    ID_FIELD = "gitlab_id"

    gitlab_id: str = ""
    git_provider: GitProviderInfo = Field(default_factory=GitProviderInfo)
    gitlab_url: str = ""


class GitlabProvider(WireModel):
    ID_FIELD = "gitlab_id"

    gitlab_id: str = ""
    git_provider_id: str = ""
    name: str = ""
    gitlab_url: str = ""
    application_id: str = ""
    redirect_uri: str = ""
    secret: str = ""
    access_token: str = ""
    refresh_token: str = ""
    group_name: str = ""
    expires_at: int = 0
    auth_id: str = ""
    organization_id: str = ""
    created_at: str = ""
    git_provider: GitProviderInfo | None = None


class BitbucketProviderListItem(WireModel):
    ID_FIELD = "bitbucket_id"

    bitbucket_id: str = ""
    git_provider: GitProviderInfo = Field(default_factory=GitProviderInfo)


class BitbucketProvider(WireModel):
    ID_FIELD = "bitbucket_id"

    bitbucket_id: str = ""
    git_provider_id: str = ""
    name: str = ""
    bitbucket_username: str = ""
    bitbucket_email: str = ""
    app_password: str = ""
    api_token: str = ""
    bitbucket_workspace_name: str = ""
    auth_id: str = ""
    organization_id: str = ""
    created_at: str = ""
    git_provider: GitProviderInfo | None = None


class GiteaProviderListItem(WireModel):
    ID_FIELD = "gitea_id"

    gitea_id: str = ""
    git_provider: GitProviderInfo = Field(default_factory=GitProviderInfo)


class GiteaProvider(WireModel):
    ID_FIELD = "gitea_id"

    gitea_id: str = ""
    git_provider_id: str = ""
    name: str = ""
    gitea_url: str = ""
    redirect_uri: str = ""
    client_id: str = ""
    client_secret: str = ""
    access_token: str = ""
    refresh_token: str = ""
    expires_at: int = 0
    scopes: str = ""
    last_authenticated_at: int = 0
    gitea_username: str = ""
    organization_name: str = ""
    organization_id: str = ""
    created_at: str = ""
    git_provider: GitProviderInfo | None = None
