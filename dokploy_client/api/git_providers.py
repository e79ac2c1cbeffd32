"""Git hosting integrations.

GitLab, Bitbucket and Gitea share one create/read/update shape and differ
only in endpoint names and fields, so one class serves all three,
parametrised by a :class:`ProviderKind`. GitHub apps are installed through
the platform UI; only listing them is supported.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Generic, TypeVar

from dokploy_client.api.base import BaseAPI
from dokploy_client.client import DokployClient
from dokploy_client.decoding import decode, direct, match_submitted, refetch, wrapped
from dokploy_client.payload import omit_empty, positive
from dokploy_client.schemas.base import WireModel
from dokploy_client.schemas.git_providers import (
    BitbucketProvider,
    BitbucketProviderListItem,
    GiteaProvider,
    GiteaProviderListItem,
    GithubProvider,
    GitlabProvider,
    GitlabProviderListItem,
)

P = TypeVar("P", bound=WireModel)


@dataclass(frozen=True)
class ProviderKind:
    name: str  # endpoint prefix: gitlab, bitbucket, gitea
    model: type[WireModel]
    list_item: type[WireModel]
    # Fields always sent on create besides the name; the rest are omit-empty,
    # with zero timestamps counting as empty.
    required: tuple[str, ...] = ()
    optional: tuple[str, ...] = ()
    # Whether update must also carry the shared gitProviderId.
    update_sends_git_provider_id: bool = False

    @property
    def id_param(self) -> str:
        return f"{self.name}Id"

    @property
    def list_keys(self) -> tuple[str, ...]:
        return ("providers", f"{self.name}Providers")


GITLAB = ProviderKind(
    name="gitlab",
    model=GitlabProvider,
    list_item=GitlabProviderListItem,
    required=("gitlabUrl", "authId"),
    optional=(
        "applicationId",
        "redirectUri",
        "secret",
        "accessToken",
        "refreshToken",
        "expiresAt",
        "groupName",
    ),
    update_sends_git_provider_id=True,
)
BITBUCKET = ProviderKind(
    name="bitbucket",
    model=BitbucketProvider,
    list_item=BitbucketProviderListItem,
    required=("authId",),
    optional=("bitbucketUsername", "bitbucketEmail", "appPassword", "apiToken", "bitbucketWorkspaceName"),
    update_sends_git_provider_id=True,
)
GITEA = ProviderKind(
    name="gitea",
    model=GiteaProvider,
    list_item=GiteaProviderListItem,
    required=("giteaUrl",),
    optional=(
        "redirectUri",
        "clientId",
        "clientSecret",
        "accessToken",
        "refreshToken",
        "expiresAt",
        "scopes",
        "lastAuthenticatedAt",
        "giteaUsername",
        "organizationName",
    ),
    update_sends_git_provider_id=True,
)


class GithubProvidersAPI(BaseAPI):
    def list(self) -> list[GithubProvider]:
        return self._list(
            "github.githubProviders",
            GithubProvider,
            "GitHub providers",
            keys=("providers", "githubProviders"),
        )


class GitProvidersAPI(BaseAPI, Generic[P]):
    def __init__(self, client: DokployClient, kind: ProviderKind):
        super().__init__(client)
        self.kind = kind

    def _fields(self, provider: WireModel, names: tuple[str, ...]) -> dict[str, Any]:
        wire = provider.to_wire()
        return {name: wire.get(name) for name in names}

    def _optional(self, provider: WireModel) -> dict[str, Any]:
        fields = self._fields(provider, self.kind.optional)
        return omit_empty(
            **{
                name: positive(value) if isinstance(value, int) and not isinstance(value, bool) else value
                for name, value in fields.items()
            }
        )

    def create(self, provider: P) -> P:
        name = getattr(provider, "name")
        payload: dict[str, Any] = {"name": name}
        payload.update(self._fields(provider, self.kind.required))
        payload.update(self._optional(provider))
        raw = self.client.post(f"{self.kind.name}.create", payload)

        def find_created() -> P:
            item = match_submitted(
                self.list(),
                lambda p: p.git_provider.name == name,
                f"{self.kind.name} provider",
            )
            return self.get(item.identifier)

        return decode(
            raw,
            [
                direct(self.kind.model),
                wrapped(self.kind.model, self.kind.name),
                refetch(find_created, always=True),
            ],
            f"{self.kind.name} provider",
        )

    def get(self, provider_id: str) -> P:
        return self._get(
            f"{self.kind.name}.one",
            self.kind.model,
            f"{self.kind.name} provider",
            **{self.kind.id_param: provider_id},
        )

    def update(self, provider: P) -> P:
        provider_id = provider.identifier
        payload: dict[str, Any] = {
            self.kind.id_param: provider_id,
            "name": getattr(provider, "name"),
        }
        if self.kind.update_sends_git_provider_id:
            payload.update(omit_empty(gitProviderId=getattr(provider, "git_provider_id", "")))
        payload.update(omit_empty(**self._fields(provider, self.kind.required)))
        payload.update(self._optional(provider))
        raw = self.client.post(f"{self.kind.name}.update", payload)
        return decode(
            raw,
            [direct(self.kind.model), refetch(lambda: self.get(provider_id), always=True)],
            f"{self.kind.name} provider",
        )

    def delete(self, git_provider_id: str) -> None:
        """Delete through the shared record; takes the ``gitProviderId``."""
        self.client.post("gitProvider.remove", {"gitProviderId": git_provider_id})

    def list(self) -> list[Any]:
        return self._list(
            f"{self.kind.name}.{self.kind.name}Providers",
            self.kind.list_item,
            f"{self.kind.name} providers",
            keys=self.kind.list_keys,
        )
