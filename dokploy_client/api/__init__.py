"""One API object per entity family, bundled behind :class:`Dokploy`."""

from __future__ import annotations

import time
from typing import Callable

import httpx

from dokploy_client.api.ai import AIAPI
from dokploy_client.api.applications import ApplicationsAPI
from dokploy_client.api.backups import BackupsAPI, DestinationsAPI, VolumeBackupsAPI
from dokploy_client.api.certificates import CertificatesAPI
from dokploy_client.api.compose import ComposeAPI
from dokploy_client.api.databases import DatabasesAPI, EngineAPI
from dokploy_client.api.domains import DomainsAPI
from dokploy_client.api.env_vars import EnvironmentVariablesAPI
from dokploy_client.api.git_providers import (
    BITBUCKET,
    GITEA,
    GITLAB,
    GithubProvidersAPI,
    GitProvidersAPI,
)
from dokploy_client.api.mounts import MountsAPI
from dokploy_client.api.organizations import OrganizationsAPI
from dokploy_client.api.ports import PortsAPI
from dokploy_client.api.projects import EnvironmentsAPI, ProjectsAPI
from dokploy_client.api.redirects import RedirectsAPI
from dokploy_client.api.registries import RegistriesAPI
from dokploy_client.api.servers import ServersAPI, SSHKeysAPI
from dokploy_client.api.users import UsersAPI
from dokploy_client.client import DokployClient
from dokploy_client.config import Settings
from dokploy_client.schemas.databases import MariaDB, MongoDB, MySQL, Postgres, Redis


class Dokploy:
    """Everything the provider needs from one platform instance."""

    def __init__(self, client: DokployClient, sleep: Callable[[float], None] = time.sleep):
        self.client = client
        self.projects = ProjectsAPI(client)
        self.environments = EnvironmentsAPI(client)
        self.applications = ApplicationsAPI(client)
        self.env_vars = EnvironmentVariablesAPI(client, self.applications, sleep=sleep)
        self.compose = ComposeAPI(client)
        self.databases = DatabasesAPI(client)
        self.postgres = EngineAPI(client, Postgres)
        self.mysql = EngineAPI(client, MySQL)
        self.mariadb = EngineAPI(client, MariaDB)
        self.mongo = EngineAPI(client, MongoDB)
        self.redis = EngineAPI(client, Redis)
        self.domains = DomainsAPI(client)
        self.mounts = MountsAPI(client)
        self.ports = PortsAPI(client)
        self.redirects = RedirectsAPI(client)
        self.registries = RegistriesAPI(client)
        self.destinations = DestinationsAPI(client)
        self.backups = BackupsAPI(client)
        self.volume_backups = VolumeBackupsAPI(client)
        self.servers = ServersAPI(client)
        self.ssh_keys = SSHKeysAPI(client)
        self.certificates = CertificatesAPI(client)
        self.ai = AIAPI(client)
        self.organizations = OrganizationsAPI(client)
        self.users = UsersAPI(client)
        self.github = GithubProvidersAPI(client)
        self.gitlab = GitProvidersAPI(client, GITLAB)
        self.bitbucket = GitProvidersAPI(client, BITBUCKET)
        self.gitea = GitProvidersAPI(client, GITEA)

    @classmethod
    def from_settings(
        cls,
        settings: Settings,
        http_client: httpx.Client | None = None,
        transport: httpx.BaseTransport | None = None,
        sleep: Callable[[float], None] = time.sleep,
    ) -> Dokploy:
        return cls(DokployClient(settings, http_client, transport), sleep=sleep)

    def close(self) -> None:
        self.client.close()

    def __enter__(self) -> Dokploy:
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()


__all__ = ["Dokploy"]
