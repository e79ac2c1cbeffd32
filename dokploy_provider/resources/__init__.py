"""Registry of every resource and data source the provider offers."""

from __future__ import annotations

from dokploy_provider.resources.accounts import (
    ApiKeyResource,
    OrganizationResource,
    OrganizationsDataSource,
    UserDataSource,
    UserPermissionsResource,
    UsersDataSource,
)
from dokploy_provider.resources.ai import AIModelsDataSource, AIResource, AIsDataSource
from dokploy_provider.resources.applications import (
    ApplicationDataSource,
    ApplicationResource,
    ApplicationsDataSource,
)
from dokploy_provider.resources.backups import (
    BackupFilesDataSource,
    BackupResource,
    DestinationResource,
    VolumeBackupResource,
    VolumeBackupsDataSource,
)
from dokploy_provider.resources.base import DataSource, Resource, StateModel
from dokploy_provider.resources.compose import ComposeDataSource, ComposeResource, ComposesDataSource
from dokploy_provider.resources.databases import (
    DatabaseResource,
    MariaDBResource,
    MongoResource,
    MySQLResource,
    PostgresResource,
    RedisResource,
)
from dokploy_provider.resources.env_vars import EnvironmentVariableResource
from dokploy_provider.resources.git_providers import (
    BitbucketProviderResource,
    BitbucketProvidersDataSource,
    GiteaProviderResource,
    GiteaProvidersDataSource,
    GithubProvidersDataSource,
    GitlabProviderResource,
    GitlabProvidersDataSource,
)
from dokploy_provider.resources.infra import (
    CertificateResource,
    RegistryResource,
    ServerResource,
    ServersDataSource,
    SSHKeyResource,
)
from dokploy_provider.resources.mounts import MountResource
from dokploy_provider.resources.projects import EnvironmentResource, ProjectResource
from dokploy_provider.resources.routing import DomainResource, PortResource, RedirectResource

_RESOURCE_CLASSES: list[type[Resource]] = [
    ProjectResource,
    EnvironmentResource,
    ApplicationResource,
    ComposeResource,
    DatabaseResource,
    PostgresResource,
    MySQLResource,
    MariaDBResource,
    MongoResource,
    RedisResource,
    DomainResource,
    EnvironmentVariableResource,
    MountResource,
    PortResource,
    RedirectResource,
    RegistryResource,
    DestinationResource,
    BackupResource,
    VolumeBackupResource,
    SSHKeyResource,
    ServerResource,
    CertificateResource,
    AIResource,
    OrganizationResource,
    GitlabProviderResource,
    BitbucketProviderResource,
    GiteaProviderResource,
    ApiKeyResource,
    UserPermissionsResource,
]

_DATA_SOURCE_CLASSES: list[type[DataSource]] = [
    ApplicationDataSource,
    ApplicationsDataSource,
    ComposeDataSource,
    ComposesDataSource,
    ServersDataSource,
    VolumeBackupsDataSource,
    BackupFilesDataSource,
    AIsDataSource,
    AIModelsDataSource,
    UserDataSource,
    UsersDataSource,
    OrganizationsDataSource,
    GithubProvidersDataSource,
    GitlabProvidersDataSource,
    BitbucketProvidersDataSource,
    GiteaProvidersDataSource,
]

RESOURCES: dict[str, type[Resource]] = {cls.type_name: cls for cls in _RESOURCE_CLASSES}
DATA_SOURCES: dict[str, type[DataSource]] = {cls.type_name: cls for cls in _DATA_SOURCE_CLASSES}

__all__ = ["DATA_SOURCES", "RESOURCES", "DataSource", "Resource", "StateModel"]
