from dokploy_client.schemas.applications import (
    Application,
    Domain,
    EnvironmentVariable,
    Mount,
    Port,
    Redirect,
)
from dokploy_client.schemas.backups import Backup, BackupFile, Destination, VolumeBackup
from dokploy_client.schemas.base import WireModel
from dokploy_client.schemas.compose import Compose
from dokploy_client.schemas.databases import (
    DATABASE_TYPES,
    ENGINE_MODELS,
    Database,
    MariaDB,
    MongoDB,
    MySQL,
    Postgres,
    Redis,
)
from dokploy_client.schemas.git_providers import (
    BitbucketProvider,
    BitbucketProviderListItem,
    GiteaProvider,
    GiteaProviderListItem,
    GithubProvider,
    GitlabProvider,
    GitlabProviderListItem,
    GitProviderInfo,
)
from dokploy_client.schemas.infra import Certificate, Registry, Server, SSHKey
from dokploy_client.schemas.projects import Environment, Project
from dokploy_client.schemas.users import (
    AI,
    AIModel,
    ApiKey,
    Organization,
    OrganizationMember,
    User,
    UserDetails,
    UserPermissions,
)

__all__ = [
    "AI",
    "AIModel",
    "ApiKey",
    "Application",
    "Backup",
    "BackupFile",
    "BitbucketProvider",
    "BitbucketProviderListItem",
    "Certificate",
    "Compose",
    "DATABASE_TYPES",
    "Database",
    "Destination",
    "Domain",
    "ENGINE_MODELS",
    "Environment",
    "EnvironmentVariable",
    "GitProviderInfo",
    "GiteaProvider",
    "GiteaProviderListItem",
    "GithubProvider",
    "GitlabProvider",
    "GitlabProviderListItem",
    "MariaDB",
    "MongoDB",
    "Mount",
    "MySQL",
    "Organization",
    "OrganizationMember",
    "Port",
    "Postgres",
    "Project",
    "Redirect",
    "Redis",
    "Registry",
    "SSHKey",
    "Server",
    "User",
    "UserDetails",
    "UserPermissions",
    "VolumeBackup",
    "WireModel",
]
