"""Application-scoped entities: applications and what hangs off them."""

from __future__ import annotations

import json
from typing import Any

from pydantic import Field, field_validator

from dokploy_client.schemas.base import WireModel


class Domain(WireModel):
    ID_FIELD = "domain_id"

    domain_id: str = ""
    application_id: str = ""
    compose_id: str = ""
    service_name: str = ""
    host: str = ""
    path: str = ""
    port: int = 0
    https: bool = False
    certificate_type: str = ""


class Mount(WireModel):
    ID_FIELD = "mount_id"

    mount_id: str = ""
    type: str = ""  # bind, volume, file
    host_path: str = ""
    volume_name: str = ""
    content: str = ""
    mount_path: str = ""
    service_type: str = ""  # application, postgres, mysql, mariadb, mongo, redis, compose
    file_path: str = ""
    service_id: str = ""
    application_id: str = ""
    postgres_id: str = ""
    mariadb_id: str = ""
    mongo_id: str = ""
    mysql_id: str = ""
    redis_id: str = ""
    compose_id: str = ""


class Port(WireModel):
    ID_FIELD = "port_id"

    port_id: str = ""
    published_port: int = 0
    target_port: int = 0
    protocol: str = ""  # tcp, udp
    publish_mode: str = ""  # ingress, host
    application_id: str = ""


class Redirect(WireModel):
    ID_FIELD = "redirect_id"

    redirect_id: str = ""
    regex: str = ""
    replacement: str = ""
    permanent: bool = False
    application_id: str = ""
    created_at: str = ""


class EnvironmentVariable(WireModel):
    """One key of an application's env blob.

    Not a platform entity: the id is synthesised as ``<applicationId>_<key>``.
    """

    ID_FIELD = "id"

    id: str = ""
    application_id: str = ""
    key: str = ""
    value: str = ""
    scope: str = "runtime"


class Application(WireModel):
    ID_FIELD = "application_id"

    # Core identifiers
    application_id: str = ""
    name: str = ""
    app_name: str = ""
    description: str = ""
    project_id: str = ""
    environment_id: str = ""
    server_id: str = ""

    source_type: str = ""  # github, gitlab, bitbucket, gitea, git, docker, drop

    # Custom git
    custom_git_url: str = ""
    custom_git_branch: str = ""
    custom_git_ssh_key_id: str = Field(default="", alias="customGitSSHKeyId")
    custom_git_build_path: str = ""
    enable_submodules: bool = False
    watch_paths: list[str] | None = None
    clean_cache: bool = False

    # GitHub
    repository: str = ""
    branch: str = ""
    owner: str = ""
    build_path: str = ""
    github_id: str = ""
    trigger_type: str = ""  # push, tag

    # GitLab
    gitlab_id: str = ""
    gitlab_project_id: int = 0
    gitlab_repository: str = ""
    gitlab_owner: str = ""
    gitlab_branch: str = ""
    gitlab_build_path: str = ""
    gitlab_path_namespace: str = ""

    # Bitbucket
    bitbucket_id: str = ""
    bitbucket_repository: str = ""
    bitbucket_owner: str = ""
    bitbucket_branch: str = ""
    bitbucket_build_path: str = ""

    # Gitea
    gitea_id: str = ""
    gitea_repository: str = ""
    gitea_owner: str = ""
    gitea_branch: str = ""
    gitea_build_path: str = ""

    # Docker image
    docker_image: str = ""
    username: str = ""
    password: str = ""
    registry_url: str = ""
    registry_id: str = ""

    # Build
    build_type: str = ""  # dockerfile, heroku_buildpacks, paketo_buildpacks, nixpacks, static, railpack
    dockerfile_path: str = Field(default="", alias="dockerfile")
    docker_context_path: str = ""
    docker_build_stage: str = ""
    publish_directory: str = ""
    dockerfile_content: str = ""
    drop_build_path: str = ""
    heroku_version: str = ""
    railpack_version: str = ""
    is_static_spa: bool = False

    # Environment
    env: str = ""
    build_args: str = ""
    build_secrets: str = ""
    create_env_file: bool = False

    # Runtime (the API sends limits as strings or numbers)
    auto_deploy: bool = False
    replicas: int = 0
    memory_limit: str = ""
    memory_reservation: str = ""
    cpu_limit: str = ""
    cpu_reservation: str = ""
    command: str = ""
    args: str = ""
    entrypoint: str = ""

    # Swarm
    health_check_swarm: dict[str, Any] | None = None
    restart_policy_swarm: dict[str, Any] | None = None
    placement_swarm: dict[str, Any] | None = None
    update_config_swarm: dict[str, Any] | None = None
    rollback_config_swarm: dict[str, Any] | None = None
    endpoint_spec_swarm: dict[str, Any] | None = None
    mode_swarm: dict[str, Any] | None = None
    labels_swarm: dict[str, Any] | None = None
    network_swarm: list[dict[str, Any]] | None = None
    stop_grace_period_swarm: int | None = None

    # Preview deployments
    is_preview_deployments_active: bool = False
    preview_env: str = ""
    preview_build_args: str = ""
    preview_build_secrets: str = ""
    preview_labels: str = ""
    preview_wildcard: str = ""
    preview_port: int = 0
    preview_https: bool = False
    preview_path: str = ""
    preview_certificate_type: str = ""
    preview_custom_cert_resolver: str = ""
    preview_limit: int = 0
    preview_require_collaborator_permissions: bool = False

    rollback_active: bool = False
    rollback_registry_id: str = ""
    build_server_id: str = ""
    build_registry_id: str = ""

    title: str = ""
    subtitle: str = ""
    enabled: bool = False
    application_status: str = ""  # idle, running, done, error

    domains: list[Domain] = Field(default_factory=list)
    created_at: str = ""

    @field_validator("watch_paths", mode="before")
    @classmethod
    def _watch_paths_from_text(cls, v: Any) -> Any:
        # Older platform versions store the list as a JSON string.
        if isinstance(v, str):
            try:
                parsed = json.loads(v) if v else []
            except ValueError:
                return [v]
            return parsed if isinstance(parsed, list) else [str(parsed)]
        return v
