from __future__ import annotations

from pydantic import Field

from dokploy_client.schemas.applications import Domain
from dokploy_client.schemas.base import WireModel


class Compose(WireModel):
    """A docker-compose (or swarm stack) service."""

    ID_FIELD = "compose_id"

    compose_id: str = ""
    name: str = ""
    app_name: str = ""
    description: str = ""
    project_id: str = ""
    environment_id: str = ""
    server_id: str = ""

    compose_file: str = ""
    compose_path: str = ""
    compose_type: str = ""  # docker-compose, stack

    source_type: str = ""  # github, gitlab, bitbucket, gitea, git, raw

    custom_git_url: str = ""
    custom_git_branch: str = ""
    custom_git_ssh_key_id: str = Field(default="", alias="customGitSSHKeyId")
    custom_git_build_path: str = ""
    enable_submodules: bool = False
    watch_paths: list[str] | None = None

    repository: str = ""
    branch: str = ""
    owner: str = ""
    github_id: str = ""
    trigger_type: str = ""

    gitlab_id: str = ""
    gitlab_project_id: int = 0
    gitlab_repository: str = ""
    gitlab_owner: str = ""
    gitlab_branch: str = ""
    gitlab_build_path: str = ""
    gitlab_path_namespace: str = ""

    bitbucket_id: str = ""
    bitbucket_repository: str = ""
    bitbucket_owner: str = ""
    bitbucket_branch: str = ""
    bitbucket_build_path: str = ""

    gitea_id: str = ""
    gitea_repository: str = ""
    gitea_owner: str = ""
    gitea_branch: str = ""
    gitea_build_path: str = ""

    auto_deploy: bool = False
    replicas: int = 0

    command: str = ""
    suffix: str = ""
    randomize: bool = False
    isolated_deployment: bool = False
    isolated_deployments_volume: bool = False

    env: str = ""
    compose_status: str = ""
    refresh_token: str = ""

    domains: list[Domain] = Field(default_factory=list)
    created_at: str = ""
