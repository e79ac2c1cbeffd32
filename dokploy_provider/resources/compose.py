from __future__ import annotations

import structlog
from pydantic import Field

from dokploy_client.schemas import Compose
from dokploy_provider.resources.base import (
    DataSource,
    Resource,
    StateModel,
    computed,
    from_entity,
    replaces,
    sensitive,
    to_entity,
)

logger = structlog.get_logger()


class ComposeState(StateModel):
    name: str = Field(description="Display name.")
    environment_id: str = Field(description="Environment the service lives in. Changing it moves the service.")
    app_name: str | None = Field(default=None, description="Unique slug; defaults to the name.")
    description: str | None = None
    server_id: str | None = replaces("Remote server to deploy to.", default=None)

    compose_type: str = Field(default="docker-compose", description="docker-compose or stack.")
    compose_file: str | None = Field(default=None, description="Inline compose file for the raw source type.")
    compose_path: str | None = Field(default=None, description="Path of the compose file inside the repository.")
    source_type: str | None = Field(default=None, description="github, gitlab, bitbucket, gitea, git or raw; inferred when omitted.")

    custom_git_url: str | None = None
    custom_git_branch: str | None = None
    custom_git_ssh_key_id: str | None = None
    enable_submodules: bool = False
    watch_paths: list[str] | None = None

    repository: str | None = None
    branch: str | None = None
    owner: str | None = None
    github_id: str | None = None
    trigger_type: str | None = None

    gitlab_id: str | None = None
    gitlab_project_id: int | None = None
    gitlab_repository: str | None = None
    gitlab_owner: str | None = None
    gitlab_branch: str | None = None
    gitlab_path_namespace: str | None = None

    bitbucket_id: str | None = None
    bitbucket_repository: str | None = None
    bitbucket_owner: str | None = None
    bitbucket_branch: str | None = None

    gitea_id: str | None = None
    gitea_repository: str | None = None
    gitea_owner: str | None = None
    gitea_branch: str | None = None

    auto_deploy: bool = False
    command: str | None = None
    suffix: str | None = None
    randomize: bool = False
    isolated_deployment: bool = False
    isolated_deployments_volume: bool = False
    env: str | None = sensitive("Environment as a KEY=VALUE blob.")

    deploy_on_create: bool = Field(default=False, description="Trigger a deployment right after creation.")
    compose_status: str | None = computed("Last deployment status.")


class ComposeResource(Resource[ComposeState]):
    type_name = "dokploy_compose"
    state_model = ComposeState
    description = "A docker-compose or swarm stack service."

    def create(self, plan: ComposeState) -> ComposeState:
        compose = self.api.compose.create(to_entity(Compose, plan))
        state = from_entity(ComposeState, compose, plan)
        if plan.deploy_on_create:
            try:
                self.api.compose.deploy(compose.compose_id, plan.server_id or "")
            except Exception as e:
                logger.warning("compose_deploy_trigger_failed", compose_id=compose.compose_id, error=str(e))
        return state

    def fetch(self, state: ComposeState) -> ComposeState:
        return from_entity(ComposeState, self.api.compose.get(state.id), state)

    def update(self, plan: ComposeState, prior: ComposeState) -> ComposeState:
        if plan.environment_id != prior.environment_id:
            self.api.compose.move(prior.id, plan.environment_id)
        compose = self.api.compose.update(to_entity(Compose, plan, compose_id=prior.id))
        return from_entity(ComposeState, compose, plan.model_copy(update={"id": prior.id}))

    def remove(self, state: ComposeState) -> None:
        self.api.compose.delete(state.id)


class ComposeLookup(StateModel):
    id: str = Field(description="Compose id to look up.")
    name: str | None = computed("Display name.")
    app_name: str | None = computed("Slug.")
    description: str | None = computed("Description.")
    environment_id: str | None = computed("Environment id.")
    server_id: str | None = computed("Server id.")
    compose_type: str | None = computed("docker-compose or stack.")
    source_type: str | None = computed("Source type.")
    compose_path: str | None = computed("Compose file path.")
    repository: str | None = computed("Repository.")
    branch: str | None = computed("Branch.")
    auto_deploy: bool | None = computed("Whether pushes deploy automatically.")
    compose_status: str | None = computed("Last deployment status.")


class ComposeDataSource(DataSource[ComposeLookup]):
    type_name = "dokploy_compose"
    state_model = ComposeLookup
    description = "Look up one compose service by id."

    def read(self, config: ComposeLookup) -> ComposeLookup:
        return from_entity(ComposeLookup, self.api.compose.get(config.id), config)


class ComposeSummary(StateModel):
    name: str | None = None
    app_name: str | None = None
    environment_id: str | None = None
    compose_type: str | None = None
    source_type: str | None = None
    compose_status: str | None = None


class ComposeList(StateModel):
    environment_id: str | None = Field(default=None, description="Only list services in this environment.")
    composes: list[ComposeSummary] = computed("Matching compose services.")


class ComposesDataSource(DataSource[ComposeList]):
    type_name = "dokploy_composes"
    state_model = ComposeList
    description = "List compose services, optionally filtered by environment."

    def read(self, config: ComposeList) -> ComposeList:
        found = self.api.compose.list(config.environment_id or "")
        return config.model_copy(
            update={
                "id": config.environment_id or "all",
                "composes": [from_entity(ComposeSummary, c) for c in found],
            }
        )
