"""Application resource and the application lookups."""

from __future__ import annotations

from typing import Any

import structlog
from pydantic import Field

from dokploy_client.schemas import Application
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


class ApplicationState(StateModel):
    name: str = Field(description="Display name.")
    environment_id: str = Field(description="Environment the application lives in. Changing it moves the application.")
    app_name: str | None = Field(default=None, description="Unique slug used for the container; generated when omitted.")
    description: str | None = None
    server_id: str | None = replaces("Remote server to deploy to.", default=None)
    project_id: str | None = computed("Project owning the environment.")

    source_type: str | None = Field(
        default=None,
        description="github, gitlab, bitbucket, gitea, git, docker or drop. Inferred from the other source attributes when omitted.",
    )

    custom_git_url: str | None = None
    custom_git_branch: str | None = None
    custom_git_ssh_key_id: str | None = None
    custom_git_build_path: str | None = None
    enable_submodules: bool = False
    watch_paths: list[str] | None = None

    repository: str | None = None
    branch: str | None = None
    owner: str | None = None
    build_path: str | None = None
    github_id: str | None = None
    trigger_type: str | None = None

    gitlab_id: str | None = None
    gitlab_project_id: int | None = None
    gitlab_repository: str | None = None
    gitlab_owner: str | None = None
    gitlab_branch: str | None = None
    gitlab_build_path: str | None = None
    gitlab_path_namespace: str | None = None

    bitbucket_id: str | None = None
    bitbucket_repository: str | None = None
    bitbucket_owner: str | None = None
    bitbucket_branch: str | None = None
    bitbucket_build_path: str | None = None

    gitea_id: str | None = None
    gitea_repository: str | None = None
    gitea_owner: str | None = None
    gitea_branch: str | None = None
    gitea_build_path: str | None = None

    docker_image: str | None = None
    username: str | None = Field(default=None, description="Registry user for docker sources.")
    password: str | None = sensitive("Registry password for docker sources.")
    registry_url: str | None = None
    registry_id: str | None = None

    build_type: str = Field(default="nixpacks", description="dockerfile, heroku_buildpacks, paketo_buildpacks, nixpacks, static or railpack.")
    dockerfile_path: str | None = None
    docker_context_path: str | None = None
    docker_build_stage: str | None = None
    publish_directory: str | None = None

    env: str | None = sensitive("Runtime environment as a KEY=VALUE blob.")
    build_args: str | None = sensitive("Build arguments as a KEY=VALUE blob.")
    build_secrets: str | None = sensitive("Build secrets as a KEY=VALUE blob.")
    create_env_file: bool | None = None

    auto_deploy: bool = False
    replicas: int | None = None
    memory_limit: str | None = None
    memory_reservation: str | None = None
    cpu_limit: str | None = None
    cpu_reservation: str | None = None
    command: str | None = None
    args: str | None = None
    entrypoint: str | None = None

    is_preview_deployments_active: bool = False
    preview_port: int | None = None
    preview_path: str | None = None
    preview_https: bool = False
    preview_certificate_type: str | None = None
    preview_limit: int | None = None

    traefik_config: str | None = Field(default=None, description="Raw Traefik dynamic configuration for the service.")
    deploy_on_create: bool = Field(default=False, description="Trigger a deployment right after creation.")

    application_status: str | None = computed("Last deployment status: idle, running, done or error.")


def infer_source_type(plan: ApplicationState) -> str:
    if plan.source_type:
        return plan.source_type
    if plan.docker_image:
        return "docker"
    if plan.custom_git_url:
        return "git"
    if plan.gitlab_id:
        return "gitlab"
    if plan.bitbucket_id:
        return "bitbucket"
    if plan.gitea_id:
        return "gitea"
    return "github"


class ApplicationResource(Resource[ApplicationState]):
    type_name = "dokploy_application"
    state_model = ApplicationState
    description = "An application built from a git source or a docker image."

    def create(self, plan: ApplicationState) -> ApplicationState:
        plan = plan.model_copy(update={"source_type": infer_source_type(plan)})
        created = self.api.applications.create(
            name=plan.name,
            environment_id=plan.environment_id,
            app_name=plan.app_name or "",
            description=plan.description or "",
            server_id=plan.server_id or "",
        )
        app_id = created.application_id
        if created.app_name:
            plan = plan.model_copy(update={"app_name": created.app_name})

        self._configure(app_id, plan)
        if plan.traefik_config:
            self.api.applications.update_traefik_config(app_id, plan.traefik_config)

        state = self._state(app_id, plan)
        if plan.deploy_on_create:
            try:
                self.api.applications.deploy(app_id, plan.server_id or "")
            except Exception as e:
                # The application exists; a failed trigger should not lose it.
                logger.warning("application_deploy_trigger_failed", application_id=app_id, error=str(e))
        return state

    def fetch(self, state: ApplicationState) -> ApplicationState:
        return self._state(state.id, state)

    def update(self, plan: ApplicationState, prior: ApplicationState) -> ApplicationState:
        app_id = prior.id
        plan = plan.model_copy(update={"id": app_id, "source_type": infer_source_type(plan)})
        if plan.environment_id != prior.environment_id:
            self.api.applications.move(app_id, plan.environment_id)

        self._configure(app_id, plan)
        if plan.traefik_config:
            self.api.applications.update_traefik_config(app_id, plan.traefik_config)
        elif prior.traefik_config:
            self.api.applications.update_traefik_config(app_id, "")
        return self._state(app_id, plan)

    def remove(self, state: ApplicationState) -> None:
        self.api.applications.delete(state.id)

    # ---- Steps ----

    def _configure(self, app_id: str, plan: ApplicationState) -> None:
        apps = self.api.applications
        apps.update(to_entity(Application, plan, application_id=app_id))
        if plan.source_type != "docker":
            apps.save_build_type(
                app_id,
                build_type=plan.build_type,
                dockerfile=plan.dockerfile_path or "",
                docker_context_path=plan.docker_context_path or "",
                docker_build_stage=plan.docker_build_stage or "",
                publish_directory=plan.publish_directory or "",
            )
        self._save_source(app_id, plan)
        if plan.env is not None or plan.build_args is not None or plan.build_secrets is not None:
            apps.save_environment(
                app_id,
                env=plan.env or "",
                build_args=plan.build_args or "",
                build_secrets=plan.build_secrets or "",
                create_env_file=plan.create_env_file,
            )

    def _save_source(self, app_id: str, plan: ApplicationState) -> None:
        apps = self.api.applications
        source = plan.source_type
        common: dict[str, Any] = {"watch_paths": plan.watch_paths, "enable_submodules": plan.enable_submodules}
        if source == "github":
            apps.save_github_provider(
                app_id,
                repository=plan.repository or "",
                branch=plan.branch or "",
                owner=plan.owner or "",
                build_path=plan.build_path or "",
                github_id=plan.github_id or "",
                trigger_type=plan.trigger_type or "",
                **common,
            )
        elif source == "gitlab":
            apps.save_gitlab_provider(
                app_id,
                gitlab_id=plan.gitlab_id or "",
                gitlab_project_id=plan.gitlab_project_id or 0,
                gitlab_repository=plan.gitlab_repository or "",
                gitlab_owner=plan.gitlab_owner or "",
                gitlab_branch=plan.gitlab_branch or "",
                gitlab_build_path=plan.gitlab_build_path or "",
                gitlab_path_namespace=plan.gitlab_path_namespace or "",
                **common,
            )
        elif source == "bitbucket":
            apps.save_bitbucket_provider(
                app_id,
                bitbucket_id=plan.bitbucket_id or "",
                bitbucket_repository=plan.bitbucket_repository or "",
                bitbucket_owner=plan.bitbucket_owner or "",
                bitbucket_branch=plan.bitbucket_branch or "",
                bitbucket_build_path=plan.bitbucket_build_path or "",
                **common,
            )
        elif source == "gitea":
            apps.save_gitea_provider(
                app_id,
                gitea_id=plan.gitea_id or "",
                gitea_repository=plan.gitea_repository or "",
                gitea_owner=plan.gitea_owner or "",
                gitea_branch=plan.gitea_branch or "",
                gitea_build_path=plan.gitea_build_path or "",
                **common,
            )
        elif source == "git":
            apps.save_git_provider(
                app_id,
                custom_git_url=plan.custom_git_url or "",
                custom_git_branch=plan.custom_git_branch or "",
                custom_git_build_path=plan.custom_git_build_path or "",
                custom_git_ssh_key_id=plan.custom_git_ssh_key_id or "",
                **common,
            )
        elif source == "docker":
            apps.save_docker_provider(
                app_id,
                docker_image=plan.docker_image or "",
                username=plan.username or "",
                password=plan.password or "",
                registry_url=plan.registry_url or "",
                registry_id=plan.registry_id or "",
            )

    def _state(self, app_id: str, prior: ApplicationState) -> ApplicationState:
        app = self.api.applications.get(app_id)
        state = from_entity(ApplicationState, app, prior)
        try:
            traefik = self.api.applications.read_traefik_config(app_id)
        except Exception as e:
            logger.warning("traefik_config_read_failed", application_id=app_id, error=str(e))
            return state
        return state.model_copy(update={"traefik_config": traefik or None})


# ---- Data sources ----


class ApplicationLookup(StateModel):
    id: str = Field(description="Application id to look up.")
    name: str | None = computed("Display name.")
    app_name: str | None = computed("Container slug.")
    description: str | None = computed("Description.")
    environment_id: str | None = computed("Environment id.")
    server_id: str | None = computed("Server id.")
    source_type: str | None = computed("Source type.")
    repository: str | None = computed("Repository.")
    branch: str | None = computed("Branch.")
    docker_image: str | None = computed("Docker image.")
    build_type: str | None = computed("Build type.")
    auto_deploy: bool | None = computed("Whether pushes deploy automatically.")
    replicas: int | None = computed("Replica count.")
    application_status: str | None = computed("Last deployment status.")


class ApplicationDataSource(DataSource[ApplicationLookup]):
    type_name = "dokploy_application"
    state_model = ApplicationLookup
    description = "Look up one application by id."

    def read(self, config: ApplicationLookup) -> ApplicationLookup:
        return from_entity(ApplicationLookup, self.api.applications.get(config.id), config)


class ApplicationSummary(StateModel):
    name: str | None = None
    app_name: str | None = None
    environment_id: str | None = None
    source_type: str | None = None
    application_status: str | None = None


class ApplicationList(StateModel):
    environment_id: str | None = Field(default=None, description="Only list applications in this environment.")
    applications: list[ApplicationSummary] = computed("Matching applications.")


class ApplicationsDataSource(DataSource[ApplicationList]):
    type_name = "dokploy_applications"
    state_model = ApplicationList
    description = "List applications, optionally filtered by environment."

    def read(self, config: ApplicationList) -> ApplicationList:
        if config.environment_id:
            apps = self.api.applications.list_by_environment(config.environment_id)
        else:
            apps = self.api.applications.list()
        return config.model_copy(
            update={
                "id": config.environment_id or "all",
                "applications": [from_entity(ApplicationSummary, app) for app in apps],
            }
        )
