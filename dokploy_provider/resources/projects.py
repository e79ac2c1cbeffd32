from __future__ import annotations

from pydantic import Field

from dokploy_client.schemas import Environment
from dokploy_provider.resources.base import Resource, StateModel, from_entity, replaces


class ProjectState(StateModel):
    name: str = Field(description="Project name.")
    description: str | None = Field(default=None, description="Free-form description.")


class ProjectResource(Resource[ProjectState]):
    type_name = "dokploy_project"
    state_model = ProjectState
    description = "A project: the top-level grouping of environments and services."

    def create(self, plan: ProjectState) -> ProjectState:
        project = self.api.projects.create(plan.name, plan.description or "")
        return from_entity(ProjectState, project, plan)

    def fetch(self, state: ProjectState) -> ProjectState:
        return from_entity(ProjectState, self.api.projects.get(state.id), state)

    def update(self, plan: ProjectState, prior: ProjectState) -> ProjectState:
        project = self.api.projects.update(prior.id, plan.name, plan.description or "")
        return from_entity(ProjectState, project, plan)

    def remove(self, state: ProjectState) -> None:
        self.api.projects.delete(state.id)


class EnvironmentState(StateModel):
    project_id: str = replaces("Project the environment belongs to.")
    name: str = Field(description="Environment name, e.g. production.")
    description: str | None = Field(default=None, description="Free-form description.")


class EnvironmentResource(Resource[EnvironmentState]):
    type_name = "dokploy_environment"
    state_model = EnvironmentState
    description = "An environment inside a project."

    def create(self, plan: EnvironmentState) -> EnvironmentState:
        env = self.api.environments.create(plan.project_id, plan.name, plan.description or "")
        return from_entity(EnvironmentState, env, plan, keep=("project_id",))

    def fetch(self, state: EnvironmentState) -> EnvironmentState:
        env = self.api.environments.get(state.id)
        return from_entity(EnvironmentState, env, state, keep=("project_id",))

    def update(self, plan: EnvironmentState, prior: EnvironmentState) -> EnvironmentState:
        env = self.api.environments.update(
            Environment(
                environment_id=prior.id,
                project_id=plan.project_id,
                name=plan.name,
                description=plan.description or "",
            )
        )
        return from_entity(EnvironmentState, env, plan, keep=("project_id",))

    def remove(self, state: EnvironmentState) -> None:
        self.api.environments.delete(state.id)
