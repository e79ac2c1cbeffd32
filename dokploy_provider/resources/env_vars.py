from __future__ import annotations

from pydantic import Field

from dokploy_client.api.env_vars import split_variable_id
from dokploy_provider.resources.base import Resource, StateModel, replaces, sensitive


class EnvironmentVariableState(StateModel):
    application_id: str = replaces("Application owning the variable.")
    key: str = replaces("Variable name.")
    value: str = sensitive("Variable value.", default=...)
    scope: str = Field(default="runtime", description="Informational; the platform stores one runtime blob.")
    create_env_file: bool | None = Field(default=None, description="Also write a .env file into the build context.")


def _address(state: EnvironmentVariableState) -> tuple[str, str]:
    if state.id:
        return split_variable_id(state.id)
    return state.application_id, state.key


class EnvironmentVariableResource(Resource[EnvironmentVariableState]):
    """One key of an application's environment blob.

    Changes are read-modify-write of the whole blob with compare-and-set
    retries, so variables managed here coexist with other writers.
    """

    type_name = "dokploy_environment_variable"
    state_model = EnvironmentVariableState
    description = "A single environment variable on an application."

    def create(self, plan: EnvironmentVariableState) -> EnvironmentVariableState:
        var = self.api.env_vars.create_variable(
            plan.application_id, plan.key, plan.value, plan.scope, plan.create_env_file
        )
        return plan.model_copy(update={"id": var.id})

    def fetch(self, state: EnvironmentVariableState) -> EnvironmentVariableState:
        application_id, key = _address(state)
        var = self.api.env_vars.get_variable(application_id, key)
        return state.model_copy(
            update={"id": var.id, "application_id": application_id, "key": key, "value": var.value}
        )

    def update(self, plan: EnvironmentVariableState, prior: EnvironmentVariableState) -> EnvironmentVariableState:
        return self.create(plan)

    def remove(self, state: EnvironmentVariableState) -> None:
        application_id, key = _address(state)
        self.api.env_vars.delete_variable(application_id, key, state.create_env_file)
