from __future__ import annotations

from pydantic import Field

from dokploy_client.schemas import AI
from dokploy_provider.resources.base import DataSource, Resource, StateModel, computed, from_entity, sensitive, to_entity


class AIState(StateModel):
    name: str = Field(description="Display name.")
    api_url: str = Field(description="OpenAI-compatible base URL.")
    api_key: str = sensitive("API key for the provider.", default=...)
    model: str = Field(description="Model identifier.")
    is_enabled: bool = True


class AIResource(Resource[AIState]):
    type_name = "dokploy_ai"
    state_model = AIState
    description = "An AI provider used by the platform's assistant features."

    def create(self, plan: AIState) -> AIState:
        return from_entity(AIState, self.api.ai.create(to_entity(AI, plan)), plan)

    def fetch(self, state: AIState) -> AIState:
        return from_entity(AIState, self.api.ai.get(state.id), state)

    def update(self, plan: AIState, prior: AIState) -> AIState:
        plan = plan.model_copy(update={"id": prior.id})
        return from_entity(AIState, self.api.ai.update(to_entity(AI, plan)), plan)

    def remove(self, state: AIState) -> None:
        self.api.ai.delete(state.id)


class AISummary(StateModel):
    name: str | None = None
    api_url: str | None = None
    model: str | None = None
    is_enabled: bool | None = None


class AIList(StateModel):
    ais: list[AISummary] = computed("All AI provider settings.")


class AIsDataSource(DataSource[AIList]):
    type_name = "dokploy_ais"
    state_model = AIList
    description = "List AI provider settings."

    def read(self, config: AIList) -> AIList:
        return config.model_copy(
            update={"id": "ais", "ais": [from_entity(AISummary, ai) for ai in self.api.ai.list()]}
        )


class AIModelSummary(StateModel):
    owned_by: str | None = None


class AIModelList(StateModel):
    api_url: str = Field(description="OpenAI-compatible base URL.")
    api_key: str = sensitive("API key for the provider.", default=...)
    models: list[AIModelSummary] = computed("Models the endpoint offers.")


class AIModelsDataSource(DataSource[AIModelList]):
    type_name = "dokploy_ai_models"
    state_model = AIModelList
    description = "List the models an AI endpoint offers."

    def read(self, config: AIModelList) -> AIModelList:
        models = self.api.ai.models(config.api_url, config.api_key)
        return config.model_copy(
            update={"id": config.api_url, "models": [from_entity(AIModelSummary, m) for m in models]}
        )
