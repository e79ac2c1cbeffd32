"""Dispatch of lifecycle calls to resource and data-source adapters."""

from __future__ import annotations

from typing import Any

import structlog
from pydantic import ValidationError

from dokploy_client import Dokploy
from dokploy_provider.resources import DATA_SOURCES, RESOURCES, DataSource, Resource, StateModel
from dokploy_provider.schemas import ResourceCall, ResourceResult

logger = structlog.get_logger()


def load_state(model: type[StateModel], data: dict[str, Any], partial: bool = False) -> StateModel:
    """Validate *data* into *model*.

    With *partial*, data that does not validate (typically an import by id
    alone) is taken as is so reads and deletes can still address the entity.
    """
    try:
        return model.model_validate(data)
    except ValidationError:
        if not partial:
            raise
        return model.model_construct(**data)


def dump_state(state: StateModel) -> dict[str, Any]:
    return state.model_dump(mode="json")


class ProviderTools:
    """Every resource and data source, bound to one platform API."""

    def __init__(self, api: Dokploy):
        self.api = api

    def resource(self, type_name: str) -> Resource:
        cls = RESOURCES.get(type_name)
        if cls is None:
            raise ValueError(f"Unknown resource type: {type_name}")
        return cls(self.api)

    def data_source(self, type_name: str) -> DataSource:
        cls = DATA_SOURCES.get(type_name)
        if cls is None:
            raise ValueError(f"Unknown data source: {type_name}")
        return cls(self.api)

    # --- Resources ---

    def create(self, type_name: str, plan: dict[str, Any]) -> dict[str, Any]:
        resource = self.resource(type_name)
        state = resource.create(load_state(resource.state_model, plan))
        logger.info("resource_created", type_name=type_name, id=state.id)
        return dump_state(state)

    def read(self, type_name: str, state: dict[str, Any]) -> dict[str, Any] | None:
        resource = self.resource(type_name)
        current = resource.read(load_state(resource.state_model, state, partial=True))
        return dump_state(current) if current is not None else None

    def update(self, type_name: str, plan: dict[str, Any], prior: dict[str, Any]) -> dict[str, Any]:
        resource = self.resource(type_name)
        state = resource.update(
            load_state(resource.state_model, plan),
            load_state(resource.state_model, prior, partial=True),
        )
        logger.info("resource_updated", type_name=type_name, id=state.id)
        return dump_state(state)

    def delete(self, type_name: str, state: dict[str, Any]) -> None:
        resource = self.resource(type_name)
        resource.delete(load_state(resource.state_model, state, partial=True))
        logger.info("resource_deleted", type_name=type_name, id=state.get("id"))

    # --- Data sources ---

    def lookup(self, type_name: str, config: dict[str, Any]) -> dict[str, Any]:
        source = self.data_source(type_name)
        return dump_state(source.read(load_state(source.state_model, config)))

    def execute(self, call: ResourceCall) -> ResourceResult:
        """Run *call*. Errors propagate; the service turns them into results."""
        if call.kind == "data_source":
            if call.operation != "read":
                raise ValueError(f"Data sources only support read, got {call.operation}")
            return ResourceResult(success=True, state=self.lookup(call.type_name, call.state))

        if call.operation == "create":
            return ResourceResult(success=True, state=self.create(call.type_name, call.state))
        if call.operation == "read":
            state = self.read(call.type_name, call.state)
            return ResourceResult(success=True, state=state, removed=state is None)
        if call.operation == "update":
            if call.prior_state is None:
                raise ValueError("update requires prior_state")
            return ResourceResult(
                success=True, state=self.update(call.type_name, call.state, call.prior_state)
            )
        self.delete(call.type_name, call.state)
        return ResourceResult(success=True, removed=True)
