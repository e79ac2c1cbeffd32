"""Base classes for resource and data-source adapters.

An adapter translates between a declared state model (what the
infrastructure framework persists) and the platform's wire models. State
models are plain pydantic models whose field names match the wire model's,
so most conversions are mechanical: :func:`to_entity` going out and
:func:`from_entity` coming back.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, ClassVar, Generic, Iterable, TypeVar

import structlog
from pydantic import BaseModel, ConfigDict, Field

from dokploy_client import Dokploy, NotFoundError
from dokploy_client.schemas.base import WireModel

logger = structlog.get_logger()

S = TypeVar("S", bound="StateModel")
W = TypeVar("W", bound=WireModel)


# ---- Attribute markers ----


def computed(description: str) -> Any:
    """An attribute only the platform sets."""
    return Field(default=None, description=description, json_schema_extra={"computed": True})


def sensitive(description: str, default: Any = None) -> Any:
    """A secret. Never echoed back reliably, so the declared value is kept."""
    return Field(default=default, description=description, json_schema_extra={"sensitive": True})


def replaces(description: str, default: Any = ...) -> Any:
    """An attribute that cannot change in place; changing it recreates the resource."""
    return Field(default=default, description=description, json_schema_extra={"requires_replace": True})


def field_flag(model: type[BaseModel], name: str, flag: str) -> bool:
    extra = model.model_fields[name].json_schema_extra
    return isinstance(extra, dict) and bool(extra.get(flag))


class StateModel(BaseModel):
    """Declared state of one resource or data source."""

    model_config = ConfigDict(extra="ignore")

    id: str | None = computed("Identifier assigned by the platform.")


# ---- Conversions ----


def absent_if_empty(value: Any) -> Any:
    """Map the empty string the API uses for "unset" to an absent value."""
    if value == "":
        return None
    return value


def to_entity(model: type[W], state: StateModel, **overrides: Any) -> W:
    """Build the wire model for *state*; unset attributes take the model default."""
    data = {
        name: value
        for name, value in state.model_dump().items()
        if value is not None and name != "id" and name in model.model_fields
    }
    if state.id and model.ID_FIELD:
        data[model.ID_FIELD] = state.id
    data.update(overrides)
    return model.model_validate(data)


def from_entity(
    state_model: type[S],
    entity: WireModel,
    prior: StateModel | None = None,
    keep: Iterable[str] = (),
) -> S:
    """Build state from what the platform returned.

    Attributes the entity does not carry are taken from *prior*. So are
    required and sensitive attributes, and those named in *keep*, when the
    platform sends them back empty.
    """
    keep = set(keep)
    # getattr copes with partially constructed priors (lookups by id alone).
    prior_data = {name: getattr(prior, name, None) for name in state_model.model_fields} if prior is not None else {}
    data: dict[str, Any] = {}
    for name in state_model.model_fields:
        if name == "id":
            data[name] = entity.identifier or prior_data.get("id")
            continue
        if name not in type(entity).model_fields:
            data[name] = prior_data.get(name)
            continue
        value = absent_if_empty(getattr(entity, name))
        if value is None and (
            name in keep
            or field_flag(state_model, name, "sensitive")
            or state_model.model_fields[name].is_required()
        ):
            value = prior_data.get(name)
        data[name] = value
    return state_model.model_validate({k: v for k, v in data.items() if v is not None})


# ---- Adapters ----


class Resource(ABC, Generic[S]):
    """A managed platform entity with a create / read / update / delete lifecycle."""

    type_name: ClassVar[str]
    state_model: ClassVar[type[StateModel]]
    description: ClassVar[str] = ""

    def __init__(self, api: Dokploy):
        self.api = api

    @abstractmethod
    def create(self, plan: S) -> S:
        """Create the entity and return its state."""

    @abstractmethod
    def fetch(self, state: S) -> S:
        """Read the entity back. Raises ``NotFoundError`` when it is gone."""

    @abstractmethod
    def update(self, plan: S, prior: S) -> S:
        """Apply *plan* to the entity described by *prior*."""

    @abstractmethod
    def remove(self, state: S) -> None:
        """Delete the entity."""

    def read(self, state: S) -> S | None:
        """Current state, or ``None`` when the entity no longer exists."""
        try:
            return self.fetch(state)
        except NotFoundError:
            logger.info("resource_not_found", type_name=self.type_name, id=state.id)
            return None

    def delete(self, state: S) -> None:
        try:
            self.remove(state)
        except NotFoundError:
            logger.info("resource_already_deleted", type_name=self.type_name, id=state.id)


class DataSource(ABC, Generic[S]):
    """A read-only lookup."""

    type_name: ClassVar[str]
    state_model: ClassVar[type[StateModel]]
    description: ClassVar[str] = ""

    def __init__(self, api: Dokploy):
        self.api = api

    @abstractmethod
    def read(self, config: S) -> S:
        """Resolve *config* into the full state."""
