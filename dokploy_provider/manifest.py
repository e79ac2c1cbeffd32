"""Provider manifest: the attribute schema of every resource and data source."""

from __future__ import annotations

from typing import Any

from dokploy_provider import __version__
from dokploy_provider.resources import DATA_SOURCES, RESOURCES
from dokploy_provider.resources.base import StateModel, field_flag
from dokploy_provider.schemas import AttributeSchema, ProviderManifest, ResourceSchema


def _json_type(prop: dict[str, Any]) -> str:
    if "type" in prop:
        return prop["type"]
    for option in prop.get("anyOf", []):
        if option.get("type") not in (None, "null"):
            return option["type"]
    return "object"


def attributes(state_model: type[StateModel]) -> list[AttributeSchema]:
    properties = state_model.model_json_schema()["properties"]
    return [
        AttributeSchema(
            name=name,
            type=_json_type(properties.get(name, {})),
            description=field.description or "",
            required=field.is_required(),
            computed=field_flag(state_model, name, "computed"),
            sensitive=field_flag(state_model, name, "sensitive"),
            requires_replace=field_flag(state_model, name, "requires_replace"),
        )
        for name, field in state_model.model_fields.items()
    ]


def build_manifest() -> ProviderManifest:
    return ProviderManifest(
        version=__version__,
        resources=[
            ResourceSchema(type_name=name, description=cls.description, attributes=attributes(cls.state_model))
            for name, cls in sorted(RESOURCES.items())
        ],
        data_sources=[
            ResourceSchema(type_name=name, description=cls.description, attributes=attributes(cls.state_model))
            for name, cls in sorted(DATA_SOURCES.items())
        ],
    )
