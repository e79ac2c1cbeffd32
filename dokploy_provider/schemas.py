"""Wire schemas of the provider service."""

from __future__ import annotations

from typing import Any, Literal

from pydantic import BaseModel, Field


class AttributeSchema(BaseModel):
    name: str
    type: str  # JSON schema type: string, integer, boolean, array, object
    description: str = ""
    required: bool = False
    computed: bool = False
    sensitive: bool = False
    requires_replace: bool = False


class ResourceSchema(BaseModel):
    type_name: str
    description: str = ""
    attributes: list[AttributeSchema] = Field(default_factory=list)


class ProviderManifest(BaseModel):
    provider_name: str = "dokploy"
    version: str
    resources: list[ResourceSchema] = Field(default_factory=list)
    data_sources: list[ResourceSchema] = Field(default_factory=list)


class ResourceCall(BaseModel):
    """One lifecycle operation on a resource, or one data-source read."""

    kind: Literal["resource", "data_source"] = "resource"
    type_name: str
    operation: Literal["create", "read", "update", "delete"]
    state: dict[str, Any] = Field(default_factory=dict)
    prior_state: dict[str, Any] | None = None  # update only


class ResourceResult(BaseModel):
    success: bool
    state: dict[str, Any] | None = None
    removed: bool = False  # read found nothing; drop it from state
    error: str | None = None


class HealthResponse(BaseModel):
    status: str = "ok"
