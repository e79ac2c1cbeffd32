"""Base model for entities mirrored from the platform's JSON."""

from __future__ import annotations

from typing import Any, ClassVar

from pydantic import BaseModel, ConfigDict, model_validator
from pydantic.alias_generators import to_camel


class WireModel(BaseModel):
    """An entity as the platform sends it.

    Field names are snake_case in Python and camelCase on the wire. JSON
    ``null`` falls back to the field default, so an unset string reads as
    ``""`` the same way an omitted one does.
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore",
        coerce_numbers_to_str=True,
    )

    # Name of the attribute holding the server-assigned identifier.
    ID_FIELD: ClassVar[str] = ""

    @model_validator(mode="before")
    @classmethod
    def _drop_nulls(cls, data: Any) -> Any:
        if isinstance(data, dict):
            return {k: v for k, v in data.items() if v is not None}
        return data

    @property
    def identifier(self) -> str:
        if not self.ID_FIELD:
            return ""
        return getattr(self, self.ID_FIELD) or ""

    def to_wire(self) -> dict[str, Any]:
        return self.model_dump(by_alias=True)
