"""Helpers for building request payloads."""

from __future__ import annotations

from typing import Any


def omit_empty(**fields: Any) -> dict[str, Any]:
    """Keep only the fields that carry a value.

    ``None``, empty strings and empty collections are dropped; ``False`` and
    ``0`` are kept, so callers pass ``positive(count)`` where the API treats
    zero as "unset".
    """
    return {key: value for key, value in fields.items() if not is_empty(value)}


def is_empty(value: Any) -> bool:
    if value is None:
        return True
    if isinstance(value, (str, list, tuple, dict)):
        return len(value) == 0
    return False


def positive(value: int | None) -> int | None:
    """Return *value* if it is a positive number, else ``None``."""
    if value is not None and value > 0:
        return value
    return None
