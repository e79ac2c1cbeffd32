"""Response-shape normalization for mutating calls.

The platform is inconsistent about what a create or update returns: the
entity itself, the entity under a key named after it, a bare ``true``, or
an empty body. Each operation lists the shapes it is prepared to accept as
an ordered sequence of strategies; the first one that yields an entity with
a non-empty identifier wins.

The ``true``/empty handling re-reads the parent collection and picks the
record matching what was submitted. That is a workaround for the API not
returning what it created, not a protocol to copy elsewhere.
"""

from __future__ import annotations

import json
from dataclasses import dataclass
from typing import Any, Callable, Generic, Iterable, Sequence, TypeVar

import structlog
from pydantic import ValidationError

from dokploy_client.errors import DecodeError
from dokploy_client.schemas.base import WireModel

logger = structlog.get_logger()

M = TypeVar("M", bound=WireModel)
T = TypeVar("T")


@dataclass(frozen=True)
class DecodeStrategy(Generic[T]):
    """One way of reading a response body. ``attempt`` returns ``None`` to pass."""

    name: str
    attempt: Callable[[bytes], T | None]


def is_empty_or_true(raw: bytes) -> bool:
    body = raw.strip()
    return body == b"" or body == b"true"


def _load(raw: bytes) -> Any:
    try:
        return json.loads(raw)
    except ValueError:
        return None


def _validate(model: type[M], data: Any) -> M | None:
    if not isinstance(data, dict):
        return None
    try:
        entity = model.model_validate(data)
    except ValidationError:
        return None
    return entity if entity.identifier else None


def direct(model: type[M]) -> DecodeStrategy[M]:
    """The body is the entity."""
    return DecodeStrategy("direct", lambda raw: _validate(model, _load(raw)))


def wrapped(model: type[M], key: str) -> DecodeStrategy[M]:
    """The body is ``{key: entity}``."""

    def attempt(raw: bytes) -> M | None:
        data = _load(raw)
        if not isinstance(data, dict):
            return None
        return _validate(model, data.get(key))

    return DecodeStrategy(f"wrapped:{key}", attempt)


def refetch(fetch: Callable[[], T], *, always: bool = False) -> DecodeStrategy[T]:
    """Read the entity back from the platform.

    By default this only fires for an empty or ``true`` body; with
    ``always=True`` it also covers bodies no earlier strategy understood.
    Errors from ``fetch`` propagate.
    """

    def attempt(raw: bytes) -> T | None:
        if always or is_empty_or_true(raw):
            return fetch()
        return None

    return DecodeStrategy("refetch", attempt)


def decode(raw: bytes, strategies: Sequence[DecodeStrategy[T]], what: str) -> T:
    """Try *strategies* in order and return the first entity produced.

    Raises:
        DecodeError: no strategy accepted the body; the body is quoted.
    """
    for strategy in strategies:
        result = strategy.attempt(raw)
        if result is not None:
            logger.debug("decode_strategy_matched", what=what, strategy=strategy.name)
            return result
    raise DecodeError(f"unexpected {what} response", raw)


def match_submitted(
    candidates: Iterable[T],
    predicate: Callable[[T], bool],
    what: str,
    created_at: Callable[[T], Any] | None = None,
) -> T:
    """Pick the record a create call just produced out of a re-read collection.

    Candidates are filtered by the submitted discriminating fields. With
    several matches the most recently created wins when *created_at* is
    given, otherwise the last one listed.

    Raises:
        DecodeError: nothing matched.
    """
    pool = list(candidates)
    matches = [c for c in pool if predicate(c)]
    if not matches:
        raise DecodeError(f"{what} created but not found among {len(pool)} listed records")
    if created_at is not None:
        chosen = max(matches, key=created_at)
    else:
        chosen = matches[-1]
    logger.debug("created_resource_refetched", what=what, candidates=len(pool), matches=len(matches))
    return chosen


def parse_model(model: type[M], data: Any, what: str) -> M:
    """Validate already-parsed JSON as *model* (no identifier requirement)."""
    if not isinstance(data, dict):
        raise DecodeError(f"failed to parse {what} response: expected an object", json.dumps(data))
    try:
        return model.model_validate(data)
    except ValidationError as e:
        raise DecodeError(f"failed to parse {what} response ({e.error_count()} errors)", json.dumps(data)) from e


def parse_list(model: type[M], data: Any, what: str, keys: Sequence[str] = ()) -> list[M]:
    """Validate a JSON array of *model*, or one found under any of *keys*."""
    items = data
    if isinstance(data, dict):
        items = None
        for key in keys:
            if isinstance(data.get(key), list):
                items = data[key]
                break
    if not isinstance(items, list):
        raise DecodeError(f"failed to parse {what} response: expected a list", json.dumps(data))
    return [parse_model(model, item, what) for item in items]
