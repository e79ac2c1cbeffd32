"""AI provider settings (``ai.*``)."""

from __future__ import annotations

from datetime import datetime, timedelta, timezone
from typing import Callable

from dokploy_client.api.base import BaseAPI
from dokploy_client.client import DokployClient
from dokploy_client.decoding import match_submitted
from dokploy_client.schemas.users import AI, AIModel

# Clock skew tolerated between us and the platform when spotting new rows.
CREATED_SKEW = timedelta(seconds=1)


def parse_timestamp(value: str) -> datetime | None:
    """Parse an RFC 3339 timestamp; ``None`` when absent or malformed."""
    if not value:
        return None
    try:
        ts = datetime.fromisoformat(value.replace("Z", "+00:00"))
    except ValueError:
        return None
    if ts.tzinfo is None:
        ts = ts.replace(tzinfo=timezone.utc)
    return ts


class AIAPI(BaseAPI):
    def __init__(self, client: DokployClient, now: Callable[[], datetime] | None = None):
        super().__init__(client)
        self._now = now or (lambda: datetime.now(timezone.utc))

    def create(self, ai: AI) -> AI:
        """Create a provider setting.

        ``ai.create`` returns nothing useful, so the new row is picked out of
        ``ai.getAll``: same name, created no earlier than just before the call.
        """
        started = self._now() - CREATED_SKEW
        self.client.post(
            "ai.create",
            {
                "name": ai.name,
                "apiUrl": ai.api_url,
                "apiKey": ai.api_key,
                "model": ai.model,
                "isEnabled": ai.is_enabled,
            },
        )

        def is_new(candidate: AI) -> bool:
            created = parse_timestamp(candidate.created_at)
            return candidate.name == ai.name and created is not None and created >= started

        return match_submitted(
            self.list(),
            is_new,
            "AI settings",
            created_at=lambda c: parse_timestamp(c.created_at),
        )

    def get(self, ai_id: str) -> AI:
        return self._get("ai.get", AI, "AI settings", aiId=ai_id)

    def update(self, ai: AI) -> AI:
        self.client.post(
            "ai.update",
            {
                "aiId": ai.ai_id,
                "name": ai.name,
                "apiUrl": ai.api_url,
                "apiKey": ai.api_key,
                "model": ai.model,
                "isEnabled": ai.is_enabled,
            },
        )
        return self.get(ai.ai_id)

    def delete(self, ai_id: str) -> None:
        self.client.post("ai.delete", {"aiId": ai_id})

    def list(self) -> list[AI]:
        return self._list("ai.getAll", AI, "AI settings")

    def models(self, api_url: str, api_key: str) -> list[AIModel]:
        """Models offered by an OpenAI-compatible endpoint."""
        return self._list("ai.getModels", AIModel, "AI models", apiUrl=api_url, apiKey=api_key)
