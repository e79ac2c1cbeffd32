from __future__ import annotations

from dokploy_client.api.base import BaseAPI
from dokploy_client.decoding import decode, direct, match_submitted, refetch
from dokploy_client.schemas.applications import Redirect


class RedirectsAPI(BaseAPI):
    def create(self, redirect: Redirect) -> Redirect:
        raw = self.client.post(
            "redirects.create",
            {
                "regex": redirect.regex,
                "replacement": redirect.replacement,
                "permanent": redirect.permanent,
                "applicationId": redirect.application_id,
            },
        )

        def find_created() -> Redirect:
            # Identical rules may exist; the newest one is ours.
            return match_submitted(
                self.list_by_application(redirect.application_id),
                lambda r: (
                    r.regex == redirect.regex
                    and r.replacement == redirect.replacement
                    and r.permanent == redirect.permanent
                ),
                "redirect",
                created_at=lambda r: r.created_at,
            )

        return decode(raw, [direct(Redirect), refetch(find_created)], "redirect")

    def get(self, redirect_id: str) -> Redirect:
        return self._get("redirects.one", Redirect, "redirect", redirectId=redirect_id)

    def update(self, redirect: Redirect) -> Redirect:
        raw = self.client.post(
            "redirects.update",
            {
                "redirectId": redirect.redirect_id,
                "regex": redirect.regex,
                "replacement": redirect.replacement,
                "permanent": redirect.permanent,
            },
        )
        return decode(
            raw,
            [direct(Redirect), refetch(lambda: self.get(redirect.redirect_id), always=True)],
            "redirect",
        )

    def delete(self, redirect_id: str) -> None:
        self.client.post("redirects.delete", {"redirectId": redirect_id})

    def list_by_application(self, application_id: str) -> list[Redirect]:
        return self._children("application", application_id, "redirects", Redirect)
