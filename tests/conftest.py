"""Shared test fixtures.

Provides a scripted fake of the platform API behind ``httpx.MockTransport``
so client, resource and service tests run without a Dokploy instance.
"""

from __future__ import annotations

import json
from dataclasses import dataclass
from typing import Any, Callable

import httpx
import pytest

from dokploy_client import Dokploy, DokployClient, Settings

BASE_URL = "https://dokploy.test/api"


@dataclass
class Call:
    method: str
    endpoint: str
    params: dict[str, str]
    body: Any
    headers: httpx.Headers


class FakePlatform:
    """Route table keyed by ``(method, endpoint)``.

    A route holds one or more responses. With several, each call consumes
    the next one and the last repeats. A response is any JSON value, raw
    ``bytes``, an ``httpx.Response``, or a callable taking the recorded
    :class:`Call` and returning one of those. Unknown routes answer 404.
    """

    def __init__(self):
        self.routes: dict[tuple[str, str], list[Any]] = {}
        self.calls: list[Call] = []

    def on(self, method: str, endpoint: str, *responses: Any) -> None:
        self.routes[(method, endpoint)] = list(responses)

    def get(self, endpoint: str, *responses: Any) -> None:
        self.on("GET", endpoint, *responses)

    def post(self, endpoint: str, *responses: Any) -> None:
        self.on("POST", endpoint, *responses)

    def calls_to(self, endpoint: str) -> list[Call]:
        return [c for c in self.calls if c.endpoint == endpoint]

    def endpoints(self) -> list[str]:
        return [c.endpoint for c in self.calls]

    def handler(self, request: httpx.Request) -> httpx.Response:
        call = Call(
            method=request.method,
            endpoint=request.url.path.rsplit("/", 1)[-1],
            params=dict(request.url.params),
            body=json.loads(request.content) if request.content else None,
            headers=request.headers,
        )
        self.calls.append(call)

        queue = self.routes.get((call.method, call.endpoint))
        if not queue:
            return httpx.Response(404, text=f"no route for {call.endpoint}")
        response = queue.pop(0) if len(queue) > 1 else queue[0]
        if callable(response):
            response = response(call)
        if isinstance(response, httpx.Response):
            return response
        if isinstance(response, bytes):
            return httpx.Response(200, content=response)
        return httpx.Response(200, json=response)


# ---------------------------------------------------------------------------
# Client fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def settings():
    return Settings(host=BASE_URL, api_key="test-key", env_update_attempts=5, env_update_backoff_ms=100)


@pytest.fixture
def platform():
    return FakePlatform()


@pytest.fixture
def client(settings, platform):
    c = DokployClient(settings, transport=httpx.MockTransport(platform.handler))
    yield c
    c.close()


@pytest.fixture
def sleeps():
    """Records every backoff delay instead of sleeping."""
    return []


@pytest.fixture
def api(client, sleeps):
    return Dokploy(client, sleep=sleeps.append)


# ---------------------------------------------------------------------------
# Factories
# ---------------------------------------------------------------------------


def make_application(**overrides: Any) -> dict[str, Any]:
    """An ``application.one`` body with sensible defaults."""
    app = {
        "applicationId": "app-1",
        "name": "web",
        "appName": "web-abc123",
        "environmentId": "env-1",
        "sourceType": "docker",
        "dockerImage": "nginx:latest",
        "env": "",
        "applicationStatus": "idle",
        "mounts": [],
        "ports": [],
        "redirects": [],
        "domains": [],
    }
    app.update(overrides)
    return app


def stateful_env(platform: FakePlatform, initial: str = "", app_id: str = "app-1") -> Callable[[], str]:
    """Wire ``application.one`` / ``saveEnvironment`` to a shared env blob.

    Returns an accessor for the stored blob.
    """
    store = {"env": initial}

    def read(call: Call) -> dict[str, Any]:
        return make_application(applicationId=app_id, env=store["env"])

    def save(call: Call) -> bool:
        store["env"] = call.body["env"]
        return True

    platform.get("application.one", read)
    platform.post("application.saveEnvironment", save)
    return lambda: store["env"]
