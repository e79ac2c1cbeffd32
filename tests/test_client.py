"""Tests for the request executor: URL building, headers and error mapping."""

from __future__ import annotations

import httpx
import pytest

from dokploy_client import ApiError, DecodeError, DokployClient, NotFoundError, Settings
from tests.conftest import BASE_URL


class TestRequest:
    def test_sends_api_key_and_json_body(self, client, platform):
        platform.post("project.create", {"projectId": "p-1"})

        client.post("project.create", {"name": "demo"})

        call = platform.calls[0]
        assert call.endpoint == "project.create"
        assert call.headers["x-api-key"] == "test-key"
        assert call.headers["content-type"] == "application/json"
        assert call.body == {"name": "demo"}

    def test_endpoint_is_relative_to_base_path(self, settings):
        seen = []

        def handler(request):
            seen.append(str(request.url))
            return httpx.Response(200, json={})

        trailing = settings.model_copy(update={"host": BASE_URL + "/"})
        with DokployClient(trailing, transport=httpx.MockTransport(handler)) as c:
            c.get("application.one", applicationId="a-1")

        assert seen == [f"{BASE_URL}/application.one?applicationId=a-1"]

    def test_none_params_are_dropped(self, client, platform):
        platform.get("volumeBackups.list", [])

        client.get("volumeBackups.list", id="svc-1", serverId=None)

        assert platform.calls[0].params == {"id": "svc-1"}

    def test_returns_raw_body(self, client, platform):
        platform.post("application.update", True)

        assert client.post("application.update", {}).strip() == b"true"


class TestErrors:
    def test_404_raises_not_found_with_body(self, client, platform):
        platform.get("application.one", httpx.Response(404, text="Application not found"))

        with pytest.raises(NotFoundError) as exc:
            client.get("application.one", applicationId="missing")

        assert exc.value.body == "Application not found"
        assert exc.value.endpoint == "application.one"

    def test_unknown_route_is_not_found(self, client):
        with pytest.raises(NotFoundError):
            client.get("nothing.here")

    def test_other_status_raises_api_error(self, client, platform):
        platform.post("project.create", httpx.Response(500, text="boom"))

        with pytest.raises(ApiError) as exc:
            client.post("project.create", {"name": "x"})

        err = exc.value
        assert err.status_code == 500
        assert err.body == "boom"
        assert "500" in str(err) and "boom" in str(err)

    def test_4xx_is_api_error_not_not_found(self, client, platform):
        platform.post("project.create", httpx.Response(401, text="unauthorized"))

        with pytest.raises(ApiError) as exc:
            client.post("project.create", {})

        assert not isinstance(exc.value, NotFoundError)
        assert exc.value.status_code == 401

    def test_transport_errors_are_not_wrapped(self, settings):
        def handler(request):
            raise httpx.ConnectError("connection refused", request=request)

        with DokployClient(settings, transport=httpx.MockTransport(handler)) as c:
            with pytest.raises(httpx.ConnectError):
                c.get("project.all")

    def test_malformed_json_is_decode_error(self, client, platform):
        platform.get("project.all", b"<html>oops</html>")

        with pytest.raises(DecodeError) as exc:
            client.get_json("project.all", "projects")

        assert "projects" in str(exc.value)
        assert exc.value.body == "<html>oops</html>"


class TestSettings:
    def test_reads_prefixed_environment(self, monkeypatch):
        monkeypatch.setenv("DOKPLOY_HOST", "https://example.test/api")
        monkeypatch.setenv("DOKPLOY_API_KEY", "k")
        monkeypatch.setenv("DOKPLOY_ENV_UPDATE_ATTEMPTS", "3")

        s = Settings()

        assert s.host == "https://example.test/api"
        assert s.api_key == "k"
        assert s.env_update_attempts == 3
        assert s.env_update_backoff_ms == 100
