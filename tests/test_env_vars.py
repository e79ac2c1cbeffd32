"""Tests for the environment-variable reconciler.

The platform only stores a whole env blob per application, so every
per-key change is a read-modify-write verified by reading back. These
tests drive it against a fake platform that can lose writes the way a
concurrent writer would.
"""

from __future__ import annotations

import httpx
import pytest

from dokploy_client import ApiError, EnvUpdateConflictError, NotFoundError
from dokploy_client.api.env_vars import split_variable_id, variable_id
from tests.conftest import make_application, stateful_env


# ===================================================================
# Variable ids
# ===================================================================


class TestVariableId:
    def test_round_trip_with_underscored_key(self):
        var_id = variable_id("abc123", "DATABASE_URL")
        assert var_id == "abc123_DATABASE_URL"
        assert split_variable_id(var_id) == ("abc123", "DATABASE_URL")

    @pytest.mark.parametrize("bad", ["", "noseparator", "_KEY", "app_"])
    def test_rejects_malformed(self, bad):
        with pytest.raises(ValueError):
            split_variable_id(bad)


# ===================================================================
# update_application_env
# ===================================================================


class TestCreateVariable:
    def test_adds_key_and_preserves_others(self, api, platform):
        stored = stateful_env(platform, "A=1\nB=2")

        var = api.env_vars.create_variable("app-1", "C", "3")

        assert stored() == "A=1\nB=2\nC=3"
        assert var.id == "app-1_C"
        assert var.value == "3"
        save = platform.calls_to("application.saveEnvironment")[0]
        assert save.body == {"applicationId": "app-1", "env": "A=1\nB=2\nC=3"}

    def test_overwrites_existing_value_in_place(self, api, platform):
        stored = stateful_env(platform, "A=1\nB=2")

        api.env_vars.create_variable("app-1", "A", "9")

        assert stored() == "A=9\nB=2"

    def test_same_value_writes_nothing(self, api, platform, sleeps):
        stateful_env(platform, "A=1\n# comment\nB=2")

        api.env_vars.create_variable("app-1", "B", "2")

        assert platform.calls_to("application.saveEnvironment") == []
        assert sleeps == []

    def test_create_env_file_is_forwarded(self, api, platform):
        stateful_env(platform, "")

        api.env_vars.create_variable("app-1", "A", "1", create_env_file=True)

        assert platform.calls_to("application.saveEnvironment")[0].body["createEnvFile"] is True


class TestConcurrentWriters:
    def test_lost_write_is_retried_on_fresh_read(self, api, platform, sleeps):
        store = {"env": "A=1"}
        saves = []

        def read(call):
            return make_application(env=store["env"])

        def save(call):
            saves.append(call.body["env"])
            if len(saves) == 1:
                # Another writer lands between our write and our read-back.
                store["env"] = "A=1\nX=9"
            else:
                store["env"] = call.body["env"]
            return True

        platform.get("application.one", read)
        platform.post("application.saveEnvironment", save)

        api.env_vars.create_variable("app-1", "B", "2")

        assert saves == ["A=1\nB=2", "A=1\nX=9\nB=2"]
        assert store["env"] == "A=1\nX=9\nB=2"
        assert sleeps == [0.1]

    def test_gives_up_after_all_attempts(self, api, platform, sleeps):
        # Every read-back shows someone else's blob.
        platform.get("application.one", make_application(env="OTHER=1"))
        platform.post("application.saveEnvironment", True)

        with pytest.raises(EnvUpdateConflictError):
            api.env_vars.create_variable("app-1", "A", "1")

        assert len(platform.calls_to("application.saveEnvironment")) == 5
        assert sleeps == [0.1, 0.2, 0.3, 0.4]

    def test_no_attempts_left_raises_conflict(self, api, platform, sleeps):
        api.env_vars.attempts = 0

        with pytest.raises(EnvUpdateConflictError, match="never attempted"):
            api.env_vars.create_variable("app-1", "A", "1")

        assert platform.calls == []
        assert sleeps == []

    def test_push_error_is_retried(self, api, platform, sleeps):
        store = {"env": ""}

        def save(call):
            if not sleeps:
                return httpx.Response(500, text="database is locked")
            store["env"] = call.body["env"]
            return True

        platform.get("application.one", lambda call: make_application(env=store["env"]))
        platform.post("application.saveEnvironment", save)

        api.env_vars.create_variable("app-1", "A", "1")

        assert store["env"] == "A=1"
        assert sleeps == [0.1]

    def test_last_push_error_is_raised(self, api, platform, sleeps):
        platform.get("application.one", make_application(env=""))
        platform.post("application.saveEnvironment", httpx.Response(503, text="unavailable"))

        with pytest.raises(ApiError) as exc:
            api.env_vars.create_variable("app-1", "A", "1")

        assert exc.value.status_code == 503
        assert len(sleeps) == 4

    def test_missing_application_fails_without_retry(self, api, platform, sleeps):
        platform.get("application.one", httpx.Response(404, text="Application not found"))

        with pytest.raises(NotFoundError):
            api.env_vars.create_variable("missing", "A", "1")

        assert sleeps == []
        assert platform.calls_to("application.saveEnvironment") == []


class TestReadAndDelete:
    def test_get_variables(self, api, platform):
        stateful_env(platform, "A=1\nB=two")

        variables = api.env_vars.get_variables("app-1")

        assert [(v.id, v.key, v.value) for v in variables] == [("app-1_A", "A", "1"), ("app-1_B", "B", "two")]

    def test_get_missing_variable(self, api, platform):
        stateful_env(platform, "A=1")

        with pytest.raises(NotFoundError):
            api.env_vars.get_variable("app-1", "B")

    def test_delete_keeps_other_keys(self, api, platform):
        stored = stateful_env(platform, "A=1\nB=2\nC=3")

        api.env_vars.delete_variable("app-1", "B")

        assert stored() == "A=1\nC=3"

    def test_delete_absent_key_is_noop(self, api, platform):
        stateful_env(platform, "A=1")

        api.env_vars.delete_variable("app-1", "B")

        assert platform.calls_to("application.saveEnvironment") == []
