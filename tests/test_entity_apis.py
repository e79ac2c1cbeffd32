"""Tests for the per-entity API classes.

Most of these cover creates answered with a bare ``true``: the created
record has to be picked out of the parent's re-read collection by the
fields that were submitted.
"""

from __future__ import annotations

from datetime import datetime, timezone

import pytest

from dokploy_client import DecodeError, UnsupportedTypeError
from dokploy_client.api.ai import AIAPI
from dokploy_client.api.domains import certificate_type
from dokploy_client.api.mounts import same_mount
from dokploy_client.schemas import AI, Application, Compose, Domain, GiteaProvider, GitlabProvider, Mount, Port, Redirect
from tests.conftest import make_application


# ===================================================================
# Mounts
# ===================================================================


class TestMountCreate:
    def test_direct_response(self, api, platform):
        platform.post("mounts.create", {"mountId": "m-1", "type": "volume", "mountPath": "/data"})

        mount = api.mounts.create(
            Mount(type="volume", volume_name="data", mount_path="/data", service_id="app-1", service_type="application")
        )

        assert mount.mount_id == "m-1"
        assert platform.calls[0].body == {
            "type": "volume",
            "mountPath": "/data",
            "serviceId": "app-1",
            "serviceType": "application",
            "volumeName": "data",
        }

    def test_true_response_matches_by_submitted_fields(self, api, platform):
        platform.post("mounts.create", True)
        platform.get(
            "application.one",
            make_application(
                mounts=[
                    {"mountId": "m-other", "type": "volume", "volumeName": "cache", "mountPath": "/data"},
                    {"mountId": "m-new", "type": "volume", "volumeName": "data", "mountPath": "/data"},
                    {"mountId": "m-bind", "type": "bind", "hostPath": "/srv", "mountPath": "/data"},
                ]
            ),
        )

        mount = api.mounts.create(
            Mount(type="volume", volume_name="data", mount_path="/data", service_id="app-1", service_type="application")
        )

        assert mount.mount_id == "m-new"
        assert mount.service_id == "app-1"
        assert mount.service_type == "application"
        assert platform.calls_to("application.one")[0].params == {"applicationId": "app-1"}

    def test_true_response_reads_database_parent(self, api, platform):
        platform.post("mounts.create", b"")
        platform.get("postgres.one", {"postgresId": "pg-1", "mounts": [{"mountId": "m-1", "type": "bind", "hostPath": "/srv", "mountPath": "/var/lib"}]})

        mount = api.mounts.create(
            Mount(type="bind", host_path="/srv", mount_path="/var/lib", service_id="pg-1", service_type="postgres")
        )

        assert mount.mount_id == "m-1"

    def test_nothing_matches(self, api, platform):
        platform.post("mounts.create", True)
        platform.get("application.one", make_application(mounts=[]))

        with pytest.raises(DecodeError, match="mount created but not found"):
            api.mounts.create(Mount(type="volume", volume_name="v", mount_path="/v", service_id="app-1", service_type="application"))

    def test_unknown_service_type(self, api, platform):
        platform.post("mounts.create", True)

        with pytest.raises(UnsupportedTypeError):
            api.mounts.create(Mount(type="volume", volume_name="v", mount_path="/v", service_id="x", service_type="lambda"))


class TestSameMount:
    def test_file_path_only_compared_when_both_set(self):
        submitted = Mount(type="file", mount_path="/etc/app.conf", file_path="app.conf")
        assert same_mount(submitted, Mount(type="file", mount_path="/etc/app.conf"))
        assert not same_mount(submitted, Mount(type="file", mount_path="/etc/app.conf", file_path="other.conf"))

    def test_type_and_path_must_agree(self):
        submitted = Mount(type="bind", host_path="/srv", mount_path="/data")
        assert not same_mount(submitted, Mount(type="volume", host_path="/srv", mount_path="/data"))
        assert not same_mount(submitted, Mount(type="bind", host_path="/srv", mount_path="/other"))


# ===================================================================
# Ports and redirects
# ===================================================================


class TestPortCreate:
    def test_true_response_picks_last_match(self, api, platform):
        platform.post("port.create", True)
        platform.get(
            "application.one",
            make_application(
                ports=[
                    {"portId": "p-80", "publishedPort": 80, "targetPort": 80, "protocol": "tcp"},
                    {"portId": "p-old", "publishedPort": 8080, "targetPort": 3000, "protocol": "tcp"},
                    {"portId": "p-udp", "publishedPort": 8080, "targetPort": 3000, "protocol": "udp"},
                    {"portId": "p-new", "publishedPort": 8080, "targetPort": 3000, "protocol": "tcp"},
                ]
            ),
        )

        port = api.ports.create(Port(application_id="app-1", published_port=8080, target_port=3000, protocol="tcp"))

        assert port.port_id == "p-new"

    def test_update_reads_back(self, api, platform):
        platform.post("port.update", True)
        platform.get("port.one", {"portId": "p-1", "publishedPort": 9090, "targetPort": 3000})

        port = api.ports.update(Port(port_id="p-1", published_port=9090, target_port=3000))

        assert port.published_port == 9090
        assert platform.endpoints() == ["port.update", "port.one"]


class TestRedirectCreate:
    def test_true_response_picks_newest_identical_rule(self, api, platform):
        rule = {"regex": "^/old", "replacement": "/new", "permanent": True}
        platform.post("redirects.create", True)
        platform.get(
            "application.one",
            make_application(
                redirects=[
                    {**rule, "redirectId": "r-new", "createdAt": "2024-06-02T10:00:00.000Z"},
                    {**rule, "redirectId": "r-old", "createdAt": "2024-06-01T10:00:00.000Z"},
                    {**rule, "permanent": False, "redirectId": "r-temp", "createdAt": "2024-06-03T10:00:00.000Z"},
                ]
            ),
        )

        redirect = api.redirects.create(Redirect(application_id="app-1", **rule))

        assert redirect.redirect_id == "r-new"

    def test_update_with_true_refetches(self, api, platform):
        platform.post("redirects.update", True)
        platform.get("redirects.one", {"redirectId": "r-1", "regex": "^/a", "replacement": "/b", "permanent": False})

        redirect = api.redirects.update(Redirect(redirect_id="r-1", regex="^/a", replacement="/b"))

        assert redirect.replacement == "/b"


# ===================================================================
# Applications, compose, databases
# ===================================================================


class TestApplications:
    def test_create_accepts_wrapped_response(self, api, platform):
        platform.post("application.create", {"application": make_application(applicationId="app-9")})

        app = api.applications.create("web", "env-1", server_id="srv-1")

        assert app.application_id == "app-9"
        assert app.server_id == "srv-1"
        assert platform.calls[0].body == {"name": "web", "environmentId": "env-1", "serverId": "srv-1"}

    def test_update_true_refetches(self, api, platform):
        platform.post("application.update", True)
        platform.get("application.one", make_application(replicas=2))

        app = api.applications.update(Application(application_id="app-1", name="web", replicas=2))

        assert app.replicas == 2
        body = platform.calls_to("application.update")[0].body
        assert body["applicationId"] == "app-1"
        assert body["replicas"] == 2
        assert "enabled" not in body
        assert "memoryLimit" not in body

    def test_save_environment_always_sends_env(self, api, platform):
        platform.post("application.saveEnvironment", True)

        api.applications.save_environment("app-1", env="")

        assert platform.calls[0].body == {"applicationId": "app-1", "env": ""}

    def test_traefik_config_null_is_empty(self, api, platform):
        platform.get("application.readTraefikConfig", b"null")

        assert api.applications.read_traefik_config("app-1") == ""

    def test_list_walks_projects(self, api, platform):
        platform.get(
            "project.all",
            [
                {
                    "projectId": "p-1",
                    "environments": [
                        {"environmentId": "e-1", "applications": [make_application(applicationId="a")]},
                        {"environmentId": "e-2", "applications": None},
                    ],
                },
                {"projectId": "p-2", "environments": [{"environmentId": "e-3", "applications": [make_application(applicationId="b")]}]},
            ],
        )

        assert [a.application_id for a in api.applications.list()] == ["a", "b"]


class TestCompose:
    def test_create_pushes_settings(self, api, platform):
        platform.post("compose.create", {"composeId": "c-1", "name": "stack"})
        platform.post("compose.update", True)
        platform.get("compose.one", {"composeId": "c-1", "name": "stack", "sourceType": "raw", "composeFile": "services: {}"})

        compose = api.compose.create(Compose(name="stack", environment_id="env-1", compose_file="services: {}"))

        assert compose.compose_id == "c-1"
        assert compose.source_type == "raw"
        assert platform.endpoints() == ["compose.create", "compose.update", "compose.one"]
        update = platform.calls_to("compose.update")[0].body
        assert update["composeId"] == "c-1"
        assert update["sourceType"] == "raw"
        assert "environmentId" not in update

    def test_create_falls_back_to_created_record(self, api, platform):
        platform.post("compose.create", {"composeId": "c-1", "name": "stack"})
        platform.post("compose.update", {"unexpected": "shape"})

        compose = api.compose.create(Compose(name="stack", environment_id="env-1", custom_git_url="git@x:y.git"))

        assert compose.compose_id == "c-1"
        assert platform.calls_to("compose.update")[0].body["sourceType"] == "git"

    def test_update_moves_environment_and_clears_watch_paths(self, api, platform):
        platform.post("compose.update", {"compose": {"composeId": "c-1", "environmentId": "env-2"}})

        api.compose.update(Compose(compose_id="c-1", name="stack", environment_id="env-2", watch_paths=[]))

        body = platform.calls[0].body
        assert body["environmentId"] == "env-2"
        assert body["watchPaths"] == []


class TestDatabases:
    def test_generic_create_true_matches_in_project(self, api, platform):
        platform.post("postgres.create", True)
        platform.get(
            "project.one",
            {
                "projectId": "p-1",
                "environments": [
                    {"environmentId": "env-0", "postgres": [{"postgresId": "pg-x", "name": "db"}]},
                    {"environmentId": "env-1", "postgres": [{"postgresId": "pg-1", "name": "db", "appName": "db"}]},
                ],
            },
        )

        db = api.databases.create("p-1", "env-1", "postgres", "db", "secret", "postgres:16")

        assert db.identifier == "pg-1"
        assert db.database_id == "pg-1"
        assert db.type == "postgres"
        body = platform.calls[0].body
        assert body["databaseUser"] == "postgres"
        assert body["databaseName"] == "db"
        assert "databaseRootPassword" not in body

    def test_generic_create_direct(self, api, platform):
        platform.post("mysql.create", {"mysqlId": "my-1", "name": "db"})

        db = api.databases.create("p-1", "env-1", "mysql", "db", "secret", "mysql:8")

        assert db.database_id == "my-1"
        assert platform.calls[0].body["databaseRootPassword"] == "secret"

    def test_unsupported_type(self, api):
        with pytest.raises(UnsupportedTypeError, match="unsupported database type: sqlite"):
            api.databases.create("p-1", "env-1", "sqlite", "db", "secret", "sqlite")

    def test_get_reads_engine_endpoint(self, api, platform):
        platform.get("redis.one", {"redisId": "r-1", "name": "cache"})

        db = api.databases.get("r-1", "redis")

        assert db.database_id == "r-1"
        assert db.type == "redis"
        assert platform.calls[0].params == {"redisId": "r-1"}


# ===================================================================
# Domains and AI
# ===================================================================


class TestDomains:
    @pytest.mark.parametrize(
        "https,declared,expected",
        [(False, "letsencrypt", "none"), (True, "", "letsencrypt"), (True, "custom", "custom")],
    )
    def test_certificate_type(self, https, declared, expected):
        assert certificate_type(Domain(https=https, certificate_type=declared)) == expected

    def test_generate_accepts_bare_string(self, api, platform):
        platform.post("domain.generateDomain", b'"web-1a2b.traefik.me"')

        assert api.domains.generate("web") == "web-1a2b.traefik.me"


class TestAI:
    def test_create_picks_row_created_after_call(self, client, platform):
        now = datetime(2024, 6, 1, 12, 0, 0, tzinfo=timezone.utc)
        ai_api = AIAPI(client, now=lambda: now)
        platform.post("ai.create", True)
        platform.get(
            "ai.getAll",
            [
                {"aiId": "old", "name": "gpt", "createdAt": "2024-05-01T00:00:00Z"},
                {"aiId": "new", "name": "gpt", "createdAt": "2024-06-01T11:59:59.500Z"},
                {"aiId": "other", "name": "claude", "createdAt": "2024-06-01T12:00:01Z"},
            ],
        )

        ai = ai_api.create(AI(name="gpt", api_url="https://api.example", api_key="k", model="m"))

        assert ai.ai_id == "new"


# ===================================================================
# Git providers
# ===================================================================


class TestGitProviderPayloads:
    def test_gitlab_create_sends_oauth_tokens(self, api, platform):
        platform.post("gitlab.create", {"gitlabId": "gl-1", "name": "gl"})

        api.gitlab.create(
            GitlabProvider(
                name="gl",
                gitlab_url="https://gitlab.com",
                auth_id="u-1",
                access_token="tok",
                refresh_token="rt",
                expires_at=1718000000,
            )
        )

        body = platform.calls_to("gitlab.create")[0].body
        assert body["accessToken"] == "tok"
        assert body["refreshToken"] == "rt"
        assert body["expiresAt"] == 1718000000

    def test_gitlab_update_sends_oauth_tokens(self, api, platform):
        platform.post("gitlab.update", True)
        platform.get("gitlab.one", {"gitlabId": "gl-1", "name": "gl"})

        api.gitlab.update(GitlabProvider(gitlab_id="gl-1", name="gl", access_token="tok2", expires_at=5))

        body = platform.calls_to("gitlab.update")[0].body
        assert body["accessToken"] == "tok2"
        assert body["expiresAt"] == 5

    def test_zero_timestamps_are_not_sent(self, api, platform):
        platform.post("gitlab.create", {"gitlabId": "gl-1", "name": "gl"})

        api.gitlab.create(GitlabProvider(name="gl", gitlab_url="https://gitlab.com", auth_id="u-1"))

        body = platform.calls_to("gitlab.create")[0].body
        assert body == {"name": "gl", "gitlabUrl": "https://gitlab.com", "authId": "u-1"}

    def test_gitea_create_sends_scopes_and_last_login(self, api, platform):
        platform.post("gitea.create", {"giteaId": "gt-1", "name": "gt"})

        api.gitea.create(
            GiteaProvider(
                name="gt",
                gitea_url="https://gitea.example",
                access_token="tok",
                refresh_token="rt",
                expires_at=10,
                scopes="repo,read:user",
                last_authenticated_at=7,
            )
        )

        body = platform.calls_to("gitea.create")[0].body
        assert body["accessToken"] == "tok"
        assert body["refreshToken"] == "rt"
        assert body["expiresAt"] == 10
        assert body["scopes"] == "repo,read:user"
        assert body["lastAuthenticatedAt"] == 7

    def test_gitea_update_sends_scopes(self, api, platform):
        platform.post("gitea.update", {"giteaId": "gt-1", "name": "gt"})

        api.gitea.update(GiteaProvider(gitea_id="gt-1", name="gt", gitea_url="https://gitea.example", scopes="repo"))

        assert platform.calls_to("gitea.update")[0].body["scopes"] == "repo"
