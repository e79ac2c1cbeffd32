"""Tests for the read-only lookups."""

from __future__ import annotations

from dokploy_provider.resources.accounts import UserDataSource, UsersDataSource, UserList, UserState
from dokploy_provider.resources.applications import (
    ApplicationDataSource,
    ApplicationList,
    ApplicationLookup,
    ApplicationsDataSource,
)
from dokploy_provider.resources.backups import BackupFileList, BackupFilesDataSource
from dokploy_provider.resources.git_providers import GithubProvidersDataSource, GitlabProvidersDataSource, ProviderList
from tests.conftest import make_application


class TestApplicationLookups:
    def test_by_id(self, api, platform):
        platform.get("application.one", make_application(repository="web", branch="main", sourceType="github"))

        found = ApplicationDataSource(api).read(ApplicationLookup(id="app-1"))

        assert found.name == "web"
        assert found.branch == "main"
        assert found.source_type == "github"

    def test_filtered_by_environment(self, api, platform):
        platform.get(
            "environment.one",
            {
                "environmentId": "env-1",
                "applications": [make_application(applicationId="a"), make_application(applicationId="b", name="api")],
            },
        )

        found = ApplicationsDataSource(api).read(ApplicationList(environment_id="env-1"))

        assert found.id == "env-1"
        assert [(a.id, a.name) for a in found.applications] == [("a", "web"), ("b", "api")]
        assert platform.calls[0].params == {"environmentId": "env-1"}

    def test_all(self, api, platform):
        platform.get("project.all", [{"environments": [{"applications": [make_application()]}]}])

        found = ApplicationsDataSource(api).read(ApplicationList())

        assert found.id == "all"
        assert len(found.applications) == 1


class TestGitProviderLookups:
    def test_github_providers(self, api, platform):
        platform.get(
            "github.githubProviders",
            [{"githubId": "gh-1", "gitProvider": {"gitProviderId": "gp-1", "name": "org app", "providerType": "github"}}],
        )

        found = GithubProvidersDataSource(api).read(ProviderList())

        provider = found.providers[0]
        assert provider.id == "gh-1"
        assert provider.name == "org app"
        assert provider.git_provider_id == "gp-1"
        assert provider.url is None

    def test_gitlab_providers_under_key(self, api, platform):
        platform.get(
            "gitlab.gitlabProviders",
            {"providers": [{"gitlabId": "gl-1", "gitlabUrl": "https://gitlab.example", "gitProvider": {"name": "self-hosted"}}]},
        )

        found = GitlabProvidersDataSource(api).read(ProviderList())

        provider = found.providers[0]
        assert provider.url == "https://gitlab.example"
        assert provider.provider_type == "gitlab"


class TestUserLookups:
    def test_current_user(self, api, platform):
        platform.get(
            "user.get",
            {"id": "mem-1", "userId": "u-1", "organizationId": "org-1", "role": "owner", "user": {"email": "me@example.com"}},
        )

        me = UserDataSource(api).read(UserState())

        assert me.id == "mem-1"
        assert me.user_id == "u-1"
        assert me.email == "me@example.com"
        assert me.first_name is None

    def test_members(self, api, platform):
        platform.get("user.all", [{"id": "mem-1", "userId": "u-1"}, {"id": "mem-2", "userId": "u-2", "role": "member"}])

        found = UsersDataSource(api).read(UserList())

        assert [u.user_id for u in found.users] == ["u-1", "u-2"]
        assert found.users[1].role == "member"


class TestBackupFiles:
    def test_lists_objects_with_s3_casing(self, api, platform):
        platform.get(
            "backup.listBackupFiles",
            [{"Key": "daily/db-2024-06-01.sql.gz", "LastModified": "2024-06-01T03:00:00Z", "Size": 2048}],
        )

        found = BackupFilesDataSource(api).read(BackupFileList(destination_id="dest-1", search="daily/"))

        assert found.id == "dest-1:daily/"
        assert found.files[0].key == "daily/db-2024-06-01.sql.gz"
        assert found.files[0].size == 2048
        assert platform.calls[0].params == {"destinationId": "dest-1", "search": "daily/"}
