"""Tests for the provider manifest: every registered type has a usable schema.

These walk the resource and data-source registries and verify structural
correctness: names follow the ``dokploy_`` convention, attributes have
valid types, and the flags the framework relies on are set where expected.
"""

from __future__ import annotations

import pytest

from dokploy_provider.manifest import build_manifest
from dokploy_provider.resources import DATA_SOURCES, RESOURCES

VALID_TYPES = {"string", "integer", "number", "boolean", "array", "object"}

EXPECTED_RESOURCES = {
    "project", "environment", "application", "compose", "database", "postgres", "mysql",
    "mariadb", "mongo", "redis", "domain", "environment_variable", "mount", "port",
    "redirect", "registry", "destination", "backup", "volume_backup", "ssh_key", "server",
    "certificate", "ai", "organization", "gitlab_provider", "bitbucket_provider",
    "gitea_provider", "api_key", "user_permissions",
}

EXPECTED_DATA_SOURCES = {
    "application", "applications", "compose", "composes", "servers", "user", "users",
    "organizations", "volume_backups", "backup_files", "ais", "ai_models",
    "github_providers", "gitlab_providers", "bitbucket_providers", "gitea_providers",
}

MANIFEST = build_manifest()


def _attrs(schema):
    return {a.name: a for a in schema.attributes}


def test_every_resource_is_registered():
    assert set(RESOURCES) == {f"dokploy_{name}" for name in EXPECTED_RESOURCES}


def test_every_data_source_is_registered():
    assert set(DATA_SOURCES) == {f"dokploy_{name}" for name in EXPECTED_DATA_SOURCES}


@pytest.mark.parametrize(
    "schema",
    MANIFEST.resources + MANIFEST.data_sources,
    ids=[s.type_name for s in MANIFEST.resources + MANIFEST.data_sources],
)
class TestSchemaStructure:
    def test_has_description(self, schema):
        assert schema.description, f"{schema.type_name}: description is empty"

    def test_id_is_computed(self, schema):
        attrs = _attrs(schema)
        assert "id" in attrs
        # Lookups by id take it as input instead.
        assert attrs["id"].computed or attrs["id"].required

    def test_attribute_types_are_valid(self, schema):
        for attr in schema.attributes:
            assert attr.type in VALID_TYPES, f"{schema.type_name}.{attr.name}: invalid type {attr.type!r}"

    def test_computed_attributes_are_not_required(self, schema):
        for attr in schema.attributes:
            assert not (attr.computed and attr.required), f"{schema.type_name}.{attr.name}"


class TestFlags:
    def _resource(self, type_name):
        return _attrs(next(s for s in MANIFEST.resources if s.type_name == type_name))

    def test_secrets_are_sensitive(self):
        assert self._resource("dokploy_environment_variable")["value"].sensitive
        assert self._resource("dokploy_registry")["password"].sensitive
        assert self._resource("dokploy_ssh_key")["private_key"].sensitive
        assert self._resource("dokploy_api_key")["key"].sensitive

    def test_immutable_parents_require_replace(self):
        assert self._resource("dokploy_environment")["project_id"].requires_replace
        assert self._resource("dokploy_mount")["service_id"].requires_replace
        assert self._resource("dokploy_environment_variable")["key"].requires_replace

    def test_types_follow_python_annotations(self):
        app = self._resource("dokploy_application")
        assert app["name"].type == "string"
        assert app["name"].required
        assert app["replicas"].type == "integer"
        assert app["auto_deploy"].type == "boolean"
        assert app["watch_paths"].type == "array"
        assert app["application_status"].computed
