"""Tests for response-shape normalization and created-record matching."""

from __future__ import annotations

from unittest.mock import MagicMock

import pytest

from dokploy_client import DecodeError
from dokploy_client.decoding import (
    decode,
    direct,
    is_empty_or_true,
    match_submitted,
    parse_list,
    refetch,
    wrapped,
)
from dokploy_client.schemas import Port, Project, Redirect


class TestDecode:
    def test_direct_entity(self):
        project = decode(b'{"projectId": "p-1", "name": "demo"}', [direct(Project)], "project")
        assert project.project_id == "p-1"
        assert project.name == "demo"

    def test_wrapped_entity(self):
        raw = b'{"project": {"projectId": "p-1", "name": "demo"}, "environment": {}}'
        project = decode(raw, [direct(Project), wrapped(Project, "project")], "project")
        assert project.project_id == "p-1"

    def test_direct_without_identifier_falls_through(self):
        """An object lacking the id (e.g. the wrapper itself) is not the entity."""
        fetch = MagicMock(return_value=Project(project_id="p-9"))
        project = decode(b'{"name": "demo"}', [direct(Project), refetch(fetch, always=True)], "project")
        assert project.project_id == "p-9"
        fetch.assert_called_once()

    @pytest.mark.parametrize("body", [b"", b"true", b"  true\n"])
    def test_refetch_on_empty_or_true(self, body):
        fetch = MagicMock(return_value=Port(port_id="port-1"))
        assert decode(body, [direct(Port), refetch(fetch)], "port").port_id == "port-1"

    def test_refetch_not_used_for_other_bodies(self):
        fetch = MagicMock()
        with pytest.raises(DecodeError) as exc:
            decode(b'{"weird": 1}', [direct(Port), refetch(fetch)], "port")
        fetch.assert_not_called()
        assert "unexpected port response" in str(exc.value)
        assert '{"weird": 1}' in str(exc.value)

    def test_refetch_errors_propagate(self):
        fetch = MagicMock(side_effect=DecodeError("port created but not found among 0 listed records"))
        with pytest.raises(DecodeError, match="not found among"):
            decode(b"true", [direct(Port), refetch(fetch)], "port")

    def test_is_empty_or_true(self):
        assert is_empty_or_true(b"")
        assert is_empty_or_true(b"true")
        assert not is_empty_or_true(b"false")
        assert not is_empty_or_true(b"{}")


class TestMatchSubmitted:
    def test_filters_on_submitted_fields(self):
        ports = [
            Port(port_id="a", published_port=80, target_port=80),
            Port(port_id="b", published_port=8080, target_port=3000),
        ]
        found = match_submitted(ports, lambda p: p.published_port == 8080, "port")
        assert found.port_id == "b"

    def test_last_match_wins_without_timestamps(self):
        ports = [
            Port(port_id="old", published_port=8080, target_port=3000),
            Port(port_id="new", published_port=8080, target_port=3000),
        ]
        assert match_submitted(ports, lambda p: True, "port").port_id == "new"

    def test_newest_wins_with_timestamps(self):
        redirects = [
            Redirect(redirect_id="newest", regex="^/a", created_at="2024-05-02T00:00:00Z"),
            Redirect(redirect_id="older", regex="^/a", created_at="2024-05-01T00:00:00Z"),
        ]
        found = match_submitted(redirects, lambda r: True, "redirect", created_at=lambda r: r.created_at)
        assert found.redirect_id == "newest"

    def test_no_match_is_decode_error(self):
        with pytest.raises(DecodeError, match="redirect created but not found among 1 listed records"):
            match_submitted([Redirect(redirect_id="x", regex="^/b")], lambda r: r.regex == "^/a", "redirect")


class TestWireModel:
    def test_nulls_take_defaults(self):
        port = Port.model_validate({"portId": "p", "protocol": None, "publishedPort": 80})
        assert port.protocol == ""
        assert port.published_port == 80

    def test_numbers_coerced_to_text(self):
        project = Project.model_validate({"projectId": 42, "name": "n"})
        assert project.identifier == "42"

    def test_to_wire_uses_camel_case(self):
        wire = Port(port_id="p", published_port=80, target_port=8080).to_wire()
        assert wire["portId"] == "p"
        assert wire["publishedPort"] == 80


class TestParseList:
    def test_bare_array(self):
        assert [p.project_id for p in parse_list(Project, [{"projectId": "a"}], "projects")] == ["a"]

    def test_array_under_key(self):
        data = {"items": [{"projectId": "a"}, {"projectId": "b"}]}
        assert len(parse_list(Project, data, "projects", keys=("data", "items"))) == 2

    def test_not_a_list(self):
        with pytest.raises(DecodeError, match="expected a list"):
            parse_list(Project, {"projectId": "a"}, "projects")
