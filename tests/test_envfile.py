"""Tests for env blob parsing and formatting."""

from __future__ import annotations

from dokploy_client.envfile import format_env, parse_env


class TestParseEnv:
    def test_empty(self):
        assert parse_env("") == {}
        assert parse_env(None) == {}

    def test_skips_blank_lines_comments_and_junk(self):
        text = "# database\nDB_HOST=db\n\n   \nNOT_A_PAIR\nDB_PORT=5432\n"
        assert parse_env(text) == {"DB_HOST": "db", "DB_PORT": "5432"}

    def test_splits_on_first_equals_only(self):
        assert parse_env("URL=postgres://u:p@h/db?sslmode=require") == {
            "URL": "postgres://u:p@h/db?sslmode=require"
        }

    def test_later_duplicates_win(self):
        assert parse_env("A=1\nA=2") == {"A": "2"}

    def test_trims_whitespace_around_lines(self):
        assert parse_env("  A=1  \n\tB=2") == {"A": "1", "B": "2"}


class TestFormatEnv:
    def test_keeps_mapping_order_without_trailing_newline(self):
        assert format_env({"B": "2", "A": "1"}) == "B=2\nA=1"

    def test_empty_mapping(self):
        assert format_env({}) == ""

    def test_normalises_a_parsed_blob(self):
        assert format_env(parse_env("# c\nA=1\n\nB=2\n")) == "A=1\nB=2"
