"""Parsing and formatting of application environment blobs.

An environment blob is newline-delimited ``KEY=VALUE`` text. Blank lines
and ``#`` comments are dropped on parse, so formatting a parsed blob
normalises it.
"""

from __future__ import annotations


def parse_env(text: str | None) -> dict[str, str]:
    """Parse an env blob into a mapping. Later duplicates win."""
    data: dict[str, str] = {}
    if not text:
        return data
    for raw_line in text.split("\n"):
        line = raw_line.strip()
        if not line or line.startswith("#"):
            continue
        if "=" not in line:
            continue
        key, value = line.split("=", 1)
        data[key] = value
    return data


def format_env(env: dict[str, str]) -> str:
    """Serialise a mapping back into a blob (mapping order, no trailing newline)."""
    return "\n".join(f"{key}={value}" for key, value in env.items())
