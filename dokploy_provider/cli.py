"""Command-line entry point of the Dokploy provider."""

from __future__ import annotations

import functools
import json
from contextlib import contextmanager

import click

from dokploy_client import Dokploy, DokployError, get_settings
from dokploy_provider.log_config import configure_logging
from dokploy_provider.manifest import build_manifest
from dokploy_provider.tools import ProviderTools


@contextmanager
def _provider():
    settings = get_settings()
    if not settings.host or not settings.api_key:
        raise click.UsageError("Set DOKPLOY_HOST and DOKPLOY_API_KEY.")
    with Dokploy.from_settings(settings) as api:
        yield ProviderTools(api)


def _platform_errors(func):
    """Report platform and validation errors as CLI errors instead of tracebacks."""

    @functools.wraps(func)
    def wrapper(*args, **kwargs):
        try:
            return func(*args, **kwargs)
        except (DokployError, ValueError) as e:
            raise click.ClickException(str(e)) from e

    return wrapper


def _echo_json(data) -> None:
    click.echo(json.dumps(data, indent=2, sort_keys=True))


def _attrs(pairs: tuple[str, ...]) -> dict[str, str]:
    attrs = {}
    for pair in pairs:
        key, sep, value = pair.partition("=")
        if not sep:
            raise click.BadParameter(f"expected key=value, got {pair!r}", param_hint="--attr")
        attrs[key] = value
    return attrs


@click.group()
def cli():
    """Dokploy provider: manage platform resources from the command line."""
    configure_logging(get_settings())


# --- Service ---


@cli.command()
@click.option("--host", default="127.0.0.1", show_default=True)
@click.option("--port", default=8000, show_default=True, type=int)
def serve(host: str, port: int):
    """Run the provider HTTP service."""
    import uvicorn

    uvicorn.run("dokploy_provider.main:app", host=host, port=port)


@cli.command()
def manifest():
    """Print the resource and data-source schemas."""
    _echo_json(build_manifest().model_dump())


# --- Resources ---


@cli.command()
@click.argument("type_name")
@click.argument("resource_id")
@click.option("--attr", "attrs", multiple=True, help="Extra attribute needed to address the entity, as key=value.")
@_platform_errors
def read(type_name: str, resource_id: str, attrs: tuple[str, ...]):
    """Read one resource by id."""
    with _provider() as tools:
        state = tools.read(type_name, {**_attrs(attrs), "id": resource_id})
    if state is None:
        raise click.ClickException(f"{type_name} {resource_id} not found")
    _echo_json(state)


@cli.command()
@click.argument("type_name")
@click.argument("state_file", type=click.File("r"))
@_platform_errors
def apply(type_name: str, state_file):
    """Create or update a resource from a JSON file of attributes.

    A file carrying an ``id`` updates that entity; otherwise one is created.
    """
    plan = json.load(state_file)
    with _provider() as tools:
        prior = tools.read(type_name, plan) if plan.get("id") else None
        if prior is None:
            state = tools.create(type_name, {k: v for k, v in plan.items() if k != "id"})
        else:
            state = tools.update(type_name, plan, prior)
    _echo_json(state)


@cli.command()
@click.argument("type_name")
@click.argument("resource_id")
@click.option("--attr", "attrs", multiple=True, help="Extra attribute needed to address the entity, as key=value.")
@_platform_errors
def destroy(type_name: str, resource_id: str, attrs: tuple[str, ...]):
    """Delete one resource by id."""
    with _provider() as tools:
        tools.delete(type_name, {**_attrs(attrs), "id": resource_id})
    click.echo(f"Deleted {type_name} {resource_id}")


# --- Environment variables ---


@cli.group()
def env():
    """Manage individual environment variables of an application."""
    pass


@env.command("set")
@click.argument("application_id")
@click.argument("key")
@click.argument("value")
@_platform_errors
def env_set(application_id: str, key: str, value: str):
    """Set KEY to VALUE, keeping every other variable."""
    with _provider() as tools:
        tools.api.env_vars.create_variable(application_id, key, value)
    click.echo(f"Set {key}")


@env.command("unset")
@click.argument("application_id")
@click.argument("key")
@_platform_errors
def env_unset(application_id: str, key: str):
    """Remove KEY, keeping every other variable."""
    with _provider() as tools:
        tools.api.env_vars.delete_variable(application_id, key)
    click.echo(f"Unset {key}")


@env.command("list")
@click.argument("application_id")
@click.option("--show-values", is_flag=True, help="Print values as well as keys.")
@_platform_errors
def env_list(application_id: str, show_values: bool):
    """List the variables of an application."""
    with _provider() as tools:
        variables = tools.api.env_vars.get_variables(application_id)
    if not variables:
        click.echo("No variables.")
        return
    for var in variables:
        click.echo(f"{var.key}={var.value}" if show_values else var.key)


if __name__ == "__main__":
    cli()
