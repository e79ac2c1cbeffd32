"""Per-key environment variables on top of the application env blob.

The platform stores an application's environment as one text blob and has
no per-key endpoints. Every variable operation is therefore a
read-modify-write of the whole blob, reconciled against concurrent writers
with compare-and-set: write, read back, and retry with linear backoff when
the stored blob is not the one just written.
"""

from __future__ import annotations

import time
from typing import Callable

import structlog

from dokploy_client.api.applications import ApplicationsAPI
from dokploy_client.client import DokployClient
from dokploy_client.envfile import format_env, parse_env
from dokploy_client.errors import EnvUpdateConflictError, NotFoundError
from dokploy_client.schemas.applications import EnvironmentVariable

logger = structlog.get_logger()

Mutation = Callable[[dict[str, str]], None]


def variable_id(application_id: str, key: str) -> str:
    return f"{application_id}_{key}"


def split_variable_id(var_id: str) -> tuple[str, str]:
    """Split ``<applicationId>_<key>`` on the first underscore.

    Application ids never contain ``_``; keys may.
    """
    application_id, sep, key = var_id.partition("_")
    if not sep or not application_id or not key:
        raise ValueError(f"invalid environment variable id: {var_id!r}")
    return application_id, key


class EnvironmentVariablesAPI:
    def __init__(
        self,
        client: DokployClient,
        applications: ApplicationsAPI | None = None,
        sleep: Callable[[float], None] = time.sleep,
    ):
        self.client = client
        self.applications = applications or ApplicationsAPI(client)
        self.attempts = max(1, client.settings.env_update_attempts)
        self.backoff_ms = client.settings.env_update_backoff_ms
        self._sleep = sleep

    def update_application_env(
        self,
        application_id: str,
        mutate: Mutation,
        create_env_file: bool | None = None,
    ) -> None:
        """Apply *mutate* to the application's env mapping and persist it.

        The mutation is re-applied to a fresh read on every attempt, so it
        must be idempotent. A mutation that changes nothing writes nothing.

        Raises:
            NotFoundError / ApiError: reading the application failed; raised
                immediately, without retrying.
            EnvUpdateConflictError: the stored blob never matched the written
                one; or whichever push / verify error the last attempt hit.
        """
        last_err: Exception = EnvUpdateConflictError(
            f"environment update on application {application_id} was never attempted"
        )
        for attempt in range(1, self.attempts + 1):
            app = self.applications.get(application_id)
            current = parse_env(app.env)
            desired = dict(current)
            mutate(desired)
            if desired == current:
                logger.debug("env_update_noop", application_id=application_id)
                return

            new_env = format_env(desired)
            try:
                self.applications.save_environment(
                    application_id, env=new_env, create_env_file=create_env_file
                )
                stored = self.applications.get(application_id).env
            except Exception as e:
                last_err = e
            else:
                if stored == new_env:
                    return
                last_err = EnvUpdateConflictError(
                    f"environment update conflict on application {application_id}"
                )

            if attempt < self.attempts:
                logger.info(
                    "env_update_retry",
                    application_id=application_id,
                    attempt=attempt,
                    error=str(last_err),
                )
                self._sleep(self.backoff_ms * attempt / 1000)

        logger.warning("env_update_failed", application_id=application_id, attempts=self.attempts)
        raise last_err

    # ---- Variables ----

    def create_variable(
        self,
        application_id: str,
        key: str,
        value: str,
        scope: str = "runtime",
        create_env_file: bool | None = None,
    ) -> EnvironmentVariable:
        """Set *key* (create or overwrite)."""

        def set_key(env: dict[str, str]) -> None:
            env[key] = value

        self.update_application_env(application_id, set_key, create_env_file)
        return EnvironmentVariable(
            id=variable_id(application_id, key),
            application_id=application_id,
            key=key,
            value=value,
            scope=scope,
        )

    def get_variables(self, application_id: str) -> list[EnvironmentVariable]:
        app = self.applications.get(application_id)
        return [
            EnvironmentVariable(
                id=variable_id(application_id, key),
                application_id=application_id,
                key=key,
                value=value,
            )
            for key, value in parse_env(app.env).items()
        ]

    def get_variable(self, application_id: str, key: str) -> EnvironmentVariable:
        for var in self.get_variables(application_id):
            if var.key == key:
                return var
        raise NotFoundError(f"environment variable {key} not found", endpoint="application.one")

    def delete_variable(
        self, application_id: str, key: str, create_env_file: bool | None = None
    ) -> None:
        def drop_key(env: dict[str, str]) -> None:
            env.pop(key, None)

        self.update_application_env(application_id, drop_key, create_env_file)
