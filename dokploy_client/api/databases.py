"""Database services, through the generic view or per engine."""

from __future__ import annotations

import json
from typing import Any, Generic, TypeVar

from dokploy_client.api.base import BaseAPI
from dokploy_client.client import DokployClient
from dokploy_client.decoding import (
    DecodeStrategy,
    decode,
    direct,
    match_submitted,
    refetch,
    wrapped,
)
from dokploy_client.errors import DecodeError, UnsupportedTypeError
from dokploy_client.payload import omit_empty, positive
from dokploy_client.schemas.databases import (
    DATABASE_TYPES,
    Database,
    MariaDB,
    MongoDB,
    MySQL,
    Postgres,
    Redis,
    _EngineModel,
)
from dokploy_client.schemas.projects import Project

E = TypeVar("E", bound=_EngineModel)

# Per-engine defaults for the generic create call.
_DEFAULT_USERS = {
    "postgres": "postgres",
    "mysql": "root",
    "mariadb": "root",
    "mongo": "mongo",
    "redis": "default",
}


def _check_type(db_type: str) -> None:
    if db_type not in DATABASE_TYPES:
        raise UnsupportedTypeError("database type", db_type)


class DatabasesAPI(BaseAPI):
    """Engine-agnostic access: the caller names the engine with ``db_type``."""

    def create(
        self,
        project_id: str,
        environment_id: str,
        db_type: str,
        name: str,
        password: str,
        docker_image: str,
    ) -> Database:
        _check_type(db_type)
        payload: dict[str, Any] = {
            "environmentId": environment_id,
            "name": name,
            "appName": name,
            "databasePassword": password,
            "dockerImage": docker_image,
            "databaseUser": _DEFAULT_USERS[db_type],
        }
        if db_type in ("postgres", "mysql", "mariadb"):
            payload["databaseName"] = name
        if db_type in ("mysql", "mariadb"):
            payload["databaseRootPassword"] = password

        raw = self.client.post(f"{db_type}.create", payload)

        def find_created() -> Database:
            project = self._get("project.one", Project, "project", projectId=project_id)
            env = project.environment(environment_id)
            if env is None:
                raise DecodeError(f"environment {environment_id} not found in project {project_id}")
            return match_submitted(
                env.databases(db_type),
                lambda db: db.name == name or db.app_name == name,
                f"{db_type} database",
            )

        strategies: list[DecodeStrategy[Database]] = [
            refetch(find_created),
            wrapped(Database, "database"),
            direct(Database),
        ]
        return decode(raw, strategies, f"{db_type} database").with_type(db_type)

    def get(self, database_id: str, db_type: str) -> Database:
        _check_type(db_type)
        data = self.client.get_json(f"{db_type}.one", f"{db_type} database", **{f"{db_type}Id": database_id})
        db = _first_identified(data, db_type)
        if db is None:
            raise DecodeError(f"unexpected {db_type} database response", json.dumps(data))
        return db.with_type(db_type)

    def delete(self, database_id: str, db_type: str) -> None:
        _check_type(db_type)
        self.client.post(f"{db_type}.remove", {f"{db_type}Id": database_id})


def _first_identified(data: Any, db_type: str) -> Database | None:
    if not isinstance(data, dict):
        return None
    db = Database.model_validate(data)
    if db.identifier:
        return db
    for key in (db_type, "database"):
        inner = data.get(key)
        if isinstance(inner, dict):
            db = Database.model_validate(inner)
            if db.identifier:
                return db
    return None


class EngineAPI(BaseAPI, Generic[E]):
    """Typed access to one engine (``postgres.*``, ``mysql.*``, ...)."""

    def __init__(self, client: DokployClient, model: type[E]):
        super().__init__(client)
        self.model = model
        self.engine = model.ENGINE
        self.id_param = f"{self.engine}Id"

    def _create_payload(self, db: E) -> dict[str, Any]:
        payload: dict[str, Any] = {
            "name": db.name,
            "appName": db.app_name or db.name,
            "environmentId": db.environment_id,
        }
        if isinstance(db, (Postgres, MySQL, MariaDB)):
            payload["databaseName"] = db.database_name
            payload["databaseUser"] = db.database_user
            payload["databasePassword"] = db.database_password
        if isinstance(db, (MySQL, MariaDB)):
            payload["databaseRootPassword"] = db.database_root_password
        if isinstance(db, MongoDB):
            payload["databaseUser"] = db.database_user
            payload["databasePassword"] = db.database_password
            if db.replica_sets:
                payload["replicaSets"] = True
        if isinstance(db, Redis):
            payload["databasePassword"] = db.database_password
        payload.update(
            omit_empty(
                dockerImage=db.docker_image,
                description=db.description,
                serverId=db.server_id,
            )
        )
        return payload

    def create(self, db: E) -> E:
        raw = self.client.post(f"{self.engine}.create", self._create_payload(db))
        return decode(raw, [direct(self.model), wrapped(self.model, self.engine)], self.engine)

    def get(self, database_id: str) -> E:
        return self._get(f"{self.engine}.one", self.model, self.engine, **{self.id_param: database_id})

    def update(self, db: E) -> E:
        payload: dict[str, Any] = {self.id_param: db.identifier}
        payload.update(
            omit_empty(
                name=db.name,
                appName=db.app_name,
                description=db.description,
                databaseName=getattr(db, "database_name", ""),
                databaseUser=getattr(db, "database_user", ""),
                databasePassword=getattr(db, "database_password", ""),
                databaseRootPassword=getattr(db, "database_root_password", ""),
                dockerImage=db.docker_image,
                command=db.command,
                env=db.env,
                memoryReservation=db.memory_reservation,
                memoryLimit=db.memory_limit,
                cpuReservation=db.cpu_reservation,
                cpuLimit=db.cpu_limit,
                externalPort=positive(db.external_port),
                replicas=positive(db.replicas),
            )
        )
        raw = self.client.post(f"{self.engine}.update", payload)
        return decode(
            raw,
            [direct(self.model), refetch(lambda: self.get(db.identifier), always=True)],
            self.engine,
        )

    def delete(self, database_id: str) -> None:
        self.client.post(f"{self.engine}.remove", {self.id_param: database_id})

