"""Database services: the generic view and one model per engine."""

from __future__ import annotations

from typing import ClassVar

from dokploy_client.schemas.base import WireModel

DATABASE_TYPES = ("postgres", "mysql", "mariadb", "mongo", "redis")


class Database(WireModel):
    """Engine-agnostic view of a database service.

    The platform never sends ``databaseId``; the identifier lives in the
    engine's own field (``postgresId``, ``mysqlId``, ...). ``identifier``
    resolves whichever one is set.
    """

    ID_FIELD = "database_id"

    database_id: str = ""
    name: str = ""
    app_name: str = ""
    type: str = ""
    project_id: str = ""
    environment_id: str = ""
    version: str = ""
    docker_image: str = ""
    external_port: int = 0
    internal_port: int = 0
    password: str = ""
    postgres_id: str = ""
    mysql_id: str = ""
    mariadb_id: str = ""
    mongo_id: str = ""
    redis_id: str = ""

    @property
    def identifier(self) -> str:
        if self.database_id:
            return self.database_id
        # Later engines win when several are set.
        found = ""
        for db_type in DATABASE_TYPES:
            found = getattr(self, f"{db_type}_id") or found
        return found

    def with_type(self, db_type: str) -> Database:
        """Return a copy with ``database_id`` and ``type`` filled in."""
        return self.model_copy(
            update={
                "database_id": self.identifier,
                "type": self.type or db_type,
            }
        )


class _EngineModel(WireModel):
    """Fields shared by every database engine."""

    ENGINE: ClassVar[str] = ""

    name: str = ""
    app_name: str = ""
    description: str = ""
    docker_image: str = ""
    command: str = ""
    env: str = ""
    memory_reservation: str = ""
    memory_limit: str = ""
    cpu_reservation: str = ""
    cpu_limit: str = ""
    external_port: int = 0
    environment_id: str = ""
    application_status: str = ""
    replicas: int = 0
    server_id: str = ""


class Postgres(_EngineModel):
    ENGINE = "postgres"
    ID_FIELD = "postgres_id"

    postgres_id: str = ""
    database_name: str = ""
    database_user: str = ""
    database_password: str = ""


class MySQL(_EngineModel):
    ENGINE = "mysql"
    ID_FIELD = "mysql_id"

    mysql_id: str = ""
    database_name: str = ""
    database_user: str = ""
    database_password: str = ""
    database_root_password: str = ""


class MariaDB(_EngineModel):
    ENGINE = "mariadb"
    ID_FIELD = "mariadb_id"

    mariadb_id: str = ""
    database_name: str = ""
    database_user: str = ""
    database_password: str = ""
    database_root_password: str = ""


class MongoDB(_EngineModel):
    ENGINE = "mongo"
    ID_FIELD = "mongo_id"

    mongo_id: str = ""
    database_user: str = ""
    database_password: str = ""
    replica_sets: bool = False


class Redis(_EngineModel):
    ENGINE = "redis"
    ID_FIELD = "redis_id"

    redis_id: str = ""
    database_password: str = ""


ENGINE_MODELS: dict[str, type[_EngineModel]] = {
    model.ENGINE: model for model in (Postgres, MySQL, MariaDB, MongoDB, Redis)
}
