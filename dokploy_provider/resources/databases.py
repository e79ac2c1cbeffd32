"""Database resources: the engine-agnostic one and one per engine."""

from __future__ import annotations

from typing import ClassVar

from pydantic import Field

from dokploy_client.api.databases import EngineAPI
from dokploy_client.schemas import MariaDB, MongoDB, MySQL, Postgres, Redis
from dokploy_client.schemas.base import WireModel
from dokploy_provider.resources.base import (
    Resource,
    StateModel,
    computed,
    from_entity,
    replaces,
    sensitive,
    to_entity,
)


class DatabaseState(StateModel):
    project_id: str = replaces("Project owning the environment.")
    environment_id: str = replaces("Environment the database lives in.")
    type: str = replaces("Engine: postgres, mysql, mariadb, mongo or redis.")
    name: str = replaces("Name; also used as the app name and database name.")
    password: str = Field(description="Database password.", json_schema_extra={"sensitive": True, "requires_replace": True})
    docker_image: str = replaces("Image, e.g. postgres:16.")
    app_name: str | None = computed("Container slug.")
    external_port: int | None = computed("Published port, when exposed.")
    internal_port: int | None = computed("Port inside the service network.")


class DatabaseResource(Resource[DatabaseState]):
    """Every attribute requires replacement; there is no generic update call."""

    type_name = "dokploy_database"
    state_model = DatabaseState
    description = "A database service of any supported engine, with engine defaults."

    def create(self, plan: DatabaseState) -> DatabaseState:
        db = self.api.databases.create(
            project_id=plan.project_id,
            environment_id=plan.environment_id,
            db_type=plan.type,
            name=plan.name,
            password=plan.password,
            docker_image=plan.docker_image,
        )
        return from_entity(DatabaseState, db, plan)

    def fetch(self, state: DatabaseState) -> DatabaseState:
        return from_entity(DatabaseState, self.api.databases.get(state.id, state.type), state)

    def update(self, plan: DatabaseState, prior: DatabaseState) -> DatabaseState:
        return self.fetch(prior)

    def remove(self, state: DatabaseState) -> None:
        self.api.databases.delete(state.id, state.type)


# ---- Typed engines ----


class EngineState(StateModel):
    name: str = Field(description="Display name.")
    environment_id: str = replaces("Environment the database lives in.")
    app_name: str | None = Field(default=None, description="Container slug; defaults to the name.")
    description: str | None = None
    docker_image: str | None = Field(default=None, description="Image; the platform default when omitted.")
    server_id: str | None = replaces("Remote server to run on.", default=None)
    command: str | None = None
    env: str | None = sensitive("Extra environment as a KEY=VALUE blob.")
    memory_reservation: str | None = None
    memory_limit: str | None = None
    cpu_reservation: str | None = None
    cpu_limit: str | None = None
    external_port: int | None = None
    replicas: int | None = None
    application_status: str | None = computed("Service status.")


class PostgresState(EngineState):
    database_name: str = Field(description="Initial database.")
    database_user: str = Field(description="Superuser name.")
    database_password: str = sensitive("Superuser password.", default=...)


class MySQLState(PostgresState):
    database_root_password: str = sensitive("Root password.", default=...)


class MariaDBState(MySQLState):
    pass


class MongoState(EngineState):
    database_user: str = Field(description="Root user name.")
    database_password: str = sensitive("Root password.", default=...)
    replica_sets: bool = replaces("Run as a replica set.", default=False)


class RedisState(EngineState):
    database_password: str = sensitive("Password.", default=...)


class EngineResource(Resource[EngineState]):
    """Shared lifecycle for the typed database engines."""

    model: ClassVar[type[WireModel]]

    def _engine(self) -> EngineAPI:
        return getattr(self.api, self.model.ENGINE)

    def create(self, plan: EngineState) -> EngineState:
        db = self._engine().create(to_entity(self.model, plan))
        return from_entity(self.state_model, db, plan)

    def fetch(self, state: EngineState) -> EngineState:
        return from_entity(self.state_model, self._engine().get(state.id), state)

    def update(self, plan: EngineState, prior: EngineState) -> EngineState:
        db = self._engine().update(to_entity(self.model, plan.model_copy(update={"id": prior.id})))
        return from_entity(self.state_model, db, plan.model_copy(update={"id": prior.id}))

    def remove(self, state: EngineState) -> None:
        self._engine().delete(state.id)


class PostgresResource(EngineResource):
    type_name = "dokploy_postgres"
    state_model = PostgresState
    model = Postgres
    description = "A PostgreSQL database service."


class MySQLResource(EngineResource):
    type_name = "dokploy_mysql"
    state_model = MySQLState
    model = MySQL
    description = "A MySQL database service."


class MariaDBResource(EngineResource):
    type_name = "dokploy_mariadb"
    state_model = MariaDBState
    model = MariaDB
    description = "A MariaDB database service."


class MongoResource(EngineResource):
    type_name = "dokploy_mongo"
    state_model = MongoState
    model = MongoDB
    description = "A MongoDB database service."


class RedisResource(EngineResource):
    type_name = "dokploy_redis"
    state_model = RedisState
    model = Redis
    description = "A Redis service."
