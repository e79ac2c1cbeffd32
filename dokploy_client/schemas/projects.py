from __future__ import annotations

from pydantic import Field

from dokploy_client.schemas.base import WireModel
from dokploy_client.schemas.databases import Database


class Environment(WireModel):
    ID_FIELD = "environment_id"

    environment_id: str = ""
    name: str = ""
    description: str = ""
    project_id: str = ""
    postgres: list[Database] = Field(default_factory=list)
    mysql: list[Database] = Field(default_factory=list)
    mariadb: list[Database] = Field(default_factory=list)
    mongo: list[Database] = Field(default_factory=list)
    redis: list[Database] = Field(default_factory=list)

    def databases(self, db_type: str) -> list[Database]:
        return getattr(self, db_type, None) or []


class Project(WireModel):
    ID_FIELD = "project_id"

    project_id: str = ""
    name: str = ""
    description: str = ""
    environments: list[Environment] = Field(default_factory=list)

    def environment(self, environment_id: str) -> Environment | None:
        for env in self.environments:
            if env.environment_id == environment_id:
                return env
        return None
