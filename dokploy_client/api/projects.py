from __future__ import annotations

from dokploy_client.api.base import BaseAPI
from dokploy_client.decoding import decode, direct, refetch, wrapped
from dokploy_client.schemas.projects import Environment, Project


class ProjectsAPI(BaseAPI):
    def create(self, name: str, description: str = "") -> Project:
        raw = self.client.post("project.create", {"name": name, "description": description})
        return decode(raw, [wrapped(Project, "project"), direct(Project)], "project")

    def get(self, project_id: str) -> Project:
        return self._get("project.one", Project, "project", projectId=project_id)

    def update(self, project_id: str, name: str, description: str = "") -> Project:
        raw = self.client.post(
            "project.update",
            {"projectId": project_id, "name": name, "description": description},
        )
        return decode(
            raw,
            [direct(Project), wrapped(Project, "project"), refetch(lambda: self.get(project_id), always=True)],
            "project",
        )

    def delete(self, project_id: str) -> None:
        self.client.post("project.remove", {"projectId": project_id})

    def list(self) -> list[Project]:
        return self._list("project.all", Project, "projects")


class EnvironmentsAPI(BaseAPI):
    def create(self, project_id: str, name: str, description: str = "") -> Environment:
        raw = self.client.post(
            "environment.create",
            {"projectId": project_id, "name": name, "description": description},
        )
        return decode(raw, [wrapped(Environment, "environment"), direct(Environment)], "environment")

    def get(self, environment_id: str) -> Environment:
        return self._get("environment.one", Environment, "environment", environmentId=environment_id)

    def update(self, environment: Environment) -> Environment:
        raw = self.client.post(
            "environment.update",
            {
                "environmentId": environment.environment_id,
                "name": environment.name,
                "description": environment.description,
                "projectId": environment.project_id,
            },
        )
        return decode(
            raw,
            [
                wrapped(Environment, "environment"),
                direct(Environment),
                refetch(lambda: self.get(environment.environment_id), always=True),
            ],
            "environment",
        )

    def delete(self, environment_id: str) -> None:
        self.client.post("environment.remove", {"environmentId": environment_id})
