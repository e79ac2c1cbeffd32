"""Live tests against a real Dokploy instance.

Skipped unless DOKPLOY_HOST and DOKPLOY_API_KEY are set. Everything created
here lives in a throwaway project that is removed at the end.
"""

from __future__ import annotations

import os
import uuid

import pytest

from dokploy_client import Dokploy, Settings
from dokploy_provider.resources.applications import ApplicationResource, ApplicationState
from dokploy_provider.resources.env_vars import EnvironmentVariableResource, EnvironmentVariableState
from dokploy_provider.resources.projects import ProjectResource, ProjectState

pytestmark = [
    pytest.mark.integration,
    pytest.mark.skipif(
        not (os.environ.get("DOKPLOY_HOST") and os.environ.get("DOKPLOY_API_KEY")),
        reason="DOKPLOY_HOST and DOKPLOY_API_KEY are not set",
    ),
]


@pytest.fixture(scope="module")
def live_api():
    with Dokploy.from_settings(Settings()) as api:
        yield api


@pytest.fixture(scope="module")
def project(live_api):
    resource = ProjectResource(live_api)
    state = resource.create(ProjectState(name=f"provider-it-{uuid.uuid4().hex[:8]}"))
    yield state
    resource.delete(state)


def test_project_round_trip(live_api, project):
    current = ProjectResource(live_api).read(project)

    assert current is not None
    assert current.name == project.name


def test_env_vars_survive_each_other(live_api, project):
    env = live_api.projects.get(project.id).environments[0]
    app = ApplicationResource(live_api).create(
        ApplicationState(
            name="it-app",
            environment_id=env.environment_id,
            source_type="docker",
            docker_image="nginx:alpine",
            deploy_on_create=False,
        )
    )
    resource = EnvironmentVariableResource(live_api)
    try:
        first = resource.create(EnvironmentVariableState(application_id=app.id, key="FIRST", value="1"))
        resource.create(EnvironmentVariableState(application_id=app.id, key="SECOND", value="2"))

        assert resource.read(first).value == "1"
        resource.delete(first)
        assert resource.read(first) is None
        assert {v.key for v in live_api.env_vars.get_variables(app.id)} == {"SECOND"}
    finally:
        ApplicationResource(live_api).delete(app)
