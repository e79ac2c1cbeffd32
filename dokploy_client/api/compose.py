from __future__ import annotations

import json
from typing import Any

from dokploy_client.api.base import BaseAPI
from dokploy_client.decoding import decode, direct, is_empty_or_true, parse_list, wrapped
from dokploy_client.errors import DecodeError
from dokploy_client.payload import omit_empty
from dokploy_client.schemas.compose import Compose


def infer_source_type(compose: Compose) -> str:
    """Pick a source type when none was declared."""
    if compose.source_type:
        return compose.source_type
    if compose.custom_git_url:
        return "git"
    if compose.compose_file:
        return "raw"
    return "github"


def _settings_payload(compose: Compose) -> dict[str, Any]:
    """Source and deployment settings shared by create and update."""
    payload: dict[str, Any] = {
        "composeId": compose.compose_id,
        "name": compose.name,
        "sourceType": infer_source_type(compose),
        "autoDeploy": compose.auto_deploy,
        "randomize": compose.randomize,
        "isolatedDeployment": compose.isolated_deployment,
        "isolatedDeploymentsVolume": compose.isolated_deployments_volume,
    }
    payload.update(
        omit_empty(
            description=compose.description,
            customGitUrl=compose.custom_git_url,
            customGitBranch=compose.custom_git_branch,
            customGitSSHKeyId=compose.custom_git_ssh_key_id,
            composePath=compose.compose_path,
            composeFile=compose.compose_file,
            enableSubmodules=compose.enable_submodules or None,
            repository=compose.repository,
            branch=compose.branch,
            owner=compose.owner,
            githubId=compose.github_id,
            triggerType=compose.trigger_type,
            gitlabId=compose.gitlab_id,
            gitlabProjectId=compose.gitlab_project_id or None,
            gitlabRepository=compose.gitlab_repository,
            gitlabOwner=compose.gitlab_owner,
            gitlabBranch=compose.gitlab_branch,
            gitlabPathNamespace=compose.gitlab_path_namespace,
            bitbucketId=compose.bitbucket_id,
            bitbucketRepository=compose.bitbucket_repository,
            bitbucketOwner=compose.bitbucket_owner,
            bitbucketBranch=compose.bitbucket_branch,
            giteaId=compose.gitea_id,
            giteaRepository=compose.gitea_repository,
            giteaOwner=compose.gitea_owner,
            giteaBranch=compose.gitea_branch,
            env=compose.env,
            command=compose.command,
            suffix=compose.suffix,
        )
    )
    # An explicit empty list clears the watch paths.
    if compose.watch_paths is not None:
        payload["watchPaths"] = compose.watch_paths
    return payload


class ComposeAPI(BaseAPI):
    def create(self, compose: Compose) -> Compose:
        """Create a compose service, then push its source settings.

        ``compose.create`` only accepts the name, type and inline file; the
        source settings need a follow-up ``compose.update``.
        """
        payload = {
            "environmentId": compose.environment_id,
            "name": compose.name,
            "composeType": compose.compose_type or "docker-compose",
            "appName": compose.app_name or compose.name,
        }
        payload.update(omit_empty(serverId=compose.server_id, composeFile=compose.compose_file))
        raw = self.client.post("compose.create", payload)
        created = decode(raw, [wrapped(Compose, "compose"), direct(Compose)], "compose")

        desired = compose.model_copy(update={"compose_id": created.compose_id})
        result = self._push_settings(desired, fallback=created)
        if compose.server_id and not result.server_id:
            result = result.model_copy(update={"server_id": compose.server_id})
        return result

    def get(self, compose_id: str) -> Compose:
        return self._get("compose.one", Compose, "compose", composeId=compose_id)

    def update(self, compose: Compose) -> Compose:
        result = self._push_settings(compose, fallback=None)
        if compose.server_id and not result.server_id:
            result = result.model_copy(update={"server_id": compose.server_id})
        return result

    def _push_settings(self, compose: Compose, fallback: Compose | None) -> Compose:
        payload = _settings_payload(compose)
        if fallback is None:
            # Plain updates may also move the service between environments.
            payload.update(omit_empty(environmentId=compose.environment_id))
        raw = self.client.post("compose.update", payload)
        if is_empty_or_true(raw):
            return self.get(compose.compose_id)
        strategies = [wrapped(Compose, "compose"), direct(Compose)]
        try:
            return decode(raw, strategies, "compose")
        except DecodeError:
            if fallback is not None:
                return fallback
            return self.get(compose.compose_id)

    def delete(self, compose_id: str) -> None:
        self.client.post("compose.remove", {"composeId": compose_id})

    def deploy(self, compose_id: str, server_id: str = "") -> None:
        payload = {"composeId": compose_id}
        payload.update(omit_empty(serverId=server_id))
        self.client.post("compose.deploy", payload)

    def redeploy(self, compose_id: str) -> None:
        self.client.post("compose.redeploy", {"composeId": compose_id})

    def move(self, compose_id: str, target_environment_id: str) -> Compose:
        raw = self.client.post(
            "compose.move",
            {"composeId": compose_id, "targetEnvironmentId": target_environment_id},
        )
        if is_empty_or_true(raw):
            return self.get(compose_id)
        return decode(raw, [direct(Compose)], "compose")

    def list(self, environment_id: str = "") -> list[Compose]:
        """Every compose service, optionally only those of one environment."""
        projects = self.client.get_json("project.all", "projects")
        if not isinstance(projects, list):
            raise DecodeError("failed to parse projects response: expected a list", json.dumps(projects))
        found: list[Compose] = []
        for project in projects:
            for env in project.get("environments") or []:
                if environment_id and env.get("environmentId") != environment_id:
                    continue
                found.extend(parse_list(Compose, env.get("compose") or [], "compose"))
        return found
