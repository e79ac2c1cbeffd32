"""Applications: lifecycle, source providers, build and runtime settings."""

from __future__ import annotations

import json
from typing import Any

import structlog

from dokploy_client.api.base import BaseAPI
from dokploy_client.decoding import decode, direct, parse_list, refetch, wrapped
from dokploy_client.errors import DecodeError
from dokploy_client.payload import omit_empty, positive
from dokploy_client.schemas.applications import Application

logger = structlog.get_logger()


class ApplicationsAPI(BaseAPI):
    def create(
        self,
        name: str,
        environment_id: str,
        app_name: str = "",
        description: str = "",
        server_id: str = "",
    ) -> Application:
        """Create an application with only its create-time fields.

        Everything else (source, build, runtime) is configured by the
        dedicated ``save_*`` and ``update`` calls afterwards.
        """
        payload = {"name": name, "environmentId": environment_id}
        payload.update(omit_empty(appName=app_name, description=description, serverId=server_id))
        raw = self.client.post("application.create", payload)
        app = decode(raw, [wrapped(Application, "application"), direct(Application)], "application")
        if server_id:
            # Not echoed back by the API.
            app = app.model_copy(update={"server_id": server_id})
        return app

    def get(self, application_id: str) -> Application:
        return self._get("application.one", Application, "application", applicationId=application_id)

    def update(self, app: Application) -> Application:
        """Push general and runtime settings (``application.update``)."""
        payload: dict[str, Any] = {
            "applicationId": app.application_id,
            "autoDeploy": app.auto_deploy,
            "isPreviewDeploymentsActive": app.is_preview_deployments_active,
            "previewHttps": app.preview_https,
            "previewRequireCollaboratorPermissions": app.preview_require_collaborator_permissions,
            "rollbackActive": app.rollback_active,
        }
        payload.update(
            omit_empty(
                name=app.name,
                appName=app.app_name,
                description=app.description,
                sourceType=app.source_type,
                replicas=positive(app.replicas),
                memoryLimit=app.memory_limit,
                memoryReservation=app.memory_reservation,
                cpuLimit=app.cpu_limit,
                cpuReservation=app.cpu_reservation,
                command=app.command,
                args=app.args,
                entrypoint=app.entrypoint,
                previewEnv=app.preview_env,
                previewBuildArgs=app.preview_build_args,
                previewBuildSecrets=app.preview_build_secrets,
                previewLabels=app.preview_labels,
                previewWildcard=app.preview_wildcard,
                previewPort=positive(app.preview_port),
                previewPath=app.preview_path,
                previewCertificateType=app.preview_certificate_type,
                previewCustomCertResolver=app.preview_custom_cert_resolver,
                previewLimit=positive(app.preview_limit),
                rollbackRegistryId=app.rollback_registry_id,
                buildServerId=app.build_server_id,
                buildRegistryId=app.build_registry_id,
                enabled=app.enabled or None,
                title=app.title,
                subtitle=app.subtitle,
                healthCheckSwarm=app.health_check_swarm,
                restartPolicySwarm=app.restart_policy_swarm,
                placementSwarm=app.placement_swarm,
                updateConfigSwarm=app.update_config_swarm,
                rollbackConfigSwarm=app.rollback_config_swarm,
                modeSwarm=app.mode_swarm,
                labelsSwarm=app.labels_swarm,
                networkSwarm=app.network_swarm,
                stopGracePeriodSwarm=app.stop_grace_period_swarm,
                endpointSpecSwarm=app.endpoint_spec_swarm,
            )
        )
        raw = self.client.post("application.update", payload)
        # The API answers with ``true`` or, on some versions, a partial row.
        return decode(
            raw,
            [direct(Application), refetch(lambda: self.get(app.application_id), always=True)],
            "application",
        )

    def delete(self, application_id: str) -> None:
        self.client.post("application.remove", {"applicationId": application_id})

    # ---- Lifecycle ----

    def deploy(self, application_id: str, server_id: str = "") -> None:
        payload = {"applicationId": application_id}
        payload.update(omit_empty(serverId=server_id))
        self.client.post("application.deploy", payload)

    def redeploy(self, application_id: str) -> None:
        self.client.post("application.redeploy", {"applicationId": application_id})

    def start(self, application_id: str) -> None:
        self.client.post("application.start", {"applicationId": application_id})

    def stop(self, application_id: str) -> None:
        self.client.post("application.stop", {"applicationId": application_id})

    def move(self, application_id: str, target_environment_id: str) -> Application:
        raw = self.client.post(
            "application.move",
            {"applicationId": application_id, "targetEnvironmentId": target_environment_id},
        )
        return decode(
            raw,
            [direct(Application), refetch(lambda: self.get(application_id), always=True)],
            "application",
        )

    # ---- Listing ----

    def list(self) -> list[Application]:
        """Every application in every environment of every project."""
        projects = self.client.get_json("project.all", "projects")
        if not isinstance(projects, list):
            raise DecodeError("failed to parse projects response: expected a list", json.dumps(projects))
        apps: list[Application] = []
        for project in projects:
            for env in project.get("environments") or []:
                apps.extend(parse_list(Application, env.get("applications") or [], "applications"))
        return apps

    def list_by_environment(self, environment_id: str) -> list[Application]:
        env = self.client.get_json("environment.one", "environment", environmentId=environment_id)
        if not isinstance(env, dict):
            raise DecodeError("failed to parse environment response: expected an object", json.dumps(env))
        return parse_list(Application, env.get("applications") or [], "applications")

    # ---- Source providers ----

    def save_build_type(
        self,
        application_id: str,
        build_type: str,
        dockerfile: str = "",
        docker_context_path: str = "",
        docker_build_stage: str = "",
        publish_directory: str = "",
    ) -> None:
        # Every key must be present, empty or not.
        self.client.post(
            "application.saveBuildType",
            {
                "applicationId": application_id,
                "buildType": build_type,
                "dockerfile": dockerfile,
                "dockerContextPath": docker_context_path,
                "dockerBuildStage": docker_build_stage,
                "publishDirectory": publish_directory,
            },
        )

    def save_git_provider(
        self,
        application_id: str,
        custom_git_url: str = "",
        custom_git_branch: str = "",
        custom_git_build_path: str = "",
        custom_git_ssh_key_id: str = "",
        enable_submodules: bool = False,
        watch_paths: list[str] | None = None,
    ) -> None:
        payload = {"applicationId": application_id}
        payload.update(
            omit_empty(
                customGitUrl=custom_git_url,
                customGitBranch=custom_git_branch,
                customGitBuildPath=custom_git_build_path,
                customGitSSHKeyId=custom_git_ssh_key_id,
                enableSubmodules=enable_submodules or None,
                watchPaths=watch_paths,
            )
        )
        self.client.post("application.saveGitProvider", payload)

    def save_github_provider(
        self,
        application_id: str,
        repository: str = "",
        branch: str = "",
        owner: str = "",
        build_path: str = "",
        github_id: str = "",
        watch_paths: list[str] | None = None,
        enable_submodules: bool = False,
        trigger_type: str = "",
    ) -> None:
        # owner and githubId are required keys but may be null.
        payload = {
            "applicationId": application_id,
            "enableSubmodules": enable_submodules,
            "owner": owner or None,
            "githubId": github_id or None,
        }
        payload.update(
            omit_empty(
                repository=repository,
                branch=branch,
                buildPath=build_path,
                watchPaths=watch_paths,
                triggerType=trigger_type,
            )
        )
        self.client.post("application.saveGithubProvider", payload)

    def save_gitlab_provider(
        self,
        application_id: str,
        gitlab_id: str = "",
        gitlab_project_id: int = 0,
        gitlab_repository: str = "",
        gitlab_owner: str = "",
        gitlab_branch: str = "",
        gitlab_build_path: str = "",
        gitlab_path_namespace: str = "",
        watch_paths: list[str] | None = None,
        enable_submodules: bool = False,
    ) -> None:
        payload = {
            "applicationId": application_id,
            "enableSubmodules": enable_submodules,
            "gitlabId": gitlab_id or None,
        }
        payload.update(
            omit_empty(
                gitlabProjectId=gitlab_project_id or None,
                gitlabRepository=gitlab_repository,
                gitlabOwner=gitlab_owner,
                gitlabBranch=gitlab_branch,
                gitlabBuildPath=gitlab_build_path,
                gitlabPathNamespace=gitlab_path_namespace,
                watchPaths=watch_paths,
            )
        )
        self.client.post("application.saveGitlabProvider", payload)

    def save_bitbucket_provider(
        self,
        application_id: str,
        bitbucket_id: str = "",
        bitbucket_repository: str = "",
        bitbucket_owner: str = "",
        bitbucket_branch: str = "",
        bitbucket_build_path: str = "",
        watch_paths: list[str] | None = None,
        enable_submodules: bool = False,
    ) -> None:
        payload = {
            "applicationId": application_id,
            "enableSubmodules": enable_submodules,
            "bitbucketId": bitbucket_id or None,
        }
        payload.update(
            omit_empty(
                bitbucketRepository=bitbucket_repository,
                bitbucketOwner=bitbucket_owner,
                bitbucketBranch=bitbucket_branch,
                bitbucketBuildPath=bitbucket_build_path,
                watchPaths=watch_paths,
            )
        )
        self.client.post("application.saveBitbucketProvider", payload)

    def save_gitea_provider(
        self,
        application_id: str,
        gitea_id: str = "",
        gitea_repository: str = "",
        gitea_owner: str = "",
        gitea_branch: str = "",
        gitea_build_path: str = "",
        watch_paths: list[str] | None = None,
        enable_submodules: bool = False,
    ) -> None:
        payload = {
            "applicationId": application_id,
            "enableSubmodules": enable_submodules,
            "giteaId": gitea_id or None,
        }
        payload.update(
            omit_empty(
                giteaRepository=gitea_repository,
                giteaOwner=gitea_owner,
                giteaBranch=gitea_branch,
                giteaBuildPath=gitea_build_path,
                watchPaths=watch_paths,
            )
        )
        self.client.post("application.saveGiteaProvider", payload)

    def save_docker_provider(
        self,
        application_id: str,
        docker_image: str = "",
        username: str = "",
        password: str = "",
        registry_url: str = "",
        registry_id: str = "",
    ) -> None:
        payload = {"applicationId": application_id}
        payload.update(
            omit_empty(
                dockerImage=docker_image,
                username=username,
                password=password,
                registryUrl=registry_url,
                registryId=registry_id,
            )
        )
        self.client.post("application.saveDockerProvider", payload)

    def save_environment(
        self,
        application_id: str,
        env: str = "",
        build_args: str = "",
        build_secrets: str = "",
        create_env_file: bool | None = None,
    ) -> None:
        # env is always sent so that an empty blob clears the variables.
        payload: dict[str, Any] = {"applicationId": application_id, "env": env}
        payload.update(
            omit_empty(
                buildArgs=build_args,
                buildSecrets=build_secrets,
                createEnvFile=create_env_file,
            )
        )
        self.client.post("application.saveEnvironment", payload)

    # ---- Traefik ----

    def read_traefik_config(self, application_id: str) -> str:
        raw = self.client.get("application.readTraefikConfig", applicationId=application_id)
        body = raw.strip()
        if body in (b"", b"null"):
            return ""
        try:
            config = json.loads(body)
        except ValueError as e:
            raise DecodeError(f"failed to parse Traefik config response ({e})", raw) from e
        return config if isinstance(config, str) else ""

    def update_traefik_config(self, application_id: str, traefik_config: str) -> None:
        self.client.post(
            "application.updateTraefikConfig",
            {"applicationId": application_id, "traefikConfig": traefik_config},
        )
        logger.debug("traefik_config_updated", application_id=application_id)
