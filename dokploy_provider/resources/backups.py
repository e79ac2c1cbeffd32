"""Backup destinations, scheduled backups and volume backups."""

from __future__ import annotations

from pydantic import Field

from dokploy_client.schemas import Backup, Destination, VolumeBackup
from dokploy_provider.resources.base import (
    DataSource,
    Resource,
    StateModel,
    computed,
    from_entity,
    replaces,
    sensitive,
    to_entity,
)


class DestinationState(StateModel):
    name: str = Field(description="Display name.")
    provider: str | None = Field(default=None, description="S3 provider label, e.g. AWS or Cloudflare.")
    access_key: str = sensitive("Access key id.", default=...)
    secret_access_key: str = sensitive("Secret access key.", default=...)
    bucket: str = Field(description="Bucket name.")
    region: str | None = None
    endpoint: str = Field(description="S3 endpoint URL.")


class DestinationResource(Resource[DestinationState]):
    type_name = "dokploy_destination"
    state_model = DestinationState
    description = "An S3-compatible backup destination."

    def create(self, plan: DestinationState) -> DestinationState:
        return from_entity(DestinationState, self.api.destinations.create(to_entity(Destination, plan)), plan)

    def fetch(self, state: DestinationState) -> DestinationState:
        return from_entity(DestinationState, self.api.destinations.get(state.id), state)

    def update(self, plan: DestinationState, prior: DestinationState) -> DestinationState:
        plan = plan.model_copy(update={"id": prior.id})
        return from_entity(DestinationState, self.api.destinations.update(to_entity(Destination, plan)), plan)

    def remove(self, state: DestinationState) -> None:
        self.api.destinations.delete(state.id)


class BackupState(StateModel):
    destination_id: str = Field(description="Destination receiving the dumps.")
    schedule: str = Field(description="Cron expression.")
    prefix: str = Field(description="Key prefix inside the bucket.")
    enabled: bool = True
    database: str = Field(description="Database name to dump.")
    database_type: str = replaces("postgres, mysql, mariadb or mongo.")
    backup_type: str = replaces("database or compose.", default="database")
    keep_latest_count: int | None = Field(default=None, description="Number of dumps to keep.")
    postgres_id: str | None = replaces("Target postgres service.", default=None)
    mysql_id: str | None = replaces("Target mysql service.", default=None)
    mariadb_id: str | None = replaces("Target mariadb service.", default=None)
    mongo_id: str | None = replaces("Target mongo service.", default=None)
    compose_id: str | None = replaces("Target compose service.", default=None)
    service_name: str | None = Field(default=None, description="Database service inside the compose file.")


class BackupResource(Resource[BackupState]):
    type_name = "dokploy_backup"
    state_model = BackupState
    description = "A scheduled database backup."

    def create(self, plan: BackupState) -> BackupState:
        return from_entity(BackupState, self.api.backups.create(to_entity(Backup, plan)), plan)

    def fetch(self, state: BackupState) -> BackupState:
        return from_entity(BackupState, self.api.backups.get(state.id), state)

    def update(self, plan: BackupState, prior: BackupState) -> BackupState:
        plan = plan.model_copy(update={"id": prior.id})
        return from_entity(BackupState, self.api.backups.update(to_entity(Backup, plan)), plan)

    def remove(self, state: BackupState) -> None:
        self.api.backups.delete(state.id)


class VolumeBackupState(StateModel):
    name: str = Field(description="Display name.")
    volume_name: str = Field(description="Docker volume to archive.")
    prefix: str = Field(description="Key prefix inside the bucket.")
    cron_expression: str = Field(description="Schedule.")
    destination_id: str = Field(description="Destination receiving the archives.")
    service_type: str = replaces("application, postgres, mysql, mariadb, mongo, redis or compose.")
    app_name: str = Field(description="Slug of the service owning the volume.")
    service_name: str | None = Field(default=None, description="Service inside the compose file.")
    keep_latest_count: int | None = None
    turn_off: bool = Field(default=False, description="Stop the service while archiving.")
    enabled: bool = True
    application_id: str | None = replaces("Owning application.", default=None)
    postgres_id: str | None = replaces("Owning postgres service.", default=None)
    mysql_id: str | None = replaces("Owning mysql service.", default=None)
    mariadb_id: str | None = replaces("Owning mariadb service.", default=None)
    mongo_id: str | None = replaces("Owning mongo service.", default=None)
    redis_id: str | None = replaces("Owning redis service.", default=None)
    compose_id: str | None = replaces("Owning compose service.", default=None)


class VolumeBackupResource(Resource[VolumeBackupState]):
    type_name = "dokploy_volume_backup"
    state_model = VolumeBackupState
    description = "A scheduled archive of a service's docker volume."

    def create(self, plan: VolumeBackupState) -> VolumeBackupState:
        vb = self.api.volume_backups.create(to_entity(VolumeBackup, plan))
        return from_entity(VolumeBackupState, vb, plan)

    def fetch(self, state: VolumeBackupState) -> VolumeBackupState:
        return from_entity(VolumeBackupState, self.api.volume_backups.get(state.id), state)

    def update(self, plan: VolumeBackupState, prior: VolumeBackupState) -> VolumeBackupState:
        plan = plan.model_copy(update={"id": prior.id})
        vb = self.api.volume_backups.update(to_entity(VolumeBackup, plan))
        return from_entity(VolumeBackupState, vb, plan)

    def remove(self, state: VolumeBackupState) -> None:
        self.api.volume_backups.delete(state.id)


# ---- Data sources ----


class VolumeBackupSummary(StateModel):
    name: str | None = None
    volume_name: str | None = None
    cron_expression: str | None = None
    destination_id: str | None = None
    enabled: bool | None = None


class VolumeBackupList(StateModel):
    service_id: str = Field(description="Service whose volume backups to list.")
    service_type: str = Field(description="application, postgres, mysql, mariadb, mongo, redis or compose.")
    volume_backups: list[VolumeBackupSummary] = computed("Volume backups of the service.")


class VolumeBackupsDataSource(DataSource[VolumeBackupList]):
    type_name = "dokploy_volume_backups"
    state_model = VolumeBackupList
    description = "List the volume backups of one service."

    def read(self, config: VolumeBackupList) -> VolumeBackupList:
        found = self.api.volume_backups.list(config.service_id, config.service_type)
        return config.model_copy(
            update={
                "id": config.service_id,
                "volume_backups": [from_entity(VolumeBackupSummary, vb) for vb in found],
            }
        )


class BackupFileState(StateModel):
    key: str | None = None
    last_modified: str | None = None
    size: int | None = None


class BackupFileList(StateModel):
    destination_id: str = Field(description="Destination to list.")
    search: str = Field(default="", description="Key prefix to search under.")
    server_id: str | None = Field(default=None, description="Server performing the listing.")
    files: list[BackupFileState] = computed("Matching objects.")


class BackupFilesDataSource(DataSource[BackupFileList]):
    type_name = "dokploy_backup_files"
    state_model = BackupFileList
    description = "List backup objects stored in a destination."

    def read(self, config: BackupFileList) -> BackupFileList:
        found = self.api.backups.list_files(config.destination_id, config.search, config.server_id or "")
        return config.model_copy(
            update={
                "id": f"{config.destination_id}:{config.search}",
                "files": [
                    BackupFileState(id=f.key, key=f.key, last_modified=f.last_modified or None, size=f.size)
                    for f in found
                ],
            }
        )
