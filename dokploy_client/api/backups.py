"""Backup destinations, scheduled backups and volume backups."""

from __future__ import annotations

from typing import Any

from dokploy_client.api.base import BaseAPI
from dokploy_client.decoding import decode, direct, match_submitted, refetch, wrapped
from dokploy_client.errors import UnsupportedTypeError
from dokploy_client.payload import omit_empty, positive
from dokploy_client.schemas.backups import Backup, BackupFile, Destination, VolumeBackup

BACKUP_DATABASE_TYPES = ("postgres", "mysql", "mariadb", "mongo")


class DestinationsAPI(BaseAPI):
    def _payload(self, dest: Destination) -> dict[str, Any]:
        return {
            "name": dest.name,
            "provider": dest.provider,
            "accessKey": dest.access_key,
            "secretAccessKey": dest.secret_access_key,
            "bucket": dest.bucket,
            "region": dest.region,
            "endpoint": dest.endpoint,
        }

    def create(self, dest: Destination) -> Destination:
        raw = self.client.post("destination.create", self._payload(dest))
        return decode(raw, [direct(Destination), wrapped(Destination, "destination")], "destination")

    def get(self, destination_id: str) -> Destination:
        return self._get("destination.one", Destination, "destination", destinationId=destination_id)

    def update(self, dest: Destination) -> Destination:
        payload = self._payload(dest)
        payload["destinationId"] = dest.destination_id
        raw = self.client.post("destination.update", payload)
        return decode(
            raw,
            [direct(Destination), refetch(lambda: self.get(dest.destination_id), always=True)],
            "destination",
        )

    def delete(self, destination_id: str) -> None:
        self.client.post("destination.remove", {"destinationId": destination_id})

    def list(self) -> list[Destination]:
        return self._list("destination.all", Destination, "destinations")


class BackupsAPI(BaseAPI):
    def create(self, backup: Backup) -> Backup:
        payload: dict[str, Any] = {
            "schedule": backup.schedule,
            "enabled": backup.enabled,
            "prefix": backup.prefix,
            "destinationId": backup.destination_id,
            "database": backup.database,
            "backupType": backup.backup_type or "database",
            "databaseType": backup.database_type,
        }
        payload.update(
            omit_empty(
                keepLatestCount=positive(backup.keep_latest_count),
                postgresId=backup.postgres_id,
                mysqlId=backup.mysql_id,
                mariadbId=backup.mariadb_id,
                mongoId=backup.mongo_id,
                composeId=backup.compose_id,
                serviceName=backup.service_name,
            )
        )
        raw = self.client.post("backup.create", payload)

        def find_created() -> Backup:
            return match_submitted(
                self._parent_backups(backup),
                lambda b: (
                    b.destination_id == backup.destination_id
                    and b.prefix == backup.prefix
                    and b.schedule == backup.schedule
                ),
                "backup",
            )

        return decode(raw, [refetch(find_created), direct(Backup)], "backup")

    def _parent_backups(self, backup: Backup) -> list[Backup]:
        if backup.compose_id:
            return self._children("compose", backup.compose_id, "backups", Backup)
        if backup.database_type not in BACKUP_DATABASE_TYPES:
            raise UnsupportedTypeError("backup database type", backup.database_type)
        return self._children(backup.database_type, backup.database_id(), "backups", Backup)

    def get(self, backup_id: str) -> Backup:
        return self._get("backup.one", Backup, "backup", backupId=backup_id)

    def update(self, backup: Backup) -> Backup:
        payload: dict[str, Any] = {
            "backupId": backup.backup_id,
            "schedule": backup.schedule,
            "enabled": backup.enabled,
            "prefix": backup.prefix,
            "destinationId": backup.destination_id,
            "database": backup.database,
            "databaseType": backup.database_type,
        }
        payload.update(
            omit_empty(
                serviceName=backup.service_name,
                keepLatestCount=positive(backup.keep_latest_count),
            )
        )
        raw = self.client.post("backup.update", payload)
        return decode(
            raw,
            [direct(Backup), refetch(lambda: self.get(backup.backup_id), always=True)],
            "backup",
        )

    def delete(self, backup_id: str) -> None:
        self.client.post("backup.remove", {"backupId": backup_id})

    def list_files(self, destination_id: str, search: str = "", server_id: str = "") -> list[BackupFile]:
        """Objects under *search* in a destination bucket."""
        params = {"destinationId": destination_id, "search": search}
        params.update(omit_empty(serverId=server_id))
        return self._list("backup.listBackupFiles", BackupFile, "backup files", **params)


class VolumeBackupsAPI(BaseAPI):
    def _payload(self, vb: VolumeBackup) -> dict[str, Any]:
        payload: dict[str, Any] = {
            "name": vb.name,
            "volumeName": vb.volume_name,
            "prefix": vb.prefix,
            "cronExpression": vb.cron_expression,
            "destinationId": vb.destination_id,
            "serviceType": vb.service_type,
            "appName": vb.app_name,
            "turnOff": vb.turn_off,
            "enabled": vb.enabled,
        }
        payload.update(
            omit_empty(
                serviceName=vb.service_name,
                keepLatestCount=positive(vb.keep_latest_count),
                applicationId=vb.application_id,
                postgresId=vb.postgres_id,
                mariadbId=vb.mariadb_id,
                mongoId=vb.mongo_id,
                mysqlId=vb.mysql_id,
                redisId=vb.redis_id,
                composeId=vb.compose_id,
            )
        )
        return payload

    def create(self, vb: VolumeBackup) -> VolumeBackup:
        raw = self.client.post("volumeBackups.create", self._payload(vb))
        return decode(raw, [direct(VolumeBackup), wrapped(VolumeBackup, "volumeBackup")], "volume backup")

    def get(self, volume_backup_id: str) -> VolumeBackup:
        return self._get(
            "volumeBackups.one", VolumeBackup, "volume backup", volumeBackupId=volume_backup_id
        )

    def update(self, vb: VolumeBackup) -> VolumeBackup:
        payload = self._payload(vb)
        payload["volumeBackupId"] = vb.volume_backup_id
        raw = self.client.post("volumeBackups.update", payload)
        return decode(
            raw,
            [direct(VolumeBackup), refetch(lambda: self.get(vb.volume_backup_id), always=True)],
            "volume backup",
        )

    def delete(self, volume_backup_id: str) -> None:
        self.client.post("volumeBackups.delete", {"volumeBackupId": volume_backup_id})

    def list(self, service_id: str, service_type: str) -> list[VolumeBackup]:
        return self._list(
            "volumeBackups.list",
            VolumeBackup,
            "volume backups",
            id=service_id,
            volumeBackupType=service_type,
        )
