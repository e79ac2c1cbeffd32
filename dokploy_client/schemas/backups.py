"""Backup destinations, scheduled backups and volume backups."""

from __future__ import annotations

from pydantic import Field

from dokploy_client.schemas.base import WireModel


class Destination(WireModel):
    """An S3-compatible bucket that backups are written to."""

    ID_FIELD = "destination_id"

    destination_id: str = ""
    name: str = ""
    provider: str = ""
    access_key: str = ""
    secret_access_key: str = ""
    bucket: str = ""
    region: str = ""
    endpoint: str = ""
    organization_id: str = ""
    created_at: str = ""


class Backup(WireModel):
    """A scheduled database (or compose service) backup."""

    ID_FIELD = "backup_id"

    backup_id: str = ""
    app_name: str = ""
    schedule: str = ""
    enabled: bool = False
    database: str = ""
    prefix: str = ""
    destination_id: str = ""
    keep_latest_count: int = 0
    backup_type: str = ""  # database, compose
    database_type: str = ""  # postgres, mysql, mariadb, mongo
    postgres_id: str = ""
    mysql_id: str = ""
    mariadb_id: str = ""
    mongo_id: str = ""
    compose_id: str = ""
    service_name: str = ""

    def database_id(self) -> str:
        """The id of the database this backup targets, by ``database_type``."""
        if self.database_type in ("postgres", "mysql", "mariadb", "mongo"):
            return getattr(self, f"{self.database_type}_id")
        return ""


class BackupFile(WireModel):
    """An object in a destination bucket (S3 ListObjects casing)."""

    key: str = Field(default="", alias="Key")
    last_modified: str = Field(default="", alias="LastModified")
    size: int = Field(default=0, alias="Size")
    etag: str = Field(default="", alias="ETag")
    storage_class: str = Field(default="", alias="StorageClass")


class VolumeBackup(WireModel):
    ID_FIELD = "volume_backup_id"

    volume_backup_id: str = ""
    name: str = ""
    volume_name: str = ""
    prefix: str = ""
    service_type: str = ""
    app_name: str = ""
    service_name: str = ""
    turn_off: bool = False
    cron_expression: str = ""
    keep_latest_count: int = 0
    enabled: bool = False
    destination_id: str = ""
    created_at: str = ""
    application_id: str = ""
    postgres_id: str = ""
    mariadb_id: str = ""
    mongo_id: str = ""
    mysql_id: str = ""
    redis_id: str = ""
    compose_id: str = ""

    def service_id(self) -> str:
        """The id of the service the volume belongs to, by ``service_type``."""
        if not self.service_type:
            return ""
        return getattr(self, f"{self.service_type}_id", "") or ""
