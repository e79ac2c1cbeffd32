from __future__ import annotations

from pydantic import Field

from dokploy_client.schemas import Mount
from dokploy_provider.resources.base import Resource, StateModel, from_entity, replaces, to_entity


class MountState(StateModel):
    service_id: str = replaces("Id of the service the mount is attached to.")
    service_type: str = replaces("application, postgres, mysql, mariadb, mongo, redis or compose.", default="application")
    type: str = replaces("bind, volume or file.")
    mount_path: str = Field(description="Path inside the container.")
    host_path: str | None = Field(default=None, description="Host path, for bind mounts.")
    volume_name: str | None = Field(default=None, description="Docker volume, for volume mounts.")
    content: str | None = Field(default=None, description="File content, for file mounts.")
    file_path: str | None = Field(default=None, description="File name, for file mounts.")


# The platform reports the owner through a typed id field, not serviceId.
_KEEP = ("service_id", "service_type")

_OWNER_FIELDS = (
    ("application_id", "application"),
    ("compose_id", "compose"),
    ("postgres_id", "postgres"),
    ("mysql_id", "mysql"),
    ("mariadb_id", "mariadb"),
    ("mongo_id", "mongo"),
    ("redis_id", "redis"),
)


def owner(mount: Mount) -> tuple[str, str] | None:
    """Return ``(service_id, service_type)`` from the typed id the mount carries."""
    for field, service_type in _OWNER_FIELDS:
        service_id = getattr(mount, field)
        if service_id:
            return service_id, service_type
    return None


class MountResource(Resource[MountState]):
    type_name = "dokploy_mount"
    state_model = MountState
    description = "A bind mount, named volume or file mounted into a service."

    def create(self, plan: MountState) -> MountState:
        mount = self.api.mounts.create(to_entity(Mount, plan))
        return from_entity(MountState, mount, plan, keep=_KEEP)

    def fetch(self, state: MountState) -> MountState:
        mount = self.api.mounts.get(state.id)
        found = owner(mount)
        # Imported by id alone: nothing declared to keep.
        if not getattr(state, "service_id", None) and found is not None:
            state = state.model_copy(update={"service_id": found[0], "service_type": found[1]})
        return from_entity(MountState, mount, state, keep=_KEEP)

    def update(self, plan: MountState, prior: MountState) -> MountState:
        mount = self.api.mounts.update(to_entity(Mount, plan, mount_id=prior.id))
        return from_entity(MountState, mount, plan.model_copy(update={"id": prior.id}), keep=_KEEP)

    def remove(self, state: MountState) -> None:
        self.api.mounts.delete(state.id)
