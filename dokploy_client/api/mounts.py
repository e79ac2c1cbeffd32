from __future__ import annotations

from dokploy_client.api.base import BaseAPI
from dokploy_client.decoding import decode, direct, match_submitted, refetch
from dokploy_client.payload import omit_empty
from dokploy_client.schemas.applications import Mount


def same_mount(submitted: Mount, candidate: Mount) -> bool:
    """Whether *candidate* is the mount described by *submitted*.

    Type and mount path always have to agree. The source field that matters
    depends on the type: host path for bind mounts, volume name for volumes,
    file path for file mounts (only when both sides carry one).
    """
    if candidate.type != submitted.type or candidate.mount_path != submitted.mount_path:
        return False
    if submitted.type == "bind":
        return candidate.host_path == submitted.host_path
    if submitted.type == "volume":
        return candidate.volume_name == submitted.volume_name
    if submitted.type == "file" and submitted.file_path and candidate.file_path:
        return candidate.file_path == submitted.file_path
    return True


class MountsAPI(BaseAPI):
    def create(self, mount: Mount) -> Mount:
        payload = {
            "type": mount.type,
            "mountPath": mount.mount_path,
            "serviceId": mount.service_id,
            "serviceType": mount.service_type,
        }
        payload.update(
            omit_empty(
                hostPath=mount.host_path,
                volumeName=mount.volume_name,
                content=mount.content,
                filePath=mount.file_path,
            )
        )
        raw = self.client.post("mounts.create", payload)

        def find_created() -> Mount:
            found = match_submitted(
                self.list_by_service(mount.service_type, mount.service_id),
                lambda m: same_mount(mount, m),
                "mount",
            )
            return found.model_copy(
                update={"service_id": mount.service_id, "service_type": mount.service_type}
            )

        return decode(raw, [direct(Mount), refetch(find_created)], "mount")

    def get(self, mount_id: str) -> Mount:
        return self._get("mounts.one", Mount, "mount", mountId=mount_id)

    def update(self, mount: Mount) -> Mount:
        payload = {"mountId": mount.mount_id}
        payload.update(
            omit_empty(
                type=mount.type,
                hostPath=mount.host_path,
                volumeName=mount.volume_name,
                content=mount.content,
                filePath=mount.file_path,
                mountPath=mount.mount_path,
                serviceType=mount.service_type,
            )
        )
        self.client.post("mounts.update", payload)
        # The update response does not reflect the stored row.
        return self.get(mount.mount_id)

    def delete(self, mount_id: str) -> None:
        self.client.post("mounts.remove", {"mountId": mount_id})

    def list_by_service(self, service_type: str, service_id: str) -> list[Mount]:
        return self._children(service_type, service_id, "mounts", Mount)
