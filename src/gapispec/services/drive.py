"""Google Drive API v2."""

from __future__ import annotations

from typing import Any, Mapping, Optional

from gapispec.client import AsyncClient
from gapispec.service import Service, join_path

SPEC = {
    "files": ["get", "list", "insert", "update", "delete", "patch", {
        "children": ["get", "list", "insert", "delete"],
        "parents": ["get", "list", "insert", "delete"],
        "permissions": ["get", "list", "insert", "update", "delete", "patch"],
        "revisions": ["get", "list", "update", "delete", "patch"],
        "comments": ["get", "list", "insert", "update", "delete", "patch", {
            "replies": ["get", "list", "insert", "update", "delete", "patch"],
        }],
        "properties": ["get", "list", "insert", "update", "delete", "patch"],
        "realtime": ["get"],
    }],
    "changes": ["get", "list"],
    "apps": ["get", "list"],
}

Params = Optional[Mapping[str, Any]]


async def copy_file(service: Service, file_id: str, body: Any, params: Params = None) -> Any:
    """Create a copy of a file, applying *body* as the copy's metadata."""
    return await service.request(
        "POST", join_path("files", file_id, "copy"), params=params, body=body
    )


async def touch_file(service: Service, file_id: str) -> Any:
    """Set a file's modified date to the current time."""
    return await service.request("POST", join_path("files", file_id, "touch"))


async def trash_file(service: Service, file_id: str) -> Any:
    return await service.request("POST", join_path("files", file_id, "trash"))


async def untrash_file(service: Service, file_id: str) -> Any:
    return await service.request("POST", join_path("files", file_id, "untrash"))


async def watch_file(service: Service, file_id: str, body: Any) -> Any:
    """Subscribe a notification channel to changes of one file."""
    return await service.request("POST", join_path("files", file_id, "watch"), body=body)


async def about(service: Service, params: Params = None) -> Any:
    """Return information about the current user and their Drive."""
    return await service.request("GET", "about", params=params)


async def watch_changes(service: Service, body: Any) -> Any:
    return await service.request("POST", "changes/watch", body=body)


async def get_permission_id_for_email(service: Service, email: str) -> Any:
    return await service.request("GET", join_path("permissionIds", email))


async def stop_channels(service: Service, body: Any) -> Any:
    return await service.request("POST", "channels/stop", body=body)


async def update_realtime(service: Service, file_id: str, params: Params = None) -> Any:
    return await service.request("PUT", join_path("files", file_id, "realtime"), params=params)


def drive(client: AsyncClient, server: Optional[str] = None) -> Service:
    """Build the Drive service handle."""
    service = Service("drive", "v2", SPEC, client, server=server)
    service.register("copyFile", copy_file)
    service.register("touchFile", touch_file)
    service.register("trashFile", trash_file)
    service.register("untrashFile", untrash_file)
    service.register("watchFile", watch_file)
    service.register("about", about)
    service.register("watchChanges", watch_changes)
    service.register("getPermissionIdForEmail", get_permission_id_for_email)
    service.register("stopChannels", stop_channels)
    service.register("updateRealtime", update_realtime)
    return service
