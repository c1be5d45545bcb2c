"""Google Calendar API v3.

The calendar list and settings collections belong to the authenticated user
and are addressed through ``users/me``. Their method names use only the last
path segment (``listCalendarList``, ``getSettings``).
"""

from __future__ import annotations

from typing import Any, Mapping, Optional

from gapispec.client import AsyncClient
from gapispec.service import Service, join_path

SPEC = {
    "colors": ["get"],
    "calendars": ["get", "insert", "update", "delete", "patch", {
        "acl": ["list", "get", "insert", "update", "delete", "patch"],
        "events": ["list", "get", "insert", "update", "delete", "patch"],
    }],
    "users/me/calendarList": ["list", "get", "insert", "update", "delete", "patch"],
    "users/me/settings": ["list", "get"],
}

Params = Optional[Mapping[str, Any]]


async def clear_calendar(service: Service, calendar_id: str, params: Params = None) -> Any:
    """Delete every event on a primary calendar."""
    return await service.request(
        "POST", join_path("calendars", calendar_id, "clear"), params=params
    )


async def import_events(
    service: Service, calendar_id: str, body: Any, params: Params = None
) -> Any:
    """Import a private copy of an existing event."""
    return await service.request(
        "POST", join_path("calendars", calendar_id, "events", "import"), params=params, body=body
    )


async def move_events(
    service: Service, calendar_id: str, event_id: str, destination_id: str
) -> Any:
    """Move an event to the calendar *destination_id*."""
    return await service.request(
        "POST",
        join_path("calendars", calendar_id, "events", event_id, "move"),
        params={"destination": destination_id},
    )


async def list_event_instances(
    service: Service, calendar_id: str, event_id: str, params: Params = None
) -> Any:
    """List the occurrences of a recurring event."""
    return await service.request(
        "GET", join_path("calendars", calendar_id, "events", event_id, "instances"), params=params
    )


async def quick_add(service: Service, calendar_id: str, params: Params = None) -> Any:
    """Create an event from free text passed as the ``text`` param."""
    return await service.request(
        "POST", join_path("calendars", calendar_id, "events", "quickAdd"), params=params
    )


async def watch_events(
    service: Service, calendar_id: str, body: Any, params: Params = None
) -> Any:
    return await service.request(
        "POST", join_path("calendars", calendar_id, "events", "watch"), params=params, body=body
    )


async def free_busy(service: Service, body: Any) -> Any:
    """Query free/busy information for a set of calendars."""
    return await service.request("POST", "freeBusy", body=body)


async def stop_watching(service: Service, body: Any) -> Any:
    return await service.request("POST", "channels/stop", body=body)


def calendar(client: AsyncClient, server: Optional[str] = None) -> Service:
    """Build the Calendar service handle."""
    service = Service("calendar", "v3", SPEC, client, server=server)
    service.register("clearCalendar", clear_calendar)
    service.register("importEvents", import_events)
    service.register("moveEvents", move_events)
    service.register("listEventInstances", list_event_instances)
    service.register("quickAdd", quick_add)
    service.register("watchEvents", watch_events)
    service.register("freeBusy", free_busy)
    service.register("stopWatching", stop_watching)
    return service
