"""Google+ API v1."""

from __future__ import annotations

from typing import Any, Mapping, Optional

from gapispec.client import AsyncClient
from gapispec.service import Service, join_path

SPEC = {
    "people": ["get", {
        "activities": ["list"],
    }],
    "activities": ["get", {
        "comments": ["list"],
    }],
    "comments": ["get"],
}

Params = Optional[Mapping[str, Any]]


async def search_people(service: Service, params: Params = None) -> Any:
    return await service.request("GET", "people", params=params)


async def list_people_by_activity(
    service: Service, activity_id: str, collection: str, params: Params = None
) -> Any:
    """List the people in *collection* (``plusoners``, ``resharers``) of an activity."""
    return await service.request(
        "GET", join_path("activities", activity_id, "people", collection), params=params
    )


async def list_people(
    service: Service, user_id: str, collection: str, params: Params = None
) -> Any:
    return await service.request(
        "GET", join_path("people", user_id, "people", collection), params=params
    )


async def search_activities(service: Service, params: Params = None) -> Any:
    return await service.request("GET", "activities", params=params)


async def insert_moments(
    service: Service, user_id: str, collection: str, body: Any, params: Params = None
) -> Any:
    """Record a moment in the user's *collection* (usually ``vault``)."""
    return await service.request(
        "POST", join_path("people", user_id, "moments", collection), params=params, body=body
    )


async def list_moments(
    service: Service, user_id: str, collection: str, params: Params = None
) -> Any:
    return await service.request(
        "GET", join_path("people", user_id, "moments", collection), params=params
    )


async def remove_moments(service: Service, moment_id: str) -> Any:
    return await service.request("DELETE", join_path("moments", moment_id))


def plus(client: AsyncClient, server: Optional[str] = None) -> Service:
    """Build the Google+ service handle."""
    service = Service("plus", "v1", SPEC, client, server=server)
    service.register("searchPeople", search_people)
    service.register("listPeopleByActivity", list_people_by_activity)
    service.register("listPeople", list_people)
    service.register("searchActivities", search_activities)
    service.register("insertMoments", insert_moments)
    service.register("listMoments", list_moments)
    service.register("removeMoments", remove_moments)
    return service
