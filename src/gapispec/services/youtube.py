"""YouTube Data API v3."""

from __future__ import annotations

from typing import Any, Mapping, Optional

from gapispec.client import AsyncClient
from gapispec.service import Service

SPEC = {
    "activities": ["list", "insert"],
    "channels": ["list", "update"],
    "guideCategories": ["list"],
    "liveBroadcasts": ["list", "insert", "update", "delete"],
    "liveStreams": ["list", "insert", "update", "delete"],
    "playlistItems": ["list", "insert", "update", "delete"],
    "playlists": ["list", "insert", "update", "delete"],
    "subscriptions": ["list", "insert", "delete"],
    "thumbnails": ["set"],
    "videoCategories": ["list"],
    "videos": ["list", "insert", "update", "delete"],
    "watermarks": ["set", "unset"],
}


async def rate_videos(service: Service, params: Optional[Mapping[str, Any]] = None) -> Any:
    """Like, dislike, or clear the rating of a video (``id`` and ``rating`` params)."""
    return await service.request("POST", "videos/rate", params=params)


async def get_video_rating(service: Service, params: Optional[Mapping[str, Any]] = None) -> Any:
    """Return the caller's rating of one or more videos."""
    return await service.request("GET", "videos/getRating", params=params)


async def search(service: Service, params: Optional[Mapping[str, Any]] = None) -> Any:
    return await service.request("GET", "search", params=params)


def youtube(client: AsyncClient, server: Optional[str] = None) -> Service:
    """Build the YouTube service handle."""
    service = Service("youtube", "v3", SPEC, client, server=server)
    service.register("rateVideos", rate_videos)
    service.register("getVideoRating", get_video_rating)
    service.register("search", search)
    return service
