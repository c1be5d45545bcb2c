"""Blogger API v3.

Posts and pages live under a blog, and comments under a post, so those
methods take the enclosing identifiers first::

    comments = await blogger.listComments(blog_id, post_id)
"""

from __future__ import annotations

from typing import Optional

from gapispec.client import AsyncClient
from gapispec.service import Service

SPEC = {
    "users": ["get"],
    "blogs": ["get", {
        "pages": ["list", "get"],
        "posts": ["list", "get", "insert", "update", "delete", {
            "comments": ["list", "get"],
        }],
    }],
}


def blogger(client: AsyncClient, server: Optional[str] = None) -> Service:
    """Build the Blogger service handle."""
    return Service("blogger", "v3", SPEC, client, server=server)
