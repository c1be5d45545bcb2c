"""Method-name synthesis.

A generated method is named after its action and the *leaf* of its resource
name, so ``users/me/calendarList`` with action ``list`` becomes
``listCalendarList``. Only the first character of the leaf is upper-cased;
the rest keeps the camel case Google uses for resource names.
"""

from __future__ import annotations


def leaf_segment(resource: str) -> str:
    """Return the last ``/``-separated segment of *resource*."""
    return resource.rsplit("/", 1)[-1]


def method_name(action: str, resource: str) -> str:
    """Build the generated method name for *action* on *resource*.

    Args:
        action: Action name, e.g. ``"list"``.
        resource: Resource name, possibly with a path prefix.

    Returns:
        The concatenated name, e.g. ``"listPlaylistItems"``.

    Example::

        >>> method_name("list", "playlistItems")
        'listPlaylistItems'
        >>> method_name("get", "users/me/settings")
        'getSettings'
    """
    leaf = leaf_segment(resource)
    return action + leaf[:1].upper() + leaf[1:]
