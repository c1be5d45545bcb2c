"""Walk a nested resource spec and emit method descriptors.

A resource spec maps resource names to the actions they support. An action
list may end with one nested spec describing sub-resources::

    {
        "users": ["get"],
        "blogs": ["get", {
            "pages": ["list", "get"],
            "posts": ["list", "get", {"comments": ["list", "get"]}],
        }],
    }

**Algorithm summary**

1. For every resource in the spec, visit its action list in order.
2. An action name produces one :class:`~gapispec.models.MethodDescriptor`
   carrying the ancestor chain accumulated so far.
3. A nested spec is walked recursively with the current resource appended
   to the ancestor chain. Chains are tuples, so a sub-resource never sees
   the ancestors of a sibling branch.

Resource names containing ``/`` (``users/me/settings``) are spliced into the
URL verbatim and never become ancestors of their own.

Specs are validated while walking; anything that does not fit the shape
above raises :class:`~gapispec.exceptions.SpecError`.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Iterator, Optional

from gapispec.exceptions import SpecError
from gapispec.generator.naming import method_name
from gapispec.models import Action, HTTPMethod, MethodDescriptor, ResourceSpec

# ---------------------------------------------------------------------------
# Action -> (HTTP verb, URL suffix, takes a request body)
# ---------------------------------------------------------------------------

ACTION_TABLE: dict[Action, tuple[HTTPMethod, Optional[str], bool]] = {
    Action.LIST: (HTTPMethod.GET, None, False),
    Action.GET: (HTTPMethod.GET, None, False),
    Action.INSERT: (HTTPMethod.POST, None, True),
    Action.UPDATE: (HTTPMethod.PUT, None, True),
    Action.PATCH: (HTTPMethod.PATCH, None, True),
    Action.DELETE: (HTTPMethod.DELETE, None, False),
    Action.SET: (HTTPMethod.POST, "set", False),
    Action.UNSET: (HTTPMethod.POST, "unset", False),
}


# ---------------------------------------------------------------------------
# Public entry points
# ---------------------------------------------------------------------------


def walk_spec(
    spec: ResourceSpec,
    ancestors: tuple[str, ...] = (),
) -> Iterator[MethodDescriptor]:
    """Yield one descriptor per (action, resource) pair reachable in *spec*.

    Args:
        spec: The resource spec to expand.
        ancestors: Enclosing resource names, outermost first. Callers leave
            this empty; it grows as the walk descends into nested specs.

    Yields:
        :class:`~gapispec.models.MethodDescriptor` instances in declaration
        order, parents before the sub-resources nested under them.

    Raises:
        SpecError: If the spec is not a mapping, an action list is not a
            list, an entry is neither an action name nor a nested spec, an
            action name is unknown, or a nested spec is repeated or not
            last in its action list.
    """
    if not isinstance(spec, Mapping):
        raise SpecError(f"Resource spec must be a mapping, got {type(spec).__name__}")

    for resource, entries in spec.items():
        if not isinstance(resource, str) or not resource.strip("/"):
            raise SpecError(f"Invalid resource name: {resource!r}")
        if not isinstance(entries, (list, tuple)):
            raise SpecError(
                f"Actions for '{resource}' must be a list, got {type(entries).__name__}"
            )

        for position, entry in enumerate(entries):
            if isinstance(entry, Mapping):
                if position != len(entries) - 1:
                    raise SpecError(
                        f"Nested spec under '{resource}' must be the last entry "
                        f"of its action list"
                    )
                yield from walk_spec(entry, (*ancestors, resource))
            elif isinstance(entry, str):
                yield describe(entry, resource, ancestors)
            else:
                raise SpecError(
                    f"Unexpected entry {entry!r} in actions for '{resource}'"
                )


def describe(
    action: str,
    resource: str,
    ancestors: tuple[str, ...] = (),
) -> MethodDescriptor:
    """Build the descriptor for a single action on *resource*.

    Args:
        action: Action name from the spec (``list``, ``insert``, ...).
        resource: Resource name, possibly containing ``/``.
        ancestors: Enclosing resource names, outermost first.

    Returns:
        The frozen :class:`~gapispec.models.MethodDescriptor`.

    Raises:
        SpecError: If *action* is not a known action name.
    """
    try:
        known = Action(action)
    except ValueError:
        valid = ", ".join(a.value for a in Action)
        raise SpecError(
            f"Unknown action '{action}' for resource '{resource}'. Valid actions: {valid}"
        ) from None

    verb, suffix, body_allowed = ACTION_TABLE[known]
    return MethodDescriptor(
        name=method_name(known.value, resource),
        action=known,
        resource=resource.strip("/"),
        ancestors=tuple(a.strip("/") for a in ancestors),
        verb=verb,
        suffix=suffix,
        body_allowed=body_allowed,
    )
