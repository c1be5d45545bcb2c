"""Split a generated method's arguments into path, body, and query parameters.

Generated methods accept arguments in one of two forms.

**Positional form.** Everything is positional and roles are decided by type:

* one identifier per ancestor resource, in nesting order;
* optionally, a primitive (``str``, ``int``, ``float``) instance id;
* for ``insert``/``update``/``patch``: a body, optionally followed by a
  query-parameter mapping. The last two arguments are inspected: if both are
  structured, they are ``(body, params)``; if only the last one is, it is
  the body. Callers must pass body before params;
* for every other action: optionally, one query-parameter mapping.

A single trailing ``None`` stands for an absent parameter mapping and is
dropped before these rules apply.

**Explicit form.** Positional arguments are path identifiers only, and the
body and query parameters are passed as ``body=`` and ``params=`` keywords.
No type sniffing takes place.

Anything left over after these rules (a third structured value, a stray
primitive, a write call without a body) raises
:class:`~gapispec.exceptions.InvalidUsageError`.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, Optional, Sequence
from urllib.parse import quote

from gapispec.exceptions import InvalidUsageError
from gapispec.models import MethodDescriptor, RequestEnvelope


def is_primitive(value: Any) -> bool:
    """Return True for values usable as a path segment (``str``, ``int``, ``float``)."""
    return isinstance(value, (str, int, float)) and not isinstance(value, bool)


def is_structured(value: Any) -> bool:
    """Return True for values that can be a request body or parameter bag."""
    return isinstance(value, (Mapping, list))


def quote_segment(value: Any) -> str:
    """Percent-encode *value* as a single URL path segment."""
    return quote(str(value), safe="")


def resolve_call(
    descriptor: MethodDescriptor,
    base_url: str,
    args: Sequence[Any],
    body: Any = None,
    params: Optional[Mapping[str, Any]] = None,
) -> RequestEnvelope:
    """Resolve one call of a generated method into a :class:`RequestEnvelope`.

    Args:
        descriptor: The method being called.
        base_url: The owning service's URL, ending in ``/``.
        args: Positional arguments as supplied by the caller.
        body: Explicit request body (explicit form only).
        params: Explicit query parameters (explicit form only).

    Returns:
        The envelope with verb, URL, query parameters, and body.

    Raises:
        InvalidUsageError: If the arguments do not fit the method.
    """
    url, consumed = build_url(descriptor, base_url, args)
    trailing = list(args[consumed:])

    if body is not None or params is not None:
        return _resolve_explicit(descriptor, url, trailing, body, params)
    if trailing and trailing[-1] is None:
        # A forwarded ``params=None`` means no parameter bag.
        trailing.pop()
    if descriptor.body_allowed:
        body, params = _split_body_and_params(descriptor, trailing)
    else:
        params = _split_params(descriptor, trailing)

    return RequestEnvelope(
        method=descriptor.verb,
        url=url,
        params=dict(params) if params is not None else None,
        body=body,
    )


def build_url(
    descriptor: MethodDescriptor,
    base_url: str,
    args: Sequence[Any],
) -> tuple[str, int]:
    """Build the request URL and report how many arguments it consumed.

    Each ancestor contributes its resource name followed by the identifier
    at the same position in *args*. The leaf resource name follows; if the
    next argument is primitive it is appended as the instance id, otherwise
    the collection is addressed.

    Returns:
        A ``(url, consumed)`` tuple.

    Raises:
        InvalidUsageError: If an ancestor identifier is missing or not
            primitive.
    """
    nodes: list[str] = []
    for index, ancestor in enumerate(descriptor.ancestors):
        if index >= len(args) or not is_primitive(args[index]):
            raise InvalidUsageError(
                f"{descriptor.name}() expects an identifier for '{ancestor}' "
                f"as argument {index + 1}"
            )
        nodes.extend((ancestor, quote_segment(args[index])))

    consumed = len(descriptor.ancestors)
    nodes.append(descriptor.resource)
    if consumed < len(args) and is_primitive(args[consumed]):
        nodes.append(quote_segment(args[consumed]))
        consumed += 1

    if descriptor.suffix:
        nodes.append(descriptor.suffix)

    return base_url + "/".join(nodes), consumed


# ---------------------------------------------------------------------------
# Private helpers
# ---------------------------------------------------------------------------


def _split_params(
    descriptor: MethodDescriptor,
    trailing: list[Any],
) -> Optional[Mapping[str, Any]]:
    """Read/delete-style calls: at most one trailing mapping of query params."""
    if not trailing:
        return None
    if len(trailing) == 1 and isinstance(trailing[0], Mapping):
        return trailing[0]
    raise InvalidUsageError(
        f"{descriptor.name}() takes path identifiers followed by at most one "
        f"mapping of query parameters; got unexpected {_describe(trailing)}"
    )


def _split_body_and_params(
    descriptor: MethodDescriptor,
    trailing: list[Any],
) -> tuple[Any, Optional[Mapping[str, Any]]]:
    """Write-style calls: look back at most two arguments for (body, params)."""
    if len(trailing) == 1 and is_structured(trailing[0]):
        return trailing[0], None
    if len(trailing) == 2 and is_structured(trailing[0]) and isinstance(trailing[1], Mapping):
        return trailing[0], trailing[1]
    if not trailing:
        raise InvalidUsageError(f"{descriptor.name}() requires a request body")
    raise InvalidUsageError(
        f"{descriptor.name}() takes path identifiers followed by a body and "
        f"optionally a mapping of query parameters; got {_describe(trailing)}"
    )


def _resolve_explicit(
    descriptor: MethodDescriptor,
    url: str,
    trailing: list[Any],
    body: Any,
    params: Optional[Mapping[str, Any]],
) -> RequestEnvelope:
    if trailing:
        raise InvalidUsageError(
            f"{descriptor.name}() was given body=/params= keywords, so positional "
            f"arguments must be path identifiers only; got {_describe(trailing)}"
        )
    if body is not None and not descriptor.body_allowed:
        raise InvalidUsageError(
            f"{descriptor.name}() does not accept a request body "
            f"({descriptor.action.value} sends none)"
        )
    if body is None and descriptor.body_allowed:
        raise InvalidUsageError(f"{descriptor.name}() requires a request body")
    if params is not None and not isinstance(params, Mapping):
        raise InvalidUsageError(
            f"{descriptor.name}() params must be a mapping, got {type(params).__name__}"
        )

    return RequestEnvelope(
        method=descriptor.verb,
        url=url,
        params=dict(params) if params is not None else None,
        body=body,
    )


def _describe(values: list[Any]) -> str:
    kinds = ", ".join(type(v).__name__ for v in values)
    return f"{len(values)} trailing argument(s) ({kinds})"
