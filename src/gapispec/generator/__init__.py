"""Method generation -- turn a resource spec into a dispatch table.

This sub-package holds the three pieces a :class:`~gapispec.service.Service`
is assembled from:

* :mod:`~gapispec.generator.walker` -- walk a nested resource spec and emit
  one :class:`~gapispec.models.MethodDescriptor` per (action, resource) pair.
* :mod:`~gapispec.generator.naming` -- derive method names such as
  ``listPlaylistItems`` from an action and a resource.
* :mod:`~gapispec.generator.arguments` -- at call time, split the caller's
  arguments into path identifiers, request body, and query parameters.

Typical usage::

    from gapispec.generator import resolve_call, walk_spec

    for descriptor in walk_spec({"videos": ["list", "insert"]}):
        envelope = resolve_call(descriptor, base_url, ({"part": "id"},))
"""

from gapispec.generator.arguments import quote_segment, resolve_call
from gapispec.generator.naming import method_name
from gapispec.generator.walker import describe, walk_spec

__all__ = ["describe", "method_name", "quote_segment", "resolve_call", "walk_spec"]
