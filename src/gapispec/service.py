"""Service handles -- one per Google API, exposing generated and hand-written methods.

A :class:`Service` is built from a resource spec. Walking the spec yields a
dispatch table mapping method names to
:class:`~gapispec.models.MethodDescriptor` records; attribute access looks a
name up in that table and returns a coroutine function bound to the
service::

    youtube = Service("youtube", "v3", {"videos": ["list", "insert"]}, client)
    videos = await youtube.listVideos({"part": "snippet", "chart": "mostPopular"})

Endpoints that do not fit the action pattern are attached with
:meth:`Service.register`. Hand-written methods receive the service as their
first argument and issue requests through :meth:`Service.request`.
"""

from __future__ import annotations

import functools
import inspect
from collections.abc import Mapping
from typing import Any, Awaitable, Callable, Optional

from gapispec.client import AsyncClient
from gapispec.exceptions import DuplicateMethodError, InvalidUsageError, SpecError
from gapispec.generator import quote_segment, resolve_call, walk_spec
from gapispec.models import MethodDescriptor, ResourceSpec
from gapispec.output import debug

HandWrittenMethod = Callable[..., Awaitable[Any]]
"""``async def fn(service, *args, **kwargs)`` attached with :meth:`Service.register`."""


def join_path(*segments: Any) -> str:
    """Join path segments, percent-encoding each one.

    Example::

        join_path("calendars", "a@b.com", "clear")  # 'calendars/a%40b.com/clear'
    """
    return "/".join(quote_segment(s) for s in segments)


class Service:
    """Handle for one Google API version.

    Args:
        api: API name as it appears in the URL (``youtube``, ``drive``).
        version: API version (``v3``).
        spec: The nested resource spec to generate methods from.
        client: The HTTP client every request goes through.
        server: Google APIs host. Defaults to the client's configured
            server, ``https://www.googleapis.com`` unless overridden.

    Raises:
        SpecError: If *spec* is malformed or generates the same method name
            twice.
    """

    def __init__(
        self,
        api: str,
        version: str,
        spec: ResourceSpec,
        client: AsyncClient,
        server: Optional[str] = None,
    ) -> None:
        self.api = api
        self.version = version
        self.client = client
        self.url = f"{(server or client.server).rstrip('/')}/{api}/{version}/"

        self._descriptors: dict[str, MethodDescriptor] = {}
        self._handwritten: dict[str, HandWrittenMethod] = {}

        for descriptor in walk_spec(spec):
            if descriptor.name in self._descriptors:
                raise SpecError(
                    f"Resource spec for {api} {version} generates '{descriptor.name}' twice"
                )
            self._descriptors[descriptor.name] = descriptor

    def __repr__(self) -> str:
        return f"Service({self.api!r}, {self.version!r}, url={self.url!r})"

    # ------------------------------------------------------------------ #
    # Method surface
    # ------------------------------------------------------------------ #

    def __getattr__(self, name: str) -> Callable[..., Awaitable[Any]]:
        # Only reached when normal lookup fails, i.e. for generated and
        # hand-written method names.
        if name in self.__dict__.get("_handwritten", {}) or name in self.__dict__.get(
            "_descriptors", {}
        ):
            return functools.partial(self.invoke, name)
        raise AttributeError(
            f"{type(self).__name__} '{self.__dict__.get('api')}' has no method '{name}'"
        )

    def __dir__(self) -> list[str]:
        return sorted(set(super().__dir__()) | set(self.methods()))

    def methods(self) -> list[str]:
        """Return every exposed method name, generated ones first in spec order."""
        names = list(self._descriptors)
        names.extend(n for n in self._handwritten if n not in self._descriptors)
        return names

    def describe(self, name: str) -> Optional[MethodDescriptor]:
        """Return the descriptor of a generated method.

        Returns:
            The :class:`~gapispec.models.MethodDescriptor`, or ``None`` if
            *name* is a hand-written method.

        Raises:
            InvalidUsageError: If the service has no method called *name*.
        """
        if name in self._handwritten:
            return None
        if name in self._descriptors:
            return self._descriptors[name]
        raise InvalidUsageError(self._unknown_method(name))

    def handwritten(self, name: str) -> Optional[HandWrittenMethod]:
        """Return the hand-written function registered as *name*, if any."""
        return self._handwritten.get(name)

    def register(
        self,
        name: str,
        fn: HandWrittenMethod,
        override: bool = False,
    ) -> None:
        """Attach a hand-written method.

        Args:
            name: Public method name.
            fn: Coroutine function called as ``fn(service, *args, **kwargs)``.
            override: Replace an existing method of the same name. Only the
                latest registration is exposed.

        Raises:
            DuplicateMethodError: If *name* is already exposed and
                *override* is false, or if it would shadow a
                :class:`Service` attribute.
        """
        if hasattr(type(self), name) or name in self.__dict__:
            raise DuplicateMethodError(
                f"Cannot register '{name}': it would shadow a Service attribute"
            )
        if not override and (name in self._descriptors or name in self._handwritten):
            raise DuplicateMethodError(
                f"Method '{name}' already exists on {self.api}; pass override=True to replace it"
            )
        self._descriptors.pop(name, None)
        self._handwritten[name] = fn

    # ------------------------------------------------------------------ #
    # Invocation
    # ------------------------------------------------------------------ #

    async def invoke(
        self,
        name: str,
        *args: Any,
        body: Any = None,
        params: Optional[Mapping[str, Any]] = None,
    ) -> Any:
        """Call the method *name* and return the decoded response payload.

        Generated methods accept either the positional form or the explicit
        ``body=`` / ``params=`` form; see :mod:`gapispec.generator.arguments`.
        Hand-written methods receive the keywords only when they are given.

        Raises:
            InvalidUsageError: If there is no such method or the arguments
                do not fit it.
        """
        fn = self._handwritten.get(name)
        if fn is not None:
            kwargs: dict[str, Any] = {}
            if body is not None:
                kwargs["body"] = body
            if params is not None:
                kwargs["params"] = params
            try:
                inspect.signature(fn).bind(self, *args, **kwargs)
            except TypeError as exc:
                raise InvalidUsageError(f"{name}(): {exc}") from None
            return await fn(self, *args, **kwargs)

        descriptor = self._descriptors.get(name)
        if descriptor is None:
            raise InvalidUsageError(self._unknown_method(name))

        envelope = resolve_call(descriptor, self.url, args, body=body, params=params)
        debug(f"{self.api}.{name} -> {envelope.method.value} {envelope.url}")
        return await self.client.send(envelope)

    async def request(
        self,
        method: str,
        path: str,
        params: Optional[Mapping[str, Any]] = None,
        body: Any = None,
    ) -> Any:
        """Issue a request to *path*, relative to :attr:`url`.

        This is the building block for hand-written methods; see
        :func:`join_path` for encoding identifiers into *path*.
        """
        return await self.client.request(
            method,
            self.url + path.lstrip("/"),
            params=dict(params) if params is not None else None,
            body=body,
        )

    def _unknown_method(self, name: str) -> str:
        available = ", ".join(sorted(self.methods())) or "(none)"
        return f"{self.api} has no method '{name}'. Available methods: {available}"
