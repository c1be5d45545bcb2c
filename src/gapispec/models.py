"""Canonical Pydantic models shared across all gapispec modules.

The models fall into two groups:

**Configuration models** -- serialised as JSON in the user's config directory:
    :class:`AppConfig`, :class:`RequestConfig`, :class:`OutputConfig`, and
    :class:`GlobalConfig`.

**Generator models** -- produced by the spec walker and consumed by
:class:`~gapispec.service.Service` and :class:`~gapispec.client.AsyncClient`:
    :class:`Action`, :class:`HTTPMethod`, :class:`MethodDescriptor`, and
    :class:`RequestEnvelope`.

A *resource spec* itself is a plain nested literal rather than a model; its
shape is described by the :data:`ResourceSpec` alias.
"""

from __future__ import annotations

import enum
from typing import Any, Mapping, Optional, Sequence, Union

from pydantic import BaseModel, ConfigDict, Field

DEFAULT_SERVER = "https://www.googleapis.com"
GOOGLE_AUTHORIZATION_URL = "https://accounts.google.com/o/oauth2/v2/auth"
GOOGLE_TOKEN_URL = "https://oauth2.googleapis.com/token"

ResourceSpec = Mapping[str, Sequence[Union[str, "ResourceSpec"]]]
"""Resource name -> ordered action names, optionally ending in one nested spec."""


# --- Config ---


class AppConfig(BaseModel):
    """The Google application that requests consent on the user's behalf.

    Example::

        AppConfig(
            client_id="1234.apps.googleusercontent.com",
            scopes=["https://www.googleapis.com/auth/youtube.readonly"],
        )
    """

    name: str = Field(default="default", description="Name used for the credential store")
    client_id: str = Field(description="OAuth2 client id of the Google application")
    client_secret_source: Optional[str] = Field(
        default=None,
        description="Credential source for the client secret: env:VAR, file:/path, prompt",
    )
    scopes: list[str] = Field(default_factory=list)
    authorization_url: str = GOOGLE_AUTHORIZATION_URL
    token_url: str = GOOGLE_TOKEN_URL


class RequestConfig(BaseModel):
    """HTTP settings applied to every request a service issues."""

    server: str = Field(default=DEFAULT_SERVER, description="Google APIs host")
    timeout: int = Field(default=30, description="Request timeout in seconds")
    verify_ssl: bool = Field(default=True, description="Verify SSL certificates")


class OutputConfig(BaseModel):
    """Default output format preferences stored in :class:`GlobalConfig`."""

    format: str = Field(
        default="auto", description="Output format: auto, json, plain, rich"
    )


class GlobalConfig(BaseModel):
    """User-wide configuration persisted at ``~/.config/gapispec/config.json``.

    See :func:`~gapispec.config.resolve_config` for how environment variables
    and CLI flags layer on top of it.
    """

    app: Optional[AppConfig] = None
    request: RequestConfig = Field(default_factory=RequestConfig)
    output: OutputConfig = Field(default_factory=OutputConfig)


# --- Generator ---


class Action(str, enum.Enum):
    """Action names accepted in a resource spec."""

    LIST = "list"
    GET = "get"
    INSERT = "insert"
    UPDATE = "update"
    PATCH = "patch"
    DELETE = "delete"
    SET = "set"
    UNSET = "unset"


class HTTPMethod(str, enum.Enum):
    """HTTP verbs issued by generated and hand-written methods."""

    GET = "GET"
    POST = "POST"
    PUT = "PUT"
    PATCH = "PATCH"
    DELETE = "DELETE"


class MethodDescriptor(BaseModel):
    """Everything needed to turn a call into a request, derived once per method.

    A descriptor is the dispatch-table record for one (action, resource)
    pair of a spec. ``ancestors`` lists the enclosing resources outermost
    first; each one consumes a positional identifier at call time.
    """

    model_config = ConfigDict(frozen=True)

    name: str
    action: Action
    resource: str
    ancestors: tuple[str, ...] = ()
    verb: HTTPMethod
    suffix: Optional[str] = None
    body_allowed: bool = False

    @property
    def path_template(self) -> str:
        """Readable path with placeholders, e.g. ``blogs/{blogsId}/posts/{postsId?}``.

        ``list`` and ``insert`` address the collection, so their template
        leaves out the optional instance id.
        """
        from gapispec.generator.naming import leaf_segment

        nodes: list[str] = []
        for ancestor in self.ancestors:
            nodes.extend((ancestor, "{%sId}" % leaf_segment(ancestor)))
        nodes.append(self.resource)
        if self.action not in (Action.LIST, Action.INSERT):
            nodes.append("{%sId?}" % leaf_segment(self.resource))
        if self.suffix:
            nodes.append(self.suffix)
        return "/".join(nodes)


class RequestEnvelope(BaseModel):
    """A fully resolved request: built fresh per call and discarded afterwards."""

    method: HTTPMethod
    url: str
    params: Optional[dict[str, Any]] = None
    body: Any = None
