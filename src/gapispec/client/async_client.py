"""Asynchronous HTTP client shared by every service.

This module provides :class:`AsyncClient`, which wraps
:class:`httpx.AsyncClient` and layers on:

- **Bearer injection** -- the injected
  :class:`~gapispec.auth.base.CredentialProvider` is polled before every
  request, so a re-authorization is picked up by the next call.
- **Request echo** -- each request and response is reported through
  :func:`gapispec.output.debug`.
- **Error mapping** -- non-2xx responses and transport failures become
  :mod:`gapispec.exceptions` errors carrying the raw decoded payload.

Each call issues exactly one HTTP request. There is no retry, no cache, and
no batching; a failed request has no effect on any other.
"""

from __future__ import annotations

import json
from typing import Any, Optional

import httpx

from gapispec.auth.base import CredentialProvider
from gapispec.client.response import extract_response_data
from gapispec.exceptions import (
    AuthError,
    ConnectionError_,
    NotFoundError,
    RequestError,
    ServerError,
)
from gapispec.models import HTTPMethod, RequestConfig, RequestEnvelope
from gapispec.output import debug, warning


class AsyncClient:
    """Asynchronous HTTP client for Google API calls.

    Can be used as an async context manager, which keeps one connection
    pool open for all calls. Outside a context manager each call opens and
    closes its own pool.

    Args:
        credentials: Provider of the bearer token. ``None`` sends every
            request unauthenticated.
        config: Server, timeout, and SSL settings.
        transport: Optional :mod:`httpx` transport, e.g.
            :class:`httpx.MockTransport` in tests.

    Example::

        async with AsyncClient(credentials) as client:
            drive = drive_service(client)
            files = await drive.listFiles({"maxResults": 10})
    """

    def __init__(
        self,
        credentials: Optional[CredentialProvider] = None,
        config: Optional[RequestConfig] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self._credentials = credentials
        self._config = config or RequestConfig()
        self._transport = transport
        self._client: Optional[httpx.AsyncClient] = None
        self._warned_unauthenticated = False

    @property
    def server(self) -> str:
        """The Google APIs host services built on this client default to."""
        return self._config.server

    # ------------------------------------------------------------------ #
    # Async context manager
    # ------------------------------------------------------------------ #

    async def __aenter__(self) -> AsyncClient:
        self._client = self._make_client()
        return self

    async def __aexit__(self, *args: object) -> None:
        if self._client:
            await self._client.aclose()
            self._client = None

    # ------------------------------------------------------------------ #
    # Public request methods
    # ------------------------------------------------------------------ #

    async def send(self, envelope: RequestEnvelope) -> Any:
        """Issue one request and return the decoded response payload.

        Args:
            envelope: The resolved request.

        Returns:
            The JSON-decoded body, the raw text for non-JSON bodies, or
            ``None`` for an empty body.

        Raises:
            AuthError: On 401 / 403.
            NotFoundError: On 404.
            RequestError: On any other 4xx.
            ServerError: On 5xx.
            ConnectionError_: On network / timeout errors.
        """
        headers = {"Accept": "application/json"}
        headers.update(self._auth_headers())

        method = envelope.method.value
        debug(_describe_request(envelope))

        if self._client is not None:
            response = await self._execute(self._client, envelope, headers)
        else:
            async with self._make_client() as client:
                response = await self._execute(client, envelope, headers)

        debug(f"HTTP {response.status_code} {method} {envelope.url}")
        self._map_response_error(response)
        return extract_response_data(response)

    async def request(
        self,
        method: str,
        url: str,
        params: Optional[dict[str, Any]] = None,
        body: Any = None,
    ) -> Any:
        """Build an envelope from loose arguments and :meth:`send` it.

        Args:
            method: HTTP method (GET, POST, PUT, PATCH, DELETE).
            url: Absolute request URL.
            params: Query parameters.
            body: JSON-serialisable request body.

        Returns:
            The decoded response payload.
        """
        envelope = RequestEnvelope(
            method=HTTPMethod(method.upper()),
            url=url,
            params=params,
            body=body,
        )
        return await self.send(envelope)

    # ------------------------------------------------------------------ #
    # Private helpers
    # ------------------------------------------------------------------ #

    def _make_client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(
            timeout=self._config.timeout,
            verify=self._config.verify_ssl,
            follow_redirects=True,
            transport=self._transport,
        )

    def _auth_headers(self) -> dict[str, str]:
        headers = self._credentials.auth_headers() if self._credentials else {}
        if not headers and not self._warned_unauthenticated:
            warning("No credential available; sending requests without authorization")
            self._warned_unauthenticated = True
        return headers

    async def _execute(
        self,
        client: httpx.AsyncClient,
        envelope: RequestEnvelope,
        headers: dict[str, str],
    ) -> httpx.Response:
        kwargs: dict[str, Any] = {
            "method": envelope.method.value,
            "url": envelope.url,
            "headers": headers,
            "params": envelope.params,
        }
        if envelope.body is not None:
            kwargs["json"] = envelope.body

        try:
            return await client.request(**kwargs)
        except httpx.TransportError as exc:
            debug(f"Transport failure: {exc!r}")
            raise ConnectionError_(
                f"{envelope.method.value} {envelope.url} failed: {exc}"
            ) from exc

    def _map_response_error(self, response: httpx.Response) -> None:
        """Raise a typed exception for error HTTP status codes."""
        status = response.status_code
        if status < 400:
            return

        payload = extract_response_data(response)
        msg = _error_message(payload)
        full_msg = f"HTTP {status}: {msg}" if msg else f"HTTP {status}"

        if status in (401, 403):
            raise AuthError(full_msg, status_code=status, payload=payload)
        if status == 404:
            raise NotFoundError(full_msg, status_code=status, payload=payload)
        if status >= 500:
            raise ServerError(full_msg, status_code=status, payload=payload)
        raise RequestError(full_msg, status_code=status, payload=payload)


def _error_message(payload: Any) -> str:
    """Pull a human-readable message out of a Google error payload."""
    if isinstance(payload, dict):
        err = payload.get("error")
        if isinstance(err, dict):
            return str(err.get("message") or "")
        return str(err or payload.get("message") or "")
    if isinstance(payload, str):
        return payload[:200]
    return ""


def _describe_request(envelope: RequestEnvelope) -> str:
    line = f"{envelope.method.value} {envelope.url}"
    if envelope.params:
        line += f" params={json.dumps(envelope.params, default=str)}"
    if envelope.body is not None:
        line += f" body={json.dumps(envelope.body, default=str)}"
    return line
