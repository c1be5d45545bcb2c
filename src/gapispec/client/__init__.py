"""HTTP client module for gapispec.

Every generated and hand-written method ends in
:meth:`AsyncClient.send`, which wraps :mod:`httpx` with per-request bearer
token injection, request/response echo on the debug channel, and mapping of
HTTP failures onto :mod:`gapispec.exceptions`.

Example::

    from gapispec.client import AsyncClient

    async with AsyncClient(credentials) as client:
        payload = await client.request("GET", "https://www.googleapis.com/drive/v2/about")
"""

from gapispec.client.async_client import AsyncClient
from gapispec.client.response import extract_response_data, format_api_response

__all__ = ["AsyncClient", "extract_response_data", "format_api_response"]
