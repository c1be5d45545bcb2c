"""Response decoding and display.

:func:`extract_response_data` is what generated methods resolve with: the
decoded body, never the :class:`httpx.Response` itself.
:func:`format_api_response` routes a decoded payload through the output
system for the CLI.
"""

from __future__ import annotations

from typing import Any

import httpx

from gapispec.output import get_output


def extract_response_data(response: httpx.Response) -> Any:
    """Extract the body from an HTTP response.

    Attempts to parse the body as JSON first. If that fails (e.g. the
    response is HTML or plain text), returns the raw text. Returns
    ``None`` for responses with no content (such as a 204 from a delete).
    """
    if not response.content:
        return None

    try:
        return response.json()
    except ValueError:
        return response.text


def format_api_response(data: Any) -> None:
    """Render a decoded payload to stdout using the global output system."""
    if data is None:
        get_output().info("(empty response)")
        return
    get_output().format_response(data)
