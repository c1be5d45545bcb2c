"""Call command -- invoke one service method and print the decoded payload.

Positional ``ARGS`` are path identifiers (ancestor ids, then the optional
instance id). Request body and query parameters are given explicitly as JSON
with ``--body`` and ``--params``, so nothing is guessed from argument types::

    gapispec call youtube listVideos --params '{"part": "snippet", "chart": "mostPopular"}'
    gapispec call blogger getPosts 2399953 7085806367280165127
    gapispec call calendar insertEvents primary --body '{"summary": "Standup"}'
"""

from __future__ import annotations

import asyncio
import json
from typing import Any, Optional

import typer

from gapispec.client import format_api_response
from gapispec.commands.common import credentials_for, load_config, load_service, make_client
from gapispec.exceptions import GapiError
from gapispec.output import debug, error


def _parse_json(option: str, raw: Optional[str]) -> Any:
    if raw is None:
        return None
    try:
        return json.loads(raw)
    except json.JSONDecodeError as exc:
        error(f"{option} is not valid JSON: {exc}")
        raise typer.Exit(code=2) from None


def call_command(
    ctx: typer.Context,
    service: str = typer.Argument(help="Service name, e.g. 'youtube'."),
    method: str = typer.Argument(help="Method name, e.g. 'listVideos'."),
    args: Optional[list[str]] = typer.Argument(
        None, help="Path identifiers, outermost first."
    ),
    body: Optional[str] = typer.Option(
        None, "--body", "-b", help="Request body as JSON."
    ),
    params: Optional[str] = typer.Option(
        None, "--params", "-p", help="Query parameters as a JSON object."
    ),
) -> None:
    """Call a service method and print the response.

    Raises:
        typer.Exit: With the error's exit code if the call fails.
    """
    parsed_body = _parse_json("--body", body)
    parsed_params = _parse_json("--params", params)
    if parsed_params is not None and not isinstance(parsed_params, dict):
        error("--params must be a JSON object")
        raise typer.Exit(code=2)

    config = load_config(ctx)
    client = make_client(config, credentials_for(config))
    handle = load_service(service, client)

    async def _run() -> Any:
        async with client:
            return await handle.invoke(
                method, *(args or []), body=parsed_body, params=parsed_params
            )

    try:
        data = asyncio.run(_run())
    except GapiError as exc:
        error(str(exc))
        if exc.payload is not None:
            debug(f"Response payload: {json.dumps(exc.payload, default=str)}")
        raise typer.Exit(code=exc.exit_code) from None

    format_api_response(data)
