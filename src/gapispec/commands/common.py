"""Helpers shared by the CLI sub-commands.

Commands never construct clients or services directly; they go through
:func:`make_client` and :func:`load_service` so that tests can swap the
HTTP transport in one place.
"""

from __future__ import annotations

import os
from typing import Optional

import httpx
import typer

from gapispec.auth import CredentialProvider, CredentialStore, SharedCredential, StaticTokenProvider
from gapispec.client import AsyncClient
from gapispec.config import ENV_TOKEN, resolve_config
from gapispec.models import GlobalConfig
from gapispec.output import debug, error, suggest
from gapispec.service import Service
from gapispec.services import SERVICES

# Replaced in tests with an httpx.MockTransport.
transport: Optional[httpx.AsyncBaseTransport] = None


def load_config(ctx: typer.Context) -> GlobalConfig:
    """Resolve the effective config, honouring the root ``--server`` flag."""
    server = ctx.obj.get("server") if ctx.obj else None
    return resolve_config(cli_server=server)


def credentials_for(config: GlobalConfig) -> CredentialProvider:
    """Pick the credential provider for CLI calls.

    ``GAPISPEC_TOKEN`` wins; otherwise the credential stored for the
    configured application (``default`` when none is configured) is used.
    """
    if os.environ.get(ENV_TOKEN):
        debug(f"Using bearer token from ${ENV_TOKEN}")
        return StaticTokenProvider(f"env:{ENV_TOKEN}")
    name = config.app.name if config.app else "default"
    return SharedCredential(store=CredentialStore(name))


def make_client(config: GlobalConfig, credentials: Optional[CredentialProvider] = None) -> AsyncClient:
    """Build the :class:`AsyncClient` every command shares."""
    return AsyncClient(credentials=credentials, config=config.request, transport=transport)


def load_service(name: str, client: AsyncClient) -> Service:
    """Instantiate the service called *name*.

    Raises:
        typer.Exit: With code 2 if no such service exists.
    """
    factory = SERVICES.get(name)
    if factory is None:
        error(f"Unknown service: {name}")
        suggest(f"Available services: {', '.join(sorted(SERVICES))}")
        raise typer.Exit(code=2)
    return factory(client)
