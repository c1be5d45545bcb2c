"""Auth commands -- authorize against Google and manage the stored credential.

Provides the ``gapispec auth`` sub-command group. ``login`` runs Google's
consent flow for the configured application and stores the resulting token;
``status`` shows what is stored; ``logout`` deletes it.

Typical workflow::

    gapispec config set-app 1234.apps.googleusercontent.com --scope ...
    gapispec auth login
    gapispec auth status
"""

from __future__ import annotations

import asyncio
from typing import Optional

import typer

from gapispec.auth import Authorizer, CredentialStore, SharedCredential
from gapispec.commands.common import load_config
from gapispec.exceptions import GapiError
from gapispec.models import AppConfig
from gapispec.output import error, get_output, info, success, suggest


auth_app = typer.Typer(no_args_is_help=True)


def _require_app(ctx: typer.Context) -> AppConfig:
    app = load_config(ctx).app
    if app is None:
        error("No Google application configured.")
        suggest("Configure one: gapispec config set-app CLIENT_ID --scope SCOPE")
        raise typer.Exit(code=2)
    return app


@auth_app.command("login")
def auth_login(
    ctx: typer.Context,
    scopes: Optional[list[str]] = typer.Option(
        None, "--scope", "-s", help="Request these scopes instead of the configured ones."
    ),
) -> None:
    """Authorize the configured application in the browser.

    Opens Google's consent page, waits for the redirect on a loopback port,
    and stores the access token. Requires an interactive terminal.

    Raises:
        typer.Exit: With code 2 if no application is configured, or the
            error's exit code if authorization fails.

    Example::

        gapispec auth login
        gapispec auth login --scope https://www.googleapis.com/auth/drive.readonly
    """
    app = _require_app(ctx)
    if scopes:
        app = app.model_copy(update={"scopes": list(scopes)})

    credentials = SharedCredential(store=CredentialStore(app.name))
    info(f"Opening Google consent page for {app.client_id} ...")
    try:
        asyncio.run(Authorizer(app, credentials).authorize())
    except GapiError as exc:
        error(str(exc))
        raise typer.Exit(code=exc.exit_code) from None

    success(f'Authorized "{app.name}".')
    suggest("Try it: gapispec call youtube listChannels --params '{\"part\": \"id\", \"mine\": true}'")


@auth_app.command("status")
def auth_status(ctx: typer.Context) -> None:
    """Show the stored credential of the configured application.

    Example::

        gapispec auth status
    """
    app = load_config(ctx).app
    name = app.name if app else "default"

    credential = CredentialStore(name).load()
    if credential is None:
        info(f'No stored credential for "{name}".')
        suggest("Authorize: gapispec auth login")
        return

    token = credential.access_token
    rows = [
        ["Application", name],
        ["Client ID", credential.client_id or "-"],
        ["Token", token[:8] + "..." if len(token) > 8 else token],
        ["Scopes", " ".join(credential.scopes) or "-"],
        ["Obtained At", str(credential.obtained_at)],
        ["Expires At", str(credential.expires_at) if credential.expires_at else "unknown"],
        ["Expired", str(credential.is_expired())],
    ]
    get_output().print_table(["Field", "Value"], rows, title="Stored Credential")


@auth_app.command("logout")
def auth_logout(ctx: typer.Context) -> None:
    """Delete the stored credential of the configured application.

    Example::

        gapispec auth logout
    """
    app = load_config(ctx).app
    name = app.name if app else "default"

    store = CredentialStore(name)
    if store.load() is None:
        info(f'No stored credential for "{name}".')
        return

    SharedCredential(store=store).clear()
    success(f'Credential for "{name}" removed.')
