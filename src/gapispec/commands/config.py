"""``gapispec config`` -- inspect and edit the global configuration file.

The file holds the Google application used by ``gapispec auth login``
(:class:`~gapispec.models.AppConfig`), the API host and HTTP settings, and
the default output format. Every change is validated against
:class:`~gapispec.models.GlobalConfig` before it is written.
"""

from __future__ import annotations

from typing import Any, Optional

import typer
from pydantic import ValidationError

from gapispec.config import get_config_dir, load_global_config, save_global_config
from gapispec.models import AppConfig, GlobalConfig
from gapispec.output import error, format_response, info, success, suggest


config_app = typer.Typer(no_args_is_help=True)


def _parent_of(data: dict[str, Any], key: str) -> tuple[dict[str, Any], str]:
    """Walk a dotted *key* and return the mapping holding its last part."""
    *parents, leaf = key.split(".")
    target = data
    for part in parents:
        child = target.get(part)
        if not isinstance(child, dict):
            error(f"Invalid config key: {key}")
            if part == "app":
                suggest("Configure the application first: gapispec config set-app CLIENT_ID")
            raise typer.Exit(code=2)
        target = child
    if leaf not in target:
        error(f"Unknown config key: {key}")
        raise typer.Exit(code=2)
    return target, leaf


def _coerce(key: str, current: Any, raw: str) -> Any:
    """Convert *raw* to the type of the value it replaces.

    Lists (such as ``app.scopes``) are split on whitespace.
    """
    if isinstance(current, bool):
        return raw.lower() in ("true", "1", "yes")
    if isinstance(current, int):
        try:
            return int(raw)
        except ValueError:
            error(f"Expected integer for {key}, got: {raw}")
            raise typer.Exit(code=2) from None
    if isinstance(current, list):
        return raw.split()
    return raw


@config_app.command("show")
def config_show() -> None:
    """Print the configuration file's contents.

    Example::

        gapispec --json config show
    """
    info(f"Config directory: {get_config_dir()}")
    format_response(load_global_config().model_dump(mode="json"))


@config_app.command("set")
def config_set(
    key: str = typer.Argument(help="Dotted key, e.g. 'request.timeout' or 'app.scopes'."),
    value: str = typer.Argument(help="New value."),
) -> None:
    """Change one setting.

    Example::

        gapispec config set request.server http://localhost:8080
        gapispec config set request.verify_ssl false
        gapispec config set app.scopes "https://www.googleapis.com/auth/drive openid"
    """
    data = load_global_config().model_dump(mode="json")
    parent, leaf = _parent_of(data, key)
    parent[leaf] = _coerce(key, parent[leaf], value)

    try:
        updated = GlobalConfig.model_validate(data)
    except ValidationError as exc:
        error(f"Validation error: {exc}")
        raise typer.Exit(code=2) from None

    save_global_config(updated)
    success(f"Set {key} = {parent[leaf]}")


@config_app.command("set-app")
def config_set_app(
    client_id: str = typer.Argument(help="OAuth2 client id of the Google application."),
    scopes: Optional[list[str]] = typer.Option(
        None, "--scope", "-s", help="OAuth2 scope to request (repeatable)."
    ),
    secret_source: Optional[str] = typer.Option(
        None, "--secret-source", help="Client secret source: env:VAR, file:/path, prompt."
    ),
    name: str = typer.Option("default", "--name", help="Name the stored credential is filed under."),
) -> None:
    """Configure the Google application that ``gapispec auth login`` authorizes.

    Replaces any application configured before.

    Example::

        gapispec config set-app 1234.apps.googleusercontent.com \\
            --scope https://www.googleapis.com/auth/youtube.readonly
    """
    config = load_global_config()
    config.app = AppConfig(
        name=name,
        client_id=client_id,
        client_secret_source=secret_source,
        scopes=list(scopes or []),
    )
    save_global_config(config)
    success(f'Application "{name}" configured ({len(config.app.scopes)} scope(s)).')
    suggest("Authorize it: gapispec auth login")


@config_app.command("reset")
def config_reset(ctx: typer.Context) -> None:
    """Restore the default configuration.

    Stored credentials are kept; use ``gapispec auth logout`` for those.
    Asks first unless the root ``--force`` flag is given.
    """
    force = bool(ctx.obj and ctx.obj.get("force"))
    if not force and not typer.confirm("Reset all config to defaults?"):
        info("Cancelled.")
        raise typer.Exit()

    save_global_config(GlobalConfig())
    success("Configuration reset to defaults.")
