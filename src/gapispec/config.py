"""Configuration: where files live, how they are written, and what overrides what.

* **Directories** -- XDG Base Directory layout on Linux/BSD
  (``~/.config/gapispec``, ``~/.local/share/gapispec``), ``~/.gapispec`` and
  ``~/.gapispec/data`` elsewhere.
* **Global config** -- one :class:`~gapispec.models.GlobalConfig` JSON file
  holding the Google application, the API host, and output defaults.
* **Precedence** -- :func:`resolve_config` layers CLI flags, then
  ``GAPISPEC_*`` environment variables, over the file.
* **Credential sources** -- :func:`resolve_credential` turns descriptors such
  as ``env:GOOGLE_CLIENT_SECRET`` into the secret they point at.

Every write goes through :func:`_atomic_write`, so a crash never leaves a
half-written config or credential file behind.
"""

from __future__ import annotations

import getpass
import json
import os
import platform
import sys
import tempfile
from pathlib import Path
from typing import Optional

from gapispec.exceptions import ConfigError
from gapispec.models import AppConfig, GlobalConfig

_APP_NAME = "gapispec"
_CONFIG_FILENAME = "config.json"

ENV_SERVER = "GAPISPEC_SERVER"
ENV_CLIENT_ID = "GAPISPEC_CLIENT_ID"
ENV_TOKEN = "GAPISPEC_TOKEN"

# kind -> (XDG variable, default under $HOME, subdirectory of ~/.gapispec)
_DIRECTORIES: dict[str, tuple[str, tuple[str, ...], Optional[str]]] = {
    "config": ("XDG_CONFIG_HOME", (".config",), None),
    "data": ("XDG_DATA_HOME", (".local", "share"), "data"),
}


# --- Directories ---


def _is_xdg_platform() -> bool:
    """Return True on Linux and the BSDs."""
    system = platform.system()
    return system == "Linux" or system.endswith("BSD")


def _app_dir(kind: str) -> Path:
    env_var, home_default, fallback_subdir = _DIRECTORIES[kind]
    if _is_xdg_platform():
        base = os.environ.get(env_var) or str(Path.home().joinpath(*home_default))
        path = Path(base) / _APP_NAME
    else:
        path = Path.home() / f".{_APP_NAME}"
        if fallback_subdir:
            path = path / fallback_subdir
    path.mkdir(parents=True, exist_ok=True)
    return path


def get_config_dir() -> Path:
    """Return (and create) the directory holding ``config.json``."""
    return _app_dir("config")


def get_data_dir() -> Path:
    """Return (and create) the directory for stored credentials and crash logs."""
    return _app_dir("data")


# --- Atomic writes ---


def _atomic_write(path: Path, data: str, mode: Optional[int] = None) -> None:
    """Replace *path* with *data* in one step.

    The content goes to a temporary sibling file, is fsynced, and is then
    renamed over *path*. If *mode* is given it is applied to the temporary
    file before anything is written, so secrets are never world-readable.
    The temporary file is removed if anything fails.
    """
    path.parent.mkdir(parents=True, exist_ok=True)
    fd, tmp_name = tempfile.mkstemp(dir=path.parent, prefix=f".{path.name}.", suffix=".tmp")
    try:
        with os.fdopen(fd, "w", encoding="utf-8") as handle:
            if mode is not None:
                os.chmod(tmp_name, mode)
            handle.write(data)
            handle.flush()
            os.fsync(handle.fileno())
        os.replace(tmp_name, path)
    except BaseException:
        try:
            os.unlink(tmp_name)
        except OSError:
            pass
        raise


# --- Global config ---


def _global_config_path() -> Path:
    return get_config_dir() / _CONFIG_FILENAME


def load_global_config() -> GlobalConfig:
    """Read the global config, or return defaults when there is none yet.

    Raises:
        ConfigError: If the file is not valid JSON or does not match
            :class:`~gapispec.models.GlobalConfig`.
    """
    path = _global_config_path()
    if not path.is_file():
        return GlobalConfig()
    try:
        return GlobalConfig.model_validate(json.loads(path.read_text(encoding="utf-8")))
    except ValueError as exc:
        # json.JSONDecodeError and pydantic.ValidationError are both ValueErrors.
        raise ConfigError(f"Invalid global config at {path}: {exc}") from exc


def save_global_config(config: GlobalConfig) -> None:
    payload = json.dumps(config.model_dump(mode="json"), indent=2)
    _atomic_write(_global_config_path(), payload + "\n")


# --- Precedence ---


def resolve_config(
    cli_server: Optional[str] = None,
    cli_format: Optional[str] = None,
) -> GlobalConfig:
    """Return the effective configuration.

    Highest precedence first:

    1. ``cli_server`` / ``cli_format`` (``--server``, ``--json``, ``--plain``)
    2. ``GAPISPEC_SERVER`` and ``GAPISPEC_CLIENT_ID``
    3. ``config.json``
    4. model defaults

    ``GAPISPEC_CLIENT_ID`` replaces the configured application's client id,
    or creates an application with no scopes when none is configured.
    """
    config = load_global_config()

    server = cli_server if cli_server is not None else os.environ.get(ENV_SERVER)
    if server:
        config.request.server = server

    client_id = os.environ.get(ENV_CLIENT_ID)
    if client_id and config.app is None:
        config.app = AppConfig(client_id=client_id)
    elif client_id:
        config.app.client_id = client_id

    if cli_format is not None:
        config.output.format = cli_format

    return config


# --- Credential sources ---


def resolve_credential(source: str) -> str:
    """Resolve a secret from a source descriptor.

    ``env:VAR``
        The value of environment variable ``VAR``.
    ``file:PATH``
        The stripped contents of ``PATH`` (``~`` is expanded).
    ``prompt``
        Typed by the user without echo. Needs a TTY.
    ``store:NAME``
        The access token stored for application ``NAME`` by
        ``gapispec auth login``.

    Raises:
        ConfigError: If the descriptor is unknown or its secret is missing.
    """
    kind, _, argument = source.partition(":")

    if kind == "env" and argument:
        value = os.environ.get(argument)
        if value is None:
            raise ConfigError(f"Environment variable '{argument}' is not set (source: {source})")
        return value

    if kind == "file" and argument:
        path = Path(argument).expanduser()
        if not path.is_file():
            raise ConfigError(f"Credential file not found: {path} (source: {source})")
        try:
            return path.read_text(encoding="utf-8").strip()
        except OSError as exc:
            raise ConfigError(f"Cannot read credential file {path}: {exc}") from exc

    if source == "prompt":
        if not sys.stdin.isatty():
            raise ConfigError("Cannot prompt for credentials: stdin is not a TTY (source: prompt)")
        return getpass.getpass("Enter credential: ")

    if kind == "store" and argument:
        from gapispec.auth.credential_store import CredentialStore

        credential = CredentialStore(argument).load()
        if credential is None:
            raise ConfigError(f"No stored credential for application '{argument}' (source: {source})")
        return credential.access_token

    raise ConfigError(f"Unknown credential source format: {source}")
