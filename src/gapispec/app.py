"""The ``gapispec`` command line.

Sub-commands live in :mod:`gapispec.commands` and are attached to :data:`app`
below. The root callback turns the global flags into an
:class:`~gapispec.output.OutputManager` and leaves ``--server`` and
``--force`` in ``ctx.obj`` for the sub-commands.

:func:`main` is the console-script entry point. It maps
:class:`~gapispec.exceptions.GapiError` to its exit code and writes a crash
log for anything unexpected.
"""

from __future__ import annotations

import signal
import sys
import traceback
from datetime import datetime
from typing import Any, Optional

import typer

from gapispec import __version__
from gapispec.exit_codes import EXIT_GENERIC_FAILURE

EXIT_INTERRUPTED = 130

app = typer.Typer(
    name="gapispec",
    help="Call Google REST APIs through methods generated from resource specs.",
    no_args_is_help=True,
    add_completion=False,
    rich_markup_mode="rich",
)

from gapispec.commands.auth import auth_app  # noqa: E402
from gapispec.commands.call import call_command  # noqa: E402
from gapispec.commands.config import config_app  # noqa: E402
from gapispec.commands.inspect import inspect_app  # noqa: E402

app.add_typer(auth_app, name="auth", help="Authorize against Google and manage the stored token.")
app.add_typer(config_app, name="config", help="Show and change the configuration.")
app.add_typer(inspect_app, name="inspect", help="List services, their methods, and request shapes.")
app.command("call")(call_command)


def _show_version(value: bool) -> None:
    if value:
        typer.echo(f"gapispec {__version__}")
        raise typer.Exit()


def _pick_format(json_output: bool, plain_output: bool) -> Optional[str]:
    """Return the format forced by a flag, or None to use the configured one."""
    if json_output:
        return "json"
    if plain_output:
        return "plain"
    return None


@app.callback()
def main_callback(
    ctx: typer.Context,
    version: bool = typer.Option(
        False, "--version", callback=_show_version, is_eager=True, help="Show version and exit."
    ),
    server: Optional[str] = typer.Option(
        None, "--server", help="Google APIs host (overrides config and env)."
    ),
    json_output: bool = typer.Option(False, "--json", help="Print payloads as JSON."),
    plain_output: bool = typer.Option(False, "--plain", help="Print payloads as plain text."),
    no_color: bool = typer.Option(False, "--no-color", help="Disable color output."),
    quiet: bool = typer.Option(False, "--quiet", "-q", help="Only print data, warnings, and errors."),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Echo every request and response."),
    force: bool = typer.Option(False, "--force", "-f", help="Skip confirmations."),
) -> None:
    """Set up output and shared options before any sub-command runs.

    Without ``--json`` or ``--plain`` the ``output.format`` setting from the
    config file applies (``auto`` by default).
    """
    from gapispec.config import resolve_config
    from gapispec.output import OutputFormat, OutputManager, set_output

    config = resolve_config(cli_format=_pick_format(json_output, plain_output))
    try:
        fmt = OutputFormat(config.output.format)
    except ValueError:
        fmt = OutputFormat.AUTO

    set_output(OutputManager(format=fmt, no_color=no_color, quiet=quiet, verbose=verbose))

    ctx.ensure_object(dict)
    ctx.obj.update(server=server, force=force)


def _on_sigint(signum: int, frame: Any) -> None:  # noqa: ANN401
    sys.stderr.write("\nCancelled.\n")
    sys.exit(EXIT_INTERRUPTED)


def _write_crash_log() -> str:
    """Save the current traceback under ``<data dir>/logs`` and return its path."""
    from gapispec.config import get_data_dir

    logs_dir = get_data_dir() / "logs"
    logs_dir.mkdir(parents=True, exist_ok=True)
    log_path = logs_dir / f"crash-{datetime.now():%Y%m%d-%H%M%S}.log"
    log_path.write_text(traceback.format_exc(), encoding="utf-8")
    return str(log_path)


def main() -> None:
    """Console-script entry point.

    Raises:
        SystemExit: Always, with Typer's code, the error's ``exit_code``,
            130 on Ctrl-C, or 1 after an unexpected crash.
    """
    from gapispec.exceptions import GapiError
    from gapispec.output import error

    signal.signal(signal.SIGINT, _on_sigint)
    try:
        app()
    except KeyboardInterrupt:
        sys.stderr.write("\nCancelled.\n")
        sys.exit(EXIT_INTERRUPTED)
    except GapiError as exc:
        error(str(exc))
        sys.exit(exc.exit_code)
    except Exception:
        error(f"Unexpected error. Debug log: {_write_crash_log()}")
        sys.exit(EXIT_GENERIC_FAILURE)
