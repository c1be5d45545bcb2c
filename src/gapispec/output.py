"""Output formatting with strict stdout/stderr discipline.

Follows `clig.dev <https://clig.dev/>`_ conventions:

* **stdout** -- decoded API payloads and method tables, nothing else.
* **stderr** -- request echo, warnings, errors, and next-step suggestions.
* **TTY detection** -- Rich rendering on an interactive terminal, plain
  text when piped.
* **Colour control** -- ``NO_COLOR``, ``TERM=dumb``, and ``--no-color``.

Library code never prints directly. :class:`~gapispec.client.AsyncClient`
reports each request and response through :func:`debug`, which is silent
unless the installed :class:`OutputManager` is verbose.
"""

from __future__ import annotations

import json
import os
import sys
from enum import Enum
from typing import Any, Callable, NamedTuple, Optional

from rich.console import Console
from rich.markup import escape
from rich.syntax import Syntax
from rich.table import Table


class OutputFormat(str, Enum):
    """Supported output formats.

    ``AUTO`` resolves to ``RICH`` on an interactive, colour-capable stdout
    and to ``PLAIN`` everywhere else.
    """

    AUTO = "auto"
    JSON = "json"
    PLAIN = "plain"
    RICH = "rich"


class _Diagnostic(NamedTuple):
    prefix: str
    style: Optional[str]
    quietable: bool
    label_only: bool = False


# How each kind of stderr message is prefixed and styled. With
# ``label_only`` the style covers the prefix, otherwise the whole line.
_DIAGNOSTICS: dict[str, _Diagnostic] = {
    "info": _Diagnostic("", None, True),
    "success": _Diagnostic("", "green", True),
    "warning": _Diagnostic("Warning:", "yellow", False, label_only=True),
    "error": _Diagnostic("Error:", "bold red", False, label_only=True),
    "suggest": _Diagnostic("→ ", "dim", True),
}


class OutputManager:
    """Routes payloads to stdout and diagnostics to stderr.

    Args:
        format: Desired output format. ``AUTO`` resolves from TTY detection.
        no_color: Disable colour and Rich markup.
        quiet: Drop informational stderr messages (errors and warnings stay).
        verbose: Show :meth:`debug` messages, i.e. the request echo.
    """

    def __init__(
        self,
        format: OutputFormat = OutputFormat.AUTO,
        no_color: bool = False,
        quiet: bool = False,
        verbose: bool = False,
    ) -> None:
        self._no_color = no_color or _should_disable_color()
        self._quiet = quiet
        self._verbose = verbose

        if format != OutputFormat.AUTO:
            self._format = format
        elif _is_tty() and not self._no_color:
            self._format = OutputFormat.RICH
        else:
            self._format = OutputFormat.PLAIN

        self._stdout = Console(
            file=sys.stdout,
            no_color=self._no_color,
            force_terminal=(self._format == OutputFormat.RICH),
        )
        self._stderr = Console(file=sys.stderr, no_color=self._no_color, stderr=True)

        self._renderers: dict[OutputFormat, Callable[[Any], None]] = {
            OutputFormat.JSON: self._render_json,
            OutputFormat.PLAIN: self._render_plain,
            OutputFormat.RICH: self._render_rich,
        }

    @property
    def format(self) -> OutputFormat:
        """The resolved output format (never ``AUTO``)."""
        return self._format

    # ------------------------------------------------------------------ #
    # stdout
    # ------------------------------------------------------------------ #

    def format_response(self, data: Any) -> None:
        """Render a decoded API payload (dict, list, text, or ``None``)."""
        self._renderers[self._format](data)

    def print_data(self, text: str) -> None:
        """Write one line of raw text to stdout."""
        print(text, file=sys.stdout, flush=True)

    def print_table(
        self,
        headers: list[str],
        rows: list[list[str]],
        title: Optional[str] = None,
    ) -> None:
        """Print rows of cells under *headers*.

        JSON mode emits a list of objects keyed by header, plain mode one
        tab-separated line per row (header line first), and rich mode a
        :class:`~rich.table.Table` titled *title*.
        """
        if self._format == OutputFormat.JSON:
            records = [dict(zip(headers, row)) for row in rows]
            self.print_data(json.dumps(records, indent=2, ensure_ascii=False))
            return

        if self._format == OutputFormat.PLAIN:
            for line in [headers, *rows]:
                self.print_data("\t".join(line))
            return

        table = Table(title=title, show_header=True, header_style="bold cyan")
        for header in headers:
            table.add_column(header)
        for row in rows:
            table.add_row(*row)
        self._stdout.print(table)

    # ------------------------------------------------------------------ #
    # stderr
    # ------------------------------------------------------------------ #

    def info(self, message: str) -> None:
        self._emit("info", message)

    def success(self, message: str) -> None:
        self._emit("success", message)

    def warning(self, message: str) -> None:
        """Print a warning. Shown even with ``--quiet``."""
        self._emit("warning", message)

    def error(self, message: str) -> None:
        """Print an error. Always shown."""
        self._emit("error", message)

    def suggest(self, message: str) -> None:
        """Print a next-step hint such as the command to run."""
        self._emit("suggest", message)

    def debug(self, message: str) -> None:
        """Print a ``[debug]`` line. Only shown when verbose.

        The message is escaped, so URLs and payload fragments containing
        square brackets are printed as-is.
        """
        if not self._verbose:
            return
        line = f"[debug] {message}"
        if self._no_color:
            print(line, file=sys.stderr, flush=True)
        else:
            self._stderr.print(f"[dim]{escape(line)}[/dim]", highlight=False)

    def _emit(self, kind: str, message: str) -> None:
        diagnostic = _DIAGNOSTICS[kind]
        if diagnostic.quietable and self._quiet:
            return
        if diagnostic.label_only:
            plain = f"{diagnostic.prefix} {message}"
            styled = f"[{diagnostic.style}]{diagnostic.prefix}[/{diagnostic.style}] {message}"
        else:
            plain = f"{diagnostic.prefix}{message}"
            styled = f"[{diagnostic.style}]{plain}[/{diagnostic.style}]" if diagnostic.style else plain

        if self._no_color:
            print(plain, file=sys.stderr, flush=True)
        else:
            self._stderr.print(styled)

    # ------------------------------------------------------------------ #
    # Renderers
    # ------------------------------------------------------------------ #

    def _render_json(self, data: Any) -> None:
        if isinstance(data, str):
            try:
                data = json.loads(data)
            except (json.JSONDecodeError, TypeError):
                self.print_data(data)
                return
        self.print_data(json.dumps(data, indent=2, ensure_ascii=False, default=str))

    def _render_plain(self, data: Any) -> None:
        if data is None:
            return
        if isinstance(data, dict):
            for key, value in data.items():
                self.print_data(f"{key}\t{value}")
        elif isinstance(data, list):
            for item in data:
                if isinstance(item, dict):
                    self.print_data("\t".join(str(v) for v in item.values()))
                else:
                    self.print_data(str(item))
        else:
            self.print_data(str(data))

    def _render_rich(self, data: Any) -> None:
        if data is None:
            return
        if isinstance(data, (dict, list)):
            text = json.dumps(data, indent=2, ensure_ascii=False, default=str)
            self._stdout.print(Syntax(text, "json", theme="monokai", word_wrap=True))
        else:
            self._stdout.print(str(data))


def _is_tty() -> bool:
    return hasattr(sys.stdout, "isatty") and sys.stdout.isatty()


def _should_disable_color() -> bool:
    """Return True when ``NO_COLOR`` is set (to anything) or ``TERM=dumb``."""
    return os.environ.get("NO_COLOR") is not None or os.environ.get("TERM") == "dumb"


# ------------------------------------------------------------------ #
# Global instance, installed by the CLI root callback
# ------------------------------------------------------------------ #

_output: Optional[OutputManager] = None


def get_output() -> OutputManager:
    """Return the global :class:`OutputManager`, creating a default one lazily."""
    global _output
    if _output is None:
        _output = OutputManager()
    return _output


def set_output(output: OutputManager) -> None:
    global _output
    _output = output


def reset_output() -> None:
    """Drop the global :class:`OutputManager`.

    Tests call this between runs because a manager holds on to the
    ``sys.stdout``/``sys.stderr`` objects that existed when it was built.
    """
    global _output
    _output = None


def format_response(data: Any) -> None:
    get_output().format_response(data)


def print_table(headers: list[str], rows: list[list[str]], title: Optional[str] = None) -> None:
    get_output().print_table(headers, rows, title)


def info(message: str) -> None:
    get_output().info(message)


def success(message: str) -> None:
    get_output().success(message)


def warning(message: str) -> None:
    get_output().warning(message)


def error(message: str) -> None:
    get_output().error(message)


def suggest(message: str) -> None:
    get_output().suggest(message)


def debug(message: str) -> None:
    get_output().debug(message)
