"""Built-in CLI sub-commands for gapispec.

This package groups all Typer sub-command modules that form the CLI's
top-level command tree:

* :mod:`~gapispec.commands.auth` -- run Google's consent flow and manage the
  stored credential.
* :mod:`~gapispec.commands.config` -- view and modify global settings.
* :mod:`~gapispec.commands.inspect` -- list services and describe their
  generated and hand-written methods.
* :mod:`~gapispec.commands.call` -- invoke one method and print its payload.

Each module either exports a :class:`typer.Typer` sub-application (for
multi-command groups like ``auth`` and ``config``) or a plain callback
function registered directly on the root app (for single commands like
``call``).
"""
