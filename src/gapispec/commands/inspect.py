"""Inspect commands -- examine services and their methods.

Provides the ``gapispec inspect`` sub-command group with read-only commands
for viewing which services exist, which methods each one exposes, and how a
single method maps onto an HTTP request. Nothing here touches the network.
"""

from __future__ import annotations

import inspect as pyinspect

import typer

from gapispec.commands.common import load_config, load_service, make_client
from gapispec.exceptions import InvalidUsageError
from gapispec.output import error, format_response, get_output, info
from gapispec.services import SERVICES


inspect_app = typer.Typer(no_args_is_help=True)


@inspect_app.command("services")
def inspect_services(ctx: typer.Context) -> None:
    """List available services.

    Example::

        gapispec inspect services
    """
    client = make_client(load_config(ctx))

    headers = ["Service", "Version", "URL", "Methods"]
    rows: list[list[str]] = []
    for name in sorted(SERVICES):
        service = SERVICES[name](client)
        rows.append([name, service.version, service.url, str(len(service.methods()))])

    get_output().print_table(headers, rows, title=f"Services ({len(rows)})")


@inspect_app.command("methods")
def inspect_methods(
    ctx: typer.Context,
    service_name: str = typer.Argument(help="Service name."),
) -> None:
    """List every method a service exposes.

    Generated methods show their verb and path template; hand-written ones
    are marked as such.

    Example::

        gapispec inspect methods blogger
    """
    service = load_service(service_name, make_client(load_config(ctx)))

    headers = ["Method", "Verb", "Path", "Kind"]
    rows: list[list[str]] = []
    for name in service.methods():
        descriptor = service.describe(name)
        if descriptor is None:
            rows.append([name, "-", "-", "hand-written"])
        else:
            rows.append([
                name,
                descriptor.verb.value,
                descriptor.path_template,
                "generated",
            ])

    get_output().print_table(
        headers, rows, title=f"{service.api} {service.version} -- Methods ({len(rows)})"
    )


@inspect_app.command("describe")
def inspect_describe(
    ctx: typer.Context,
    service_name: str = typer.Argument(help="Service name."),
    method_name: str = typer.Argument(help="Method name."),
) -> None:
    """Show how one method maps onto an HTTP request.

    Example::

        gapispec inspect describe blogger listComments
        gapispec inspect describe drive copyFile --json
    """
    service = load_service(service_name, make_client(load_config(ctx)))

    try:
        descriptor = service.describe(method_name)
    except InvalidUsageError as exc:
        error(str(exc))
        raise typer.Exit(code=exc.exit_code) from None

    if descriptor is None:
        fn = service.handwritten(method_name)
        # Drop the leading service parameter and annotations.
        parameters = list(pyinspect.signature(fn).parameters.values())[1:]
        signature = ", ".join(str(p.replace(annotation=p.empty)) for p in parameters)
        info(f"{method_name} is hand-written")
        format_response({
            "name": method_name,
            "kind": "hand-written",
            "signature": f"{method_name}({signature})",
            "doc": pyinspect.getdoc(fn) or "",
        })
        return

    format_response({
        "name": descriptor.name,
        "kind": "generated",
        "action": descriptor.action.value,
        "verb": descriptor.verb.value,
        "path": descriptor.path_template,
        "url": service.url + descriptor.path_template,
        "ancestors": list(descriptor.ancestors),
        "body": descriptor.body_allowed,
    })
