"""``providerkit providers SERVICE`` — List declared service providers.

Reads every ``META-INF/services/SERVICE`` file on the search path and
resolves the classes they declare, in discovery order.

Exit Codes:
    0 — One or more providers resolved.
    1 — A configuration file is malformed or declares a bad provider.
    2 — No providers declared, or SERVICE could not be resolved.
"""

from __future__ import annotations

import json
import sys

import click

from providerkit.cli.common import (
    build_loader,
    format_option,
    path_option,
    resolve_capability,
)
from providerkit.cli.output import classes_to_json, print_class_table
from providerkit.exceptions import ServiceConfigurationError
from providerkit.loader import ModuleLoader
from providerkit.services import ServiceClassLoader


@click.command("providers")
@click.argument("service")
@path_option
@format_option
def providers_command(service: str, paths: tuple[str, ...], output_format: str) -> None:
    """List the providers of SERVICE declared in META-INF/services files.

    SERVICE is a qualified class name such as ``acme.codecs.Codec``.
    Without --path, searches sys.path.
    """
    loader = build_loader(paths, ModuleLoader.system)
    service_cls = resolve_capability(service, loader)
    discovery = ServiceClassLoader.load(service_cls, loader)

    try:
        providers = discovery.providers()
    except ServiceConfigurationError as exc:
        click.echo(f"Error: {exc}", err=True)
        sys.exit(1)

    if output_format == "json":
        click.echo(json.dumps({
            "service": discovery.service_name,
            "providers": classes_to_json(providers),
        }, indent=2))
    else:
        print_class_table(f"Providers of {discovery.service_name}", providers)

    sys.exit(0 if providers else 2)
