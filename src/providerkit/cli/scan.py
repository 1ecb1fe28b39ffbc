"""``providerkit scan CAPABILITY`` — Find implementations on a module path.

Imports every module on the search path and reports the concrete classes
that subclass CAPABILITY.

Exit Codes:
    0 — One or more implementations found.
    2 — No implementations found, or CAPABILITY could not be resolved.
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
from providerkit.loader import ModuleLoader, qualified_name
from providerkit.scanner import search_provider_classes


@click.command("scan")
@click.argument("capability")
@path_option
@format_option
def scan_command(capability: str, paths: tuple[str, ...], output_format: str) -> None:
    """Find classes implementing CAPABILITY on the module path.

    CAPABILITY is a qualified class name such as ``acme.codecs.Codec``.
    Without --path, scans $PROVIDERKIT_PATH or the application part of
    sys.path.
    """
    loader = build_loader(paths, ModuleLoader.application)
    capability_cls = resolve_capability(capability, loader)
    classes = search_provider_classes(capability_cls, loader)

    if output_format == "json":
        click.echo(json.dumps({
            "capability": qualified_name(capability_cls),
            "classes": classes_to_json(classes),
        }, indent=2))
    else:
        print_class_table(f"Implementations of {qualified_name(capability_cls)}", classes)

    sys.exit(0 if classes else 2)
