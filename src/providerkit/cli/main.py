"""providerkit CLI: inspect plugin discovery from the command line.

Entry point for the ``providerkit`` command-line tool. Registers all
subcommands under a single Click group.

Commands:
    scan       — Find classes implementing a capability on a module path.
    providers  — List the providers declared in META-INF/services files.

Usage::

    providerkit scan acme.codecs.Codec -p ./plugins
    providerkit providers acme.codecs.Codec --format json
    providerkit -v providers acme.codecs.Codec -p ./vendor/extra.zip
"""

from __future__ import annotations

import logging

import click

from providerkit import __version__
from providerkit.cli.providers_cmd import providers_command
from providerkit.cli.scan import scan_command


@click.group()
@click.version_option(version=__version__)
@click.option(
    "-v", "--verbose",
    is_flag=True,
    default=False,
    help="Log discovery details to stderr.",
)
def cli(verbose: bool) -> None:
    """providerkit: Lazy service-provider discovery and class scanning.

    Locate plugin classes either by scanning a module path for subclasses
    of a capability, or through META-INF/services configuration files.
    """
    if verbose:
        logging.basicConfig(
            level=logging.DEBUG,
            format="%(levelname)s %(name)s: %(message)s",
        )


# Register all subcommands
cli.add_command(scan_command)
cli.add_command(providers_command)
