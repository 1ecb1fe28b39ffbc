"""Options and helpers shared by the providerkit subcommands."""

from __future__ import annotations

from collections.abc import Callable
from typing import Any

import click

from providerkit.exceptions import ClassNotFoundError, ModuleInitializationError
from providerkit.loader import ModuleLoader, is_qualified_name


def path_option(func: Callable[..., Any]) -> Callable[..., Any]:
    """Add the repeatable ``--path/-p`` search-path option."""
    return click.option(
        "-p", "--path", "paths",
        multiple=True,
        type=click.Path(exists=True),
        help="Search-path entry (directory or zip archive). Repeatable.",
    )(func)


def format_option(func: Callable[..., Any]) -> Callable[..., Any]:
    """Add the ``--format`` output option."""
    return click.option(
        "--format", "output_format",
        type=click.Choice(["text", "json"]),
        default="text",
        help="Output format: text (default) or json.",
    )(func)


def build_loader(paths: tuple[str, ...], default: Callable[[], ModuleLoader]) -> ModuleLoader:
    """Loader over ``paths`` when given, otherwise the ``default`` loader."""
    return ModuleLoader(paths) if paths else default()


def resolve_capability(name: str, loader: ModuleLoader) -> type:
    """Resolve the CAPABILITY argument to a class.

    Raises:
        click.BadParameter: If the name is malformed or not a class.
    """
    if not is_qualified_name(name):
        raise click.BadParameter(f"{name!r} is not a qualified class name.")
    try:
        obj = loader.load_class(name)
    except (ClassNotFoundError, ModuleInitializationError) as exc:
        raise click.BadParameter(str(exc)) from exc
    if not isinstance(obj, type):
        raise click.BadParameter(f"{name!r} does not name a class.")
    return obj
