"""Search a module path for classes implementing a capability.

``ClassLocator`` walks every entry of a ``ModuleLoader`` search path,
imports each module it finds, and collects the concrete classes defined
there that subclass the requested capability type.

Discovery Algorithm:
    1. Resolve the search path from the loader (``PROVIDERKIT_PATH`` or
       ``sys.path`` minus installed locations when no loader is given).
    2. Directory entries: walk subdirectories in sorted order and map each
       ``.py`` file to a module name (``pkg/sub/mod.py`` -> ``pkg.sub.mod``).
    3. Archive entries (``.zip``, ``.whl``, ...): map each ``.py`` member
       to a module name the same way.
    4. Import each module. Missing modules and missing dependencies are
       skipped, as are modules that fail for lack of a display. Any other
       error raised by a module body propagates.
    5. Keep classes defined in the module that subclass the capability,
       excluding the capability itself and abstract classes.

Importing a module runs its top-level code. Point the scanner at plugin
directories, not at arbitrary source trees.
"""

from __future__ import annotations

import inspect
import logging
import os
import zipfile
from pathlib import Path
from types import ModuleType
from typing import Generic, TypeVar

from providerkit.exceptions import ClassNotFoundError, ModuleInitializationError
from providerkit.loader import (
    ARCHIVE_SUFFIXES,
    ModuleLoader,
    is_subtype,
    module_name_from_parts,
)
from providerkit.scanner.headless import is_headless_error

logger = logging.getLogger(__name__)

T = TypeVar("T")

# Module files that run a program rather than define one.
_SKIPPED_STEMS = {"__main__"}
_SKIPPED_DIRS = {"__pycache__"}


def search_provider_classes(
    capability: type[T], loader: ModuleLoader | None = None,
) -> list[type[T]]:
    """Find every concrete subclass of ``capability`` on the search path.

    Args:
        capability: The interface or base class to search for.
        loader: Loader whose path is searched. Defaults to
            ``ModuleLoader.application()``.

    Returns:
        Matching classes in discovery order. Empty if nothing matches.
    """
    locator = ClassLocator(capability, loader or ModuleLoader.application())
    return locator.find()


class ClassLocator(Generic[T]):
    """Collects subclasses of one capability from one loader's path.

    Attributes:
        capability: The type being searched for.
        loader: The loader providing the search path and imports.
        found: Matches accumulated so far, in discovery order.
    """

    def __init__(self, capability: type[T], loader: ModuleLoader) -> None:
        self.capability = capability
        self.loader = loader
        self.found: list[type[T]] = []

    def find(self) -> list[type[T]]:
        """Scan every entry of the loader's path and return the matches."""
        for entry in self.loader.path:
            base = Path(entry or os.curdir)
            if base.is_dir():
                self._find_in_directory(base, (), set())
            elif base.is_file() and base.name.lower().endswith(ARCHIVE_SUFFIXES):
                self._find_in_archive(base)
        return self.found

    def _find_in_directory(
        self, directory: Path, prefix: tuple[str, ...], visited: set[Path],
    ) -> None:
        # Symlinked directories can loop back on an ancestor.
        real = directory.resolve()
        if real in visited:
            logger.debug("Skipping already visited directory: %s", directory)
            return
        visited.add(real)
        try:
            children = sorted(directory.iterdir())
        except (PermissionError, OSError):
            logger.warning("Cannot list directory: %s", directory)
            return
        for child in children:
            if child.is_file():
                self._examine(prefix + (child.name,))
            elif (
                child.is_dir()
                and child.name.isidentifier()
                and child.name not in _SKIPPED_DIRS
            ):
                self._find_in_directory(child, prefix + (child.name,), visited)

    def _find_in_archive(self, archive: Path) -> None:
        try:
            with zipfile.ZipFile(archive) as zf:
                members = zf.namelist()
        except (zipfile.BadZipFile, OSError):
            logger.debug("Skipping unreadable archive: %s", archive)
            return
        for member in members:
            if not member.endswith("/"):
                self._examine(tuple(member.split("/")))

    def _examine(self, parts: tuple[str, ...]) -> None:
        module_name = module_name_from_parts(parts)
        if module_name is None or module_name.rpartition(".")[2] in _SKIPPED_STEMS:
            return
        module = self._import(module_name)
        if module is None:
            return
        for obj in list(vars(module).values()):
            if (
                inspect.isclass(obj)
                and obj.__module__ == module.__name__
                and self._accepts(obj)
            ):
                self.found.append(obj)

    def _import(self, module_name: str) -> ModuleType | None:
        try:
            return self.loader.import_module(module_name)
        except ClassNotFoundError:
            logger.debug("Skipping %s: not importable", module_name, exc_info=True)
        except ModuleInitializationError as exc:
            if not is_headless_error(exc.__cause__):
                raise
            logger.debug("Skipping %s: no display available", module_name)
        return None

    def _accepts(self, cls: type) -> bool:
        return (
            cls is not self.capability
            and is_subtype(cls, self.capability)
            and not inspect.isabstract(cls)
        )
