"""Module loader bound to an ordered search path.

``ModuleLoader`` is the loader context shared by the class scanner and the
service-provider discovery. It answers three questions about its search
path: which entries make it up, which named resources live in those
entries, and which class a qualified name refers to.

Imports go through the regular import system with the loader's entries
placed at the front of ``sys.path`` for the duration of the call. Imported
modules stay in ``sys.modules``, so a second lookup of the same name
returns the same class object. A module already imported from elsewhere
shadows one of the same name on this loader's path.
"""

from __future__ import annotations

import importlib
import logging
import os
import sys
import sysconfig
import zipfile
from collections.abc import Iterable, Iterator
from contextlib import contextmanager
from pathlib import Path
from types import ModuleType

from providerkit.exceptions import ClassNotFoundError, ModuleInitializationError
from providerkit.loader.resources import ArchiveResource, FileResource, Resource

logger = logging.getLogger(__name__)

# Environment property holding an os.pathsep-delimited application path.
PATH_ENV_VAR = "PROVIDERKIT_PATH"

SOURCE_SUFFIX = ".py"

# Lower-case suffixes of search-path entries treated as zip archives.
ARCHIVE_SUFFIXES: tuple[str, ...] = (".zip", ".whl", ".egg", ".pyz", ".jar")


def installed_locations() -> list[Path]:
    """Return the interpreter's stdlib and site-packages directories."""
    paths = sysconfig.get_paths()
    roots: list[Path] = []
    for key in ("stdlib", "platstdlib", "purelib", "platlib"):
        if key in paths:
            roots.append(Path(paths[key]).resolve())
    return list(dict.fromkeys(roots))


def _is_installed(entry: str, roots: list[Path]) -> bool:
    """True if a search-path entry lives inside one of ``roots``."""
    if not entry:
        return False
    resolved = Path(entry).resolve()
    for root in roots:
        if resolved == root or root in resolved.parents:
            return True
    # The zipped stdlib (pythonXY.zip) sits next to the stdlib directory.
    return resolved.suffix == ".zip" and any(
        resolved.parent == root.parent for root in roots
    )


class ModuleLoader:
    """Loads modules, classes and resources from an ordered search path.

    Usage::

        loader = ModuleLoader(["plugins", "vendor/extra.zip"])
        for resource in loader.get_resources("META-INF/services/acme.Codec"):
            print(resource.location)
        codec_cls = loader.load_class("acme.codecs.GzipCodec")

    Attributes:
        path: The search-path entries, in lookup order.
    """

    def __init__(self, path: Iterable[str | os.PathLike[str]]) -> None:
        self._path: list[str] = [os.fspath(entry) for entry in path]

    @classmethod
    def system(cls) -> ModuleLoader:
        """Loader over the current ``sys.path``."""
        return cls(sys.path)

    @classmethod
    def application(cls) -> ModuleLoader:
        """Loader over the application path.

        Taken from ``$PROVIDERKIT_PATH`` when set, otherwise ``sys.path``
        without the interpreter's installed locations.
        """
        env = os.environ.get(PATH_ENV_VAR)
        if env:
            return cls(entry for entry in env.split(os.pathsep) if entry)
        roots = installed_locations()
        return cls(entry for entry in sys.path if not _is_installed(entry, roots))

    @classmethod
    def installed(cls) -> ModuleLoader:
        """Loader over the interpreter's installed locations only."""
        roots = installed_locations()
        return cls(entry for entry in sys.path if _is_installed(entry, roots))

    @property
    def path(self) -> list[str]:
        return list(self._path)

    def __repr__(self) -> str:
        return f"ModuleLoader({self._path!r})"

    # ------------------------------------------------------------------
    # Resources
    # ------------------------------------------------------------------

    def get_resources(self, name: str) -> Iterator[Resource]:
        """Yield every resource called ``name`` in search-path order.

        Args:
            name: ``/``-separated resource name relative to an entry.

        Raises:
            OSError: If an entry exists but cannot be inspected.
        """
        for entry in self._path:
            base = Path(entry or os.curdir)
            if base.is_dir():
                candidate = base.joinpath(*name.split("/"))
                if candidate.is_file():
                    yield FileResource(candidate.resolve())
            elif base.is_file():
                if self._archive_has_member(base, name):
                    yield ArchiveResource(base.resolve(), name)

    def _archive_has_member(self, archive: Path, member: str) -> bool:
        try:
            with zipfile.ZipFile(archive) as zf:
                zf.getinfo(member)
        except zipfile.BadZipFile:
            logger.warning("Not a zip archive: %s", archive)
            return False
        except KeyError:
            return False
        return True

    # ------------------------------------------------------------------
    # Modules and classes
    # ------------------------------------------------------------------

    @contextmanager
    def _activated(self) -> Iterator[None]:
        saved = list(sys.path)
        sys.path[:0] = self._path
        importlib.invalidate_caches()
        try:
            yield
        finally:
            sys.path[:] = saved

    def _import(self, name: str) -> ModuleType:
        """Import ``name``, letting ``ImportError`` through untouched."""
        with self._activated():
            try:
                return importlib.import_module(name)
            except ImportError:
                raise
            except Exception as exc:
                raise ModuleInitializationError(name, exc) from exc

    def import_module(self, name: str) -> ModuleType:
        """Import a module from this loader's search path.

        Raises:
            ClassNotFoundError: If the module, or one of its imports, is missing.
            ModuleInitializationError: If the module body raises.
        """
        try:
            return self._import(name)
        except ImportError as exc:
            raise ClassNotFoundError(
                name, f"Module {name} could not be imported: {exc}"
            ) from exc

    def load_class(self, qualified: str) -> object:
        """Resolve a qualified name such as ``pkg.mod.Outer.Inner``.

        The longest importable module prefix is imported and the rest of
        the name is followed as attributes. The returned object is not
        checked to be a class.

        Raises:
            ClassNotFoundError: If no prefix names a module, an attribute
                is missing, or the module's own imports fail.
            ModuleInitializationError: If the module body raises.
        """
        parts = qualified.split(".")
        for split in range(len(parts) - 1, 0, -1):
            module_name = ".".join(parts[:split])
            try:
                module = self._import(module_name)
            except ModuleNotFoundError as exc:
                missing = exc.name or ""
                if module_name == missing or module_name.startswith(missing + "."):
                    # This prefix is not a module; try a shorter one.
                    continue
                raise ClassNotFoundError(
                    qualified, f"Class {qualified} not found: {exc}"
                ) from exc
            except ImportError as exc:
                raise ClassNotFoundError(
                    qualified, f"Class {qualified} not found: {exc}"
                ) from exc

            obj: object = module
            for attr in parts[split:]:
                try:
                    obj = getattr(obj, attr)
                except AttributeError:
                    raise ClassNotFoundError(qualified) from None
            return obj
        raise ClassNotFoundError(qualified)
