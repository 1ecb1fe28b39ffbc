"""Shared fixtures for providerkit tests."""

from __future__ import annotations

import sys
from pathlib import Path

import pytest

from providerkit.loader import ModuleLoader

from tests.helpers import greeter_modules, unique_package, write_tree

CLASSPATH_DIR = Path(__file__).parent / "fixtures" / "classpath"


def _module_locations(module: object) -> list[str]:
    locations = [getattr(module, "__file__", None) or ""]
    locations.extend(getattr(module, "__path__", None) or [])
    return [str(loc) for loc in locations]


@pytest.fixture(autouse=True)
def isolated_modules(tmp_path_factory: pytest.TempPathFactory):
    """Drop modules imported from test trees once the test is done."""
    roots = (str(tmp_path_factory.getbasetemp()), str(CLASSPATH_DIR))
    yield
    for name, module in list(sys.modules.items()):
        if any(loc.startswith(roots) for loc in _module_locations(module)):
            del sys.modules[name]


@pytest.fixture
def classpath_dir() -> Path:
    """Static tree holding ``org.osframework.util.DummyService`` and its provider."""
    return CLASSPATH_DIR


@pytest.fixture
def package() -> str:
    """A fresh, unique package name for a plugin tree."""
    return unique_package()


@pytest.fixture
def greeter_tree(tmp_path: Path, package: str) -> Path:
    """A search-path entry containing the Greeter package."""
    root = tmp_path / "entry"
    return write_tree(root, greeter_modules(package))


@pytest.fixture
def greeter_loader(greeter_tree: Path) -> ModuleLoader:
    return ModuleLoader([greeter_tree])
