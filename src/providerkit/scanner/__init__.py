"""Module-path scanning for classes that implement a capability.

Public API::

    from providerkit.scanner import search_provider_classes

    for cls in search_provider_classes(Codec, ModuleLoader(["plugins"])):
        print(cls.__name__)
"""

from __future__ import annotations

from providerkit.scanner.class_locator import ClassLocator, search_provider_classes
from providerkit.scanner.headless import is_headless_error

__all__ = [
    "ClassLocator",
    "is_headless_error",
    "search_provider_classes",
]
