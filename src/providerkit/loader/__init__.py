"""Loader context: search paths, resources, and qualified-name lookup.

Public API::

    from providerkit.loader import ModuleLoader

    loader = ModuleLoader.system()
    cls = loader.load_class("json.decoder.JSONDecoder")
"""

from __future__ import annotations

from providerkit.loader.module_loader import (
    ARCHIVE_SUFFIXES,
    PATH_ENV_VAR,
    SOURCE_SUFFIX,
    ModuleLoader,
    installed_locations,
)
from providerkit.loader.names import (
    is_identifier_part,
    is_identifier_start,
    is_qualified_name,
    is_subtype,
    module_name_from_parts,
    qualified_name,
)
from providerkit.loader.resources import ArchiveResource, FileResource, Resource

__all__ = [
    "ARCHIVE_SUFFIXES",
    "ArchiveResource",
    "FileResource",
    "ModuleLoader",
    "PATH_ENV_VAR",
    "Resource",
    "SOURCE_SUFFIX",
    "installed_locations",
    "is_identifier_part",
    "is_identifier_start",
    "is_qualified_name",
    "is_subtype",
    "module_name_from_parts",
    "qualified_name",
]
