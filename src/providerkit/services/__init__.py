"""Service-provider discovery through ``META-INF/services`` files.

Public API::

    from providerkit.services import ServiceClassLoader

    for provider_cls in ServiceClassLoader.load(Codec):
        print(provider_cls.__name__)
"""

from __future__ import annotations

from providerkit.services.config_file import ConfigFileParser
from providerkit.services.loader import (
    SERVICES_PREFIX,
    ProviderIterator,
    ServiceClassLoader,
)

__all__ = [
    "ConfigFileParser",
    "ProviderIterator",
    "SERVICES_PREFIX",
    "ServiceClassLoader",
]
