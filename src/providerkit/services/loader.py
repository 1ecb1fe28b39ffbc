"""Lazy service-provider discovery without instantiation.

``ServiceClassLoader`` locates the providers of a service the way a
service-loader facility does, through ``META-INF/services/<service>``
configuration files on a loader's search path, but it yields the provider
*classes* rather than instances. Callers can inspect a provider class
before deciding whether and how to construct it, and providers without a
no-argument constructor remain usable.

Discovery is lazy. Configuration files are located and parsed, and names
resolved, only as far as iteration demands. Resolved classes are cached
in an insertion-ordered registry, so later iterations replay the cache
before resuming the search.

Shared cursor:
    All iterators drawn from one ``ServiceClassLoader`` share its registry
    and its single lookup cursor. An iterator created after another has
    advanced part way replays what is already in the registry and then
    continues the *same* cursor; it does not restart the search. Only
    ``reload()`` starts over.

Instances are not thread-safe. Callers that iterate one session from
several threads must synchronize externally.
"""

from __future__ import annotations

import inspect
import logging
from collections import deque
from collections.abc import Iterator
from typing import Generic, TypeVar

from providerkit.exceptions import (
    ClassNotFoundError,
    ModuleInitializationError,
    ServiceConfigurationError,
)
from providerkit.loader import ModuleLoader, Resource, is_subtype, qualified_name
from providerkit.services.config_file import ConfigFileParser

logger = logging.getLogger(__name__)

S = TypeVar("S")

SERVICES_PREFIX = "META-INF/services/"


class ServiceClassLoader(Generic[S]):
    """Discovers and caches the provider classes of one service.

    Usage::

        codecs = ServiceClassLoader.load(Codec)
        for codec_cls in codecs:
            if codec_cls.supports("gzip"):
                codec = codec_cls(level=6)

    Attributes:
        service: The service (capability) type.
        loader: Loader whose resources and modules are searched.
    """

    def __init__(self, service: type[S], loader: ModuleLoader) -> None:
        self.service = service
        self.loader = loader
        self.service_name = qualified_name(service)
        self._parser = ConfigFileParser(self.service_name)
        self._providers: dict[str, type[S]] = {}
        self._cursor: _LazyCursor[S]
        self.reload()

    @classmethod
    def load(
        cls, service: type[S], loader: ModuleLoader | None = None,
    ) -> ServiceClassLoader[S]:
        """Create a loader for ``service``, defaulting to ``sys.path``."""
        return cls(service, loader or ModuleLoader.system())

    @classmethod
    def load_installed(cls, service: type[S]) -> ServiceClassLoader[S]:
        """Create a loader that only sees the interpreter's installed locations."""
        return cls(service, ModuleLoader.installed())

    def reload(self) -> None:
        """Forget every cached provider and restart the search."""
        self._providers.clear()
        self._cursor = _LazyCursor(self)

    def __iter__(self) -> ProviderIterator[S]:
        return ProviderIterator(self)

    def iterator(self) -> ProviderIterator[S]:
        """Return a new iterator; same as ``iter(self)``."""
        return ProviderIterator(self)

    def providers(self) -> list[type[S]]:
        """Resolve every remaining provider and return all of them."""
        return list(self)

    def __repr__(self) -> str:
        return f"ServiceClassLoader[{self.service_name}]"

    # ------------------------------------------------------------------
    # Used by the cursor
    # ------------------------------------------------------------------

    def _config_resources(self) -> Iterator[Resource]:
        return self.loader.get_resources(SERVICES_PREFIX + self.service_name)

    def _parse(self, resource: Resource) -> list[str]:
        return self._parser.parse(resource, self._providers)

    def _resolve(self, name: str) -> type[S]:
        try:
            obj = self.loader.load_class(name)
        except ClassNotFoundError as exc:
            raise self._error(f"Provider {name} not found") from exc
        except ModuleInitializationError as exc:
            raise self._error(f"Provider {name} could not be loaded") from exc
        if not inspect.isclass(obj) or not is_subtype(obj, self.service):
            raise self._error(f"Provider {name} not a subtype")
        self._providers[name] = obj
        logger.debug("Resolved provider %s for %s", name, self.service_name)
        return obj

    def _error(self, message: str) -> ServiceConfigurationError:
        return ServiceConfigurationError(self.service_name, message)


class _LazyCursor(Generic[S]):
    """The session's single position in the provider search.

    States: configuration resources not yet located; resources located
    with no pending names; pending names remaining; terminal, once both
    the resources and the pending names are exhausted. The terminal state
    is permanent; ``reload()`` replaces the cursor instead.
    """

    def __init__(self, session: ServiceClassLoader[S]) -> None:
        self._session = session
        self._configs: Iterator[Resource] | None = None
        self._pending: deque[str] = deque()
        self._next_name: str | None = None

    def has_next(self) -> bool:
        if self._next_name is not None:
            return True
        if self._configs is None:
            self._configs = self._locate()
        while not self._pending:
            resource = self._next_resource(self._configs)
            if resource is None:
                return False
            self._pending.extend(self._session._parse(resource))
        self._next_name = self._pending.popleft()
        return True

    def next(self) -> type[S]:
        if not self.has_next():
            raise StopIteration
        name, self._next_name = self._next_name, None
        return self._session._resolve(name)

    def _locate(self) -> Iterator[Resource]:
        try:
            return iter(self._session._config_resources())
        except OSError as exc:
            raise self._session._error("Error locating configuration files") from exc

    def _next_resource(self, configs: Iterator[Resource]) -> Resource | None:
        try:
            return next(configs, None)
        except OSError as exc:
            raise self._session._error("Error locating configuration files") from exc


class ProviderIterator(Generic[S]):
    """Iterator over a session's providers.

    Yields the live registry first, by position, so entries that other
    iterators resolve meanwhile are picked up. Once the registry is
    exhausted it switches to the session's shared cursor and stays there.
    """

    def __init__(self, session: ServiceClassLoader[S]) -> None:
        self._session = session
        self._index = 0
        self._replaying = True
        self._known: list[type[S]] = []

    def _has_known(self) -> bool:
        if self._replaying:
            registry = self._session._providers
            # The registry only grows between reloads; refresh the view on growth.
            if len(self._known) != len(registry):
                self._known = list(registry.values())
            if self._index < len(self._known):
                return True
        self._replaying = False
        return False

    def has_next(self) -> bool:
        if self._has_known():
            return True
        return self._session._cursor.has_next()

    def __next__(self) -> type[S]:
        if self._has_known():
            provider = self._known[self._index]
            self._index += 1
            return provider
        return self._session._cursor.next()

    next = __next__

    def __iter__(self) -> ProviderIterator[S]:
        return self
