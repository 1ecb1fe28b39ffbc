"""providerkit exception hierarchy.

All public exceptions inherit from ProviderKitError, giving callers a single
base class to catch when they want to handle any providerkit-specific failure
without swallowing unrelated errors.
"""

from __future__ import annotations


class ProviderKitError(Exception):
    """Base exception for all providerkit errors."""


class ClassNotFoundError(ProviderKitError):
    """Raised when a qualified class name cannot be resolved.

    Covers missing modules, missing attributes, and modules whose own
    imports fail because a dependency is absent.
    """

    def __init__(self, name: str, message: str | None = None) -> None:
        self.name = name
        super().__init__(message or f"Class {name} not found")


class ModuleInitializationError(ProviderKitError):
    """Raised when the body of a module raises while it is being imported.

    The original exception is chained as ``__cause__``.
    """

    def __init__(self, module: str, cause: BaseException) -> None:
        self.module = module
        super().__init__(f"Error initializing module {module}: {cause!r}")


class HeadlessEnvironmentError(ProviderKitError):
    """Raised by plugin code that requires a display when none is available.

    The class scanner treats this as an expected absence and skips the
    module that raised it.
    """


class ServiceConfigurationError(ProviderKitError):
    """Raised when a service provider cannot be located or resolved.

    Covers malformed configuration files, I/O failures while reading them,
    and declared providers that are missing or of the wrong type. The
    message always starts with the qualified name of the service.

    Attributes:
        service: Qualified name of the service being discovered.
        location: Configuration resource involved, if any.
        line: 1-based line number within ``location``, if any.
    """

    def __init__(
        self,
        service: str,
        message: str,
        *,
        location: str | None = None,
        line: int | None = None,
    ) -> None:
        self.service = service
        self.location = location
        self.line = line
        if location is not None and line is not None:
            message = f"{location}:{line}: {message}"
        super().__init__(f"{service}: {message}")
