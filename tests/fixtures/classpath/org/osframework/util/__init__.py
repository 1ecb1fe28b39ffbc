"""Service interface used by the discovery tests."""

from abc import ABC, abstractmethod


class DummyService(ABC):
    """A service whose providers report their own class name."""

    @abstractmethod
    def echo_class_name(self) -> str:
        """Return the qualified name of the implementing class."""
