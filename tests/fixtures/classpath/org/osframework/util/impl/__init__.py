"""Default DummyService provider."""

from org.osframework.util import DummyService


class DummyServiceDefaultImpl(DummyService):
    def __init__(self) -> None:
        self._my_class_name = f"{type(self).__module__}.{type(self).__qualname__}"

    def echo_class_name(self) -> str:
        return self._my_class_name
