"""Identifier rules for qualified class and module names.

A qualified name is a ``.``-separated sequence of Python identifiers, such
as ``acme.plugins.impl.DefaultProvider``. The checks here are character
level: they accept ``a..b`` and leave it to the loader to fail on lookup.

``is_subtype`` is the subclass check shared by the scanner and service
discovery.
"""

from __future__ import annotations


def qualified_name(cls: type) -> str:
    """Return ``module.QualName`` for a class."""
    return f"{cls.__module__}.{cls.__qualname__}"


def is_identifier_start(ch: str) -> bool:
    """True if ``ch`` may begin a Python identifier."""
    return ch.isidentifier()


def is_identifier_part(ch: str) -> bool:
    """True if ``ch`` may appear after the first character of an identifier."""
    return ("_" + ch).isidentifier()


def is_qualified_name(text: str) -> bool:
    """Check that ``text`` starts with an identifier character and
    continues with identifier characters or ``.`` separators."""
    if not text or not is_identifier_start(text[0]):
        return False
    return all(is_identifier_part(ch) or ch == "." for ch in text[1:])


def module_name_from_parts(parts: list[str] | tuple[str, ...]) -> str | None:
    """Derive a module name from relative path components.

    ``("pkg", "mod.py")`` becomes ``pkg.mod`` and ``("pkg", "__init__.py")``
    becomes ``pkg``. Returns None when any component is not an identifier
    or when the path does not name a module.
    """
    if not parts or not parts[-1].endswith(".py"):
        return None
    names = list(parts[:-1])
    stem = parts[-1][: -len(".py")]
    if stem != "__init__":
        names.append(stem)
    if not names:
        return None
    if not all(name.isidentifier() for name in names):
        return None
    return ".".join(names)


def is_subtype(cls: type, capability: type) -> bool:
    """True if ``cls`` is a subclass of ``capability``.

    Protocols that refuse ``issubclass`` (not ``@runtime_checkable``, or
    with data members) fall back to nominal subclassing through the MRO.
    """
    try:
        return issubclass(cls, capability)
    except TypeError:
        return capability in getattr(cls, "__mro__", ())
