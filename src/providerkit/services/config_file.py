"""Parser for provider-configuration files.

A provider-configuration file lists the classes that implement one
service, one qualified class name per line::

    # Codecs shipped with acme-extras
    acme.codecs.GzipCodec
    acme.codecs.ZstdCodec   # needs the zstd extra

Everything from ``#`` to the end of the line is a comment. Surrounding
whitespace is ignored, and so are lines that end up empty. A name may not
contain internal spaces or tabs and must be a ``.``-separated sequence of
identifier characters. Any violation aborts the parse with a
``ServiceConfigurationError`` naming the resource and line number.
"""

from __future__ import annotations

import io
from collections.abc import Container, Iterable

from providerkit.exceptions import ServiceConfigurationError
from providerkit.loader import Resource, is_identifier_part, is_identifier_start

COMMENT_MARKER = "#"
ENCODING = "utf-8"


class ConfigFileParser:
    """Turns configuration resources into ordered lists of provider names.

    Attributes:
        service: Qualified name of the service, used in error messages.
    """

    def __init__(self, service: str) -> None:
        self.service = service

    def parse(self, resource: Resource, known: Container[str] = ()) -> list[str]:
        """Read a resource as UTF-8 and return its new provider names.

        Args:
            resource: The configuration resource to read.
            known: Names already resolved; these are not returned again.

        Returns:
            Names in file order, without duplicates and without ``known``.

        Raises:
            ServiceConfigurationError: On a malformed line, or if the
                resource cannot be read or closed.
        """
        try:
            reader = io.TextIOWrapper(resource.open(), encoding=ENCODING)
        except OSError as exc:
            raise self._error("Error reading configuration file") from exc
        try:
            return self.parse_lines(reader, resource.location, known)
        except (OSError, UnicodeDecodeError) as exc:
            raise self._error("Error reading configuration file") from exc
        finally:
            try:
                reader.close()
            except OSError as exc:
                raise self._error("Error closing configuration file") from exc

    def parse_lines(
        self, lines: Iterable[str], location: str, known: Container[str] = (),
    ) -> list[str]:
        """Parse already-decoded lines; see ``parse``."""
        names: list[str] = []
        for lineno, line in enumerate(lines, start=1):
            name = self.parse_line(line, location, lineno)
            if name is not None and name not in known and name not in names:
                names.append(name)
        return names

    def parse_line(self, line: str, location: str, lineno: int) -> str | None:
        """Validate one line and return the provider name it declares.

        Returns:
            The name, or None for blank and comment-only lines.
        """
        comment = line.find(COMMENT_MARKER)
        if comment >= 0:
            line = line[:comment]
        line = line.strip()
        if not line:
            return None
        if " " in line or "\t" in line:
            raise self._error(
                "Illegal configuration-file syntax", location=location, line=lineno,
            )
        if not is_identifier_start(line[0]) or not all(
            is_identifier_part(ch) or ch == "." for ch in line[1:]
        ):
            raise self._error(
                f"Illegal provider-class name: {line}", location=location, line=lineno,
            )
        return line

    def _error(
        self, message: str, *, location: str | None = None, line: int | None = None,
    ) -> ServiceConfigurationError:
        return ServiceConfigurationError(
            self.service, message, location=location, line=line,
        )
