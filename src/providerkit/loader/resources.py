"""Named resources located on a module search path.

A resource is a file addressed by a ``/``-separated name relative to a
search-path entry, either a plain file under a directory entry or a member
of a zip archive entry. Both kinds expose a printable ``location`` for
error messages and an ``open()`` that returns a fresh binary stream.
"""

from __future__ import annotations

import io
import zipfile
from dataclasses import dataclass
from pathlib import Path
from typing import BinaryIO


@dataclass(frozen=True)
class FileResource:
    """A resource stored as a regular file beneath a directory entry.

    Attributes:
        path: Absolute path to the file.
    """

    path: Path

    @property
    def location(self) -> str:
        return self.path.as_uri()

    def open(self) -> BinaryIO:
        return self.path.open("rb")


@dataclass(frozen=True)
class ArchiveResource:
    """A resource stored as a member of a zip archive entry.

    The member is read in full on ``open()`` so the archive handle is
    closed before the caller starts consuming the stream.

    Attributes:
        archive: Path to the zip archive.
        member: Name of the member inside the archive.
    """

    archive: Path
    member: str

    @property
    def location(self) -> str:
        return f"zip:{self.archive}!/{self.member}"

    def open(self) -> BinaryIO:
        with zipfile.ZipFile(self.archive) as zf:
            return io.BytesIO(zf.read(self.member))


Resource = FileResource | ArchiveResource
