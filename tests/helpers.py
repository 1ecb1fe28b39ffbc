"""Shared test helpers for building plugin trees on disk.

A plugin tree is a search-path entry holding one package with a service
interface (``api.Greeter``), two implementations (``impl``), and whatever
extra modules or ``META-INF/services`` files a test adds.
"""

from __future__ import annotations

import textwrap
import uuid
import zipfile
from pathlib import Path

SERVICES_DIR = "META-INF/services"


def unique_package() -> str:
    """A package name no other test uses, so ``sys.modules`` never clashes."""
    return f"plugpkg_{uuid.uuid4().hex[:10]}"


def greeter_modules(package: str) -> dict[str, str]:
    """Source files for a package with a Greeter service and two providers."""
    return {
        f"{package}/__init__.py": "",
        f"{package}/api.py": """\
            from abc import ABC, abstractmethod


            class Greeter(ABC):
                @abstractmethod
                def greet(self, name):
                    ...


            class PoliteGreeter(Greeter, ABC):
                pass
            """,
        f"{package}/impl.py": f"""\
            from {package}.api import Greeter


            class EnglishGreeter(Greeter):
                def greet(self, name):
                    return f"Hello, {{name}}"


            class FrenchGreeter(Greeter):
                def greet(self, name):
                    return f"Bonjour, {{name}}"


            class Unrelated:
                pass
            """,
    }


def services_file(service: str, text: str) -> dict[str, str]:
    """A ``META-INF/services`` entry for ``service``."""
    return {f"{SERVICES_DIR}/{service}": text}


def write_tree(root: Path, files: dict[str, str]) -> Path:
    """Write ``files`` (relative path -> dedented text) under ``root``."""
    for rel, text in files.items():
        target = root / rel
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_text(textwrap.dedent(text), encoding="utf-8")
    return root


def write_archive(path: Path, files: dict[str, str]) -> Path:
    """Write ``files`` as members of a zip archive at ``path``."""
    path.parent.mkdir(parents=True, exist_ok=True)
    with zipfile.ZipFile(path, "w") as zf:
        for rel, text in files.items():
            zf.writestr(rel, textwrap.dedent(text))
    return path


def codec_modules(package: str) -> dict[str, str]:
    """Source files for a package whose service is a plain ``typing.Protocol``."""
    return {
        f"{package}/__init__.py": "",
        f"{package}/codec.py": """\
            from typing import Protocol


            class Codec(Protocol):
                def encode(self, data: bytes) -> bytes:
                    ...
            """,
        f"{package}/gzip_codec.py": f"""\
            from {package}.codec import Codec


            class GzipCodec(Codec):
                def encode(self, data: bytes) -> bytes:
                    return data


            class LooksLikeACodec:
                def encode(self, data: bytes) -> bytes:
                    return data
            """,
    }
