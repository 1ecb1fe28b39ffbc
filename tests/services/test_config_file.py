"""Tests for the provider-configuration file parser."""

from __future__ import annotations

import io
from pathlib import Path

import pytest

from providerkit.exceptions import ServiceConfigurationError
from providerkit.loader import FileResource
from providerkit.services import ConfigFileParser

LOCATION = "file:///plugins/META-INF/services/acme.Codec"


@pytest.fixture
def parser() -> ConfigFileParser:
    return ConfigFileParser("acme.Codec")


def _parse(parser: ConfigFileParser, text: str, known=()) -> list[str]:
    return parser.parse_lines(io.StringIO(text), LOCATION, known)


# ---------------------------------------------------------------------------
# Line handling
# ---------------------------------------------------------------------------


class TestParseLines:

    def test_one_name_per_line(self, parser: ConfigFileParser) -> None:
        text = "acme.codecs.Gzip\nacme.codecs.Zstd\n"
        assert _parse(parser, text) == ["acme.codecs.Gzip", "acme.codecs.Zstd"]

    def test_comments_and_blank_lines(self, parser: ConfigFileParser) -> None:
        """Comment-only and blank lines around one name yield one name."""
        text = "# shipped codecs\n\n   \nacme.codecs.Gzip\n# trailing comment\n\n"
        assert _parse(parser, text) == ["acme.codecs.Gzip"]

    def test_inline_comment(self, parser: ConfigFileParser) -> None:
        assert _parse(parser, "acme.codecs.Zstd   # needs zstd\n") == ["acme.codecs.Zstd"]

    def test_comment_without_space(self, parser: ConfigFileParser) -> None:
        assert _parse(parser, "acme.codecs.Zstd#x y z\n") == ["acme.codecs.Zstd"]

    def test_surrounding_whitespace_trimmed(self, parser: ConfigFileParser) -> None:
        assert _parse(parser, "\t  acme.codecs.Gzip \t\n") == ["acme.codecs.Gzip"]

    def test_duplicates_kept_once_in_first_position(self, parser: ConfigFileParser) -> None:
        text = "a.One\nb.Two\na.One\nc.Three\nb.Two\n"
        assert _parse(parser, text) == ["a.One", "b.Two", "c.Three"]

    def test_known_names_skipped(self, parser: ConfigFileParser) -> None:
        assert _parse(parser, "a.One\nb.Two\n", known={"a.One": object}) == ["b.Two"]

    def test_crlf_line_endings(self, parser: ConfigFileParser) -> None:
        assert _parse(parser, "a.One\r\nb.Two\r\n") == ["a.One", "b.Two"]

    def test_empty_file(self, parser: ConfigFileParser) -> None:
        assert _parse(parser, "") == []


# ---------------------------------------------------------------------------
# Syntax errors
# ---------------------------------------------------------------------------


class TestSyntaxErrors:

    def test_internal_space_names_line(self, parser: ConfigFileParser) -> None:
        with pytest.raises(ServiceConfigurationError) as exc_info:
            _parse(parser, "a.One\n# note\ncom.example. Foo\n")
        err = exc_info.value
        assert err.line == 3
        assert err.location == LOCATION
        assert str(err) == (
            f"acme.Codec: {LOCATION}:3: Illegal configuration-file syntax"
        )

    def test_internal_tab(self, parser: ConfigFileParser) -> None:
        with pytest.raises(ServiceConfigurationError, match="syntax"):
            _parse(parser, "com.example.\tFoo\n")

    @pytest.mark.parametrize("name", ["1acme.Codec", ".acme.Codec", "acme.co-dec", "acme$Codec"])
    def test_illegal_name(self, parser: ConfigFileParser, name: str) -> None:
        with pytest.raises(ServiceConfigurationError) as exc_info:
            _parse(parser, f"{name}\n")
        assert exc_info.value.line == 1
        assert f"Illegal provider-class name: {name}" in str(exc_info.value)

    def test_error_stops_at_first_bad_line(self, parser: ConfigFileParser) -> None:
        with pytest.raises(ServiceConfigurationError) as exc_info:
            _parse(parser, "a.One\nbad name\nalso bad\n")
        assert exc_info.value.line == 2


# ---------------------------------------------------------------------------
# Resources
# ---------------------------------------------------------------------------


class _FailingResource:
    """A resource whose stream fails on open, read or close."""

    location = "mem://failing"

    def __init__(self, fail_on: str) -> None:
        self.fail_on = fail_on

    def open(self):
        if self.fail_on == "open":
            raise OSError("permission denied")
        resource = self

        class _Stream(io.BytesIO):
            def readinto(self, buffer):
                if resource.fail_on == "read":
                    raise OSError("device error")
                return super().readinto(buffer)

            def read(self, *args):
                if resource.fail_on == "read":
                    raise OSError("device error")
                return super().read(*args)

            def read1(self, *args):
                if resource.fail_on == "read":
                    raise OSError("device error")
                return super().read1(*args)

            def close(self):
                first = not self.closed
                super().close()
                if first and resource.fail_on == "close":
                    raise OSError("close failed")

        return _Stream(b"a.One\n")


class TestParseResource:

    def test_reads_utf8(self, parser: ConfigFileParser, tmp_path: Path) -> None:
        config = tmp_path / "acme.Codec"
        config.write_text("# Codecs — über fast\nacme.codecs.Überzip\n", encoding="utf-8")
        assert parser.parse(FileResource(config)) == ["acme.codecs.Überzip"]

    def test_invalid_utf8(self, parser: ConfigFileParser, tmp_path: Path) -> None:
        config = tmp_path / "acme.Codec"
        config.write_bytes(b"acme.codecs.\xff\xfe\n")
        with pytest.raises(ServiceConfigurationError, match="Error reading configuration file"):
            parser.parse(FileResource(config))

    def test_open_failure(self, parser: ConfigFileParser) -> None:
        with pytest.raises(ServiceConfigurationError, match="Error reading") as exc_info:
            parser.parse(_FailingResource("open"))
        assert isinstance(exc_info.value.__cause__, OSError)

    def test_read_failure(self, parser: ConfigFileParser) -> None:
        with pytest.raises(ServiceConfigurationError, match="Error reading"):
            parser.parse(_FailingResource("read"))

    def test_close_failure(self, parser: ConfigFileParser) -> None:
        with pytest.raises(ServiceConfigurationError, match="Error closing configuration file"):
            parser.parse(_FailingResource("close"))
