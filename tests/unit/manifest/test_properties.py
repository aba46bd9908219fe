"""Tests for the properties reader."""

from pathlib import Path

import pytest

from devenv.manifest.properties import parse_properties, read_properties


@pytest.mark.unit
class TestParseProperties:
    """Tests for parse_properties."""

    def test_key_value_pairs(self) -> None:
        result = parse_properties("foo=true\nfoo.branch=develop\n")
        assert result == {"foo": "true", "foo.branch": "develop"}

    def test_preserves_file_order(self) -> None:
        result = parse_properties("zeta=true\nalpha=true\nmid=false\n")
        assert list(result) == ["zeta", "alpha", "mid"]

    def test_comments_and_blank_lines(self) -> None:
        text = "# a comment\n! another comment\n\n   \nfoo=true\n"
        assert parse_properties(text) == {"foo": "true"}

    @pytest.mark.parametrize(
        "line",
        ["foo=bar", "foo = bar", "foo:bar", "foo : bar", "foo bar", "  foo=bar", "foo\t=\tbar"],
    )
    def test_separators(self, line: str) -> None:
        assert parse_properties(line) == {"foo": "bar"}

    def test_value_keeps_later_separators(self) -> None:
        result = parse_properties("foo.url=https://github.com/org/foo.git\n")
        assert result == {"foo.url": "https://github.com/org/foo.git"}

    def test_empty_value(self) -> None:
        assert parse_properties("foo=\nbar\n") == {"foo": "", "bar": ""}

    def test_line_continuation(self) -> None:
        text = "foo.url=git@github.com:\\\n    metaborg/foo.git\n"
        assert parse_properties(text) == {"foo.url": "git@github.com:metaborg/foo.git"}

    def test_escaped_backslash_is_not_continuation(self) -> None:
        assert parse_properties("foo.dir=a\\\\\nbar=true\n") == {"foo.dir": "a\\", "bar": "true"}

    def test_escapes(self) -> None:
        result = parse_properties("my\\ key=tab\\there\nunicode=\\u0041\n")
        assert result == {"my key": "tab\there", "unicode": "A"}

    def test_later_duplicates_win(self) -> None:
        assert parse_properties("foo=false\nfoo=true\n") == {"foo": "true"}

    def test_lines_end_only_at_cr_and_lf(self) -> None:
        text = "foo.branch=a\x0cb\nbar=true\r\nbaz=x\x85y\rqux=\x0bz\n"
        assert parse_properties(text) == {
            "foo.branch": "a\x0cb",
            "bar": "true",
            "baz": "x\x85y",
            "qux": "\x0bz",
        }

    def test_read_properties_keeps_next_line_byte(self, tmp_path: Path) -> None:
        path = tmp_path / "repo.properties"
        path.write_bytes(b"foo.branch=release\x85next\nbar=true\n")
        assert read_properties(path) == {"foo.branch": "release\x85next", "bar": "true"}

    def test_read_properties(self, tmp_path: Path) -> None:
        path = tmp_path / "repo.properties"
        path.write_text("urlPrefix=https://example.org/group\nfoo=true\n", encoding="iso-8859-1")
        assert read_properties(path) == {"urlPrefix": "https://example.org/group", "foo": "true"}
