"""Tests for locale dictionary I/O."""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from intlkit.diagnostics import DiagnosticCode, DictionaryLoadError, IntlError
from intlkit.loading import dump_json, locale_file, read_dictionary, write_json


class TestLocaleFile:
    """<locales_dir>/<code>.json paths."""

    def test_path(self) -> None:
        """Codes are used verbatim as file names."""
        assert locale_file("locales", "zh-cn") == Path("locales/zh-cn.json")

    @pytest.mark.parametrize("code", ["", "../en", "a/b", "a\\b"])
    def test_rejects_path_components(self, code: str) -> None:
        """Codes cannot escape the locales directory."""
        with pytest.raises(ValueError, match="Invalid locale code"):
            locale_file("locales", code)


class TestReadDictionary:
    """Reading persisted dictionaries."""

    def test_missing_file_is_empty(self, tmp_path: Path) -> None:
        """No file reads as {}."""
        assert read_dictionary(tmp_path / "en.json") == {}

    def test_key_order_preserved(self, tmp_path: Path) -> None:
        """Keys come back in file order."""
        path = tmp_path / "en.json"
        path.write_text('{"z": "1", "a": "2"}', encoding="utf-8")

        assert list(read_dictionary(path)) == ["z", "a"]

    @pytest.mark.parametrize(
        "content",
        ["{", "[]", '"text"', '{"a": 1}', '{"a": {"b": "nested"}}', '{"a": null}'],
    )
    def test_malformed(self, tmp_path: Path, content: str) -> None:
        """Anything but a flat object of strings is rejected."""
        path = tmp_path / "en.json"
        path.write_text(content, encoding="utf-8")

        with pytest.raises(DictionaryLoadError) as exc_info:
            read_dictionary(path)

        assert exc_info.value.path == str(path)
        assert exc_info.value.diagnostic is not None
        assert exc_info.value.diagnostic.code == DiagnosticCode.DICTIONARY_MALFORMED

    def test_not_utf8(self, tmp_path: Path) -> None:
        """Undecodable files are unreadable."""
        path = tmp_path / "en.json"
        path.write_bytes(b'{"a": "\xff"}')

        with pytest.raises(DictionaryLoadError) as exc_info:
            read_dictionary(path)

        assert exc_info.value.diagnostic is not None
        assert exc_info.value.diagnostic.code == DiagnosticCode.DICTIONARY_UNREADABLE


class TestWriteJson:
    """Writing dictionaries and artifacts."""

    def test_dump_format(self) -> None:
        """Indented, non-ASCII kept, newline-terminated."""
        assert dump_json({"a": "Ünïcode"}, 2) == '{\n  "a": "Ünïcode"\n}\n'

    def test_creates_parent_directories(self, tmp_path: Path) -> None:
        """Missing directories are created."""
        path = tmp_path / "deep" / "er" / "fr.json"

        write_json(path, {"a": ""}, 4)

        assert json.loads(path.read_text(encoding="utf-8")) == {"a": ""}

    def test_write_failure(self, tmp_path: Path) -> None:
        """A path blocked by a file raises IntlError."""
        blocker = tmp_path / "locales"
        blocker.write_text("", encoding="utf-8")

        with pytest.raises(IntlError) as exc_info:
            write_json(blocker / "en.json", {}, 4)

        assert exc_info.value.diagnostic is not None
        assert exc_info.value.diagnostic.code == DiagnosticCode.DICTIONARY_WRITE_FAILED

    def test_round_trip(self, tmp_path: Path) -> None:
        """What is written reads back unchanged."""
        path = tmp_path / "ja.json"
        data = {"b": "こんにちは", "a": ""}

        write_json(path, data, 4)

        assert read_dictionary(path) == data
        assert list(read_dictionary(path)) == ["b", "a"]
