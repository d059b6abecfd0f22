"""Tests for merging scan results into locale dictionaries."""

from __future__ import annotations

from hypothesis import event, given

from intlkit.extraction import (
    DictionaryBuilder,
    ExtractionConfig,
    Occurrence,
    ScanResult,
    build_template,
    merge_dictionary,
)
from tests.strategies import dictionaries


def _scan_result(ids: list[str], defaults: dict[str, str] | None = None) -> ScanResult:
    return ScanResult(
        files=["app.js"],
        message_map={
            message_id: [Occurrence(f"app.js:{n}:1", f"__('{message_id}')")]
            for n, message_id in enumerate(ids, start=1)
        },
        default_messages=defaults or {},
    )


# ============================================================================
# MERGE
# ============================================================================


class TestMergeDictionary:
    """Precedence: persisted, then each source in order."""

    def test_persisted_value_wins(self) -> None:
        """Non-empty persisted values are never replaced."""
        assert merge_dictionary({"a": "Hello"}, {"a": "Hi"}, {"a": ""}) == {"a": "Hello"}

    def test_missing_ids_added_in_source_order(self) -> None:
        """The first source defining an id supplies its value."""
        result = merge_dictionary({}, {"b": "default"}, {"b": "fallback", "c": "fb"}, {"d": ""})

        assert result == {"b": "default", "c": "fb", "d": ""}
        assert list(result) == ["b", "c", "d"]

    def test_empty_value_filled(self) -> None:
        """An empty template is filled by a later non-empty source."""
        assert merge_dictionary({"a": ""}, {"a": "filled"}) == {"a": "filled"}

    def test_persisted_order_kept(self) -> None:
        """Persisted ids stay first, in file order."""
        result = merge_dictionary({"z": "1", "a": "2"}, {"m": ""})

        assert list(result) == ["z", "a", "m"]

    def test_sorted_by_key(self) -> None:
        """sort_by_key re-emits the dictionary sorted."""
        result = merge_dictionary({"z": "1", "a": "2"}, {"m": ""}, sort_by_key=True)

        assert list(result) == ["a", "m", "z"]

    def test_input_not_modified(self) -> None:
        """The persisted mapping is copied."""
        existing = {"a": ""}
        merge_dictionary(existing, {"a": "x", "b": "y"})

        assert existing == {"a": ""}

    def test_build_template(self) -> None:
        """Every id with an empty template."""
        assert build_template(["a", "b"]) == {"a": "", "b": ""}

    @given(existing=dictionaries(), fallback=dictionaries(), stubs=dictionaries())
    def test_never_destructive(
        self, existing: dict[str, str], fallback: dict[str, str], stubs: dict[str, str]
    ) -> None:
        """No persisted id is dropped and no non-empty value replaced."""
        result = merge_dictionary(existing, fallback, stubs)

        for message_id, template in existing.items():
            assert message_id in result
            if template:
                assert result[message_id] == template
        event(f"added={len(result) > len(existing)}")

    @given(existing=dictionaries(), fallback=dictionaries(), stubs=dictionaries())
    def test_idempotent(
        self, existing: dict[str, str], fallback: dict[str, str], stubs: dict[str, str]
    ) -> None:
        """Merging the merged result again changes nothing."""
        once = merge_dictionary(existing, fallback, stubs, sort_by_key=True)

        assert merge_dictionary(once, fallback, stubs, sort_by_key=True) == once


# ============================================================================
# BUILDER
# ============================================================================


class TestDictionaryBuilder:
    """Per-locale source selection."""

    def test_default_language_gets_default_messages(self) -> None:
        """Existing values kept, extracted defaults added."""
        builder = DictionaryBuilder(
            ExtractionConfig(locales=("en", "fr")), _scan_result(["a", "b"], {"b": "World"})
        )

        assert builder.build("en", {"a": "Hello"}) == {"a": "Hello", "b": "World"}

    def test_other_locale_gets_empty_tags(self) -> None:
        """Non-default locales only gain empty templates."""
        builder = DictionaryBuilder(
            ExtractionConfig(locales=("en", "fr")), _scan_result(["a", "b"], {"b": "World"})
        )

        assert builder.build("fr", {"a": "Bonjour"}) == {"a": "Bonjour", "b": ""}

    def test_fallback_before_empty_tags(self) -> None:
        """A fallback locale value beats the empty stub."""
        builder = DictionaryBuilder(
            ExtractionConfig(locales=("en", "fr"), fallback="en"), _scan_result(["a", "b"])
        )

        assert builder.build("fr", {}, {"a": "Hello"}) == {"a": "Hello", "b": ""}

    def test_default_message_before_fallback(self) -> None:
        """For the default language, extracted defaults beat the fallback."""
        config = ExtractionConfig(locales=("en", "fr"), fallback="fr")
        builder = DictionaryBuilder(config, _scan_result(["a"], {"a": "Default"}))

        assert builder.build("en", {}, {"a": "Repli"}) == {"a": "Default"}

    def test_fallback_ids_all_added(self) -> None:
        """Every fallback entry is merged, discovered or not."""
        builder = DictionaryBuilder(
            ExtractionConfig(fallback="en"), _scan_result(["a"])
        )

        assert builder.build("fr", {}, {"legacy": "Old"}) == {"a": "", "legacy": "Old"}

    def test_no_empty_tags(self) -> None:
        """With empty tags disabled, unknown ids are not added."""
        builder = DictionaryBuilder(
            ExtractionConfig(empty_tags=False), _scan_result(["a", "b"], {"a": "A"})
        )

        assert builder.build("fr", {}) == {}
        assert builder.build("en", {}) == {"a": "A"}

    def test_source_order(self) -> None:
        """sort_by='source' keeps persisted ids first, then discovery order."""
        builder = DictionaryBuilder(ExtractionConfig(sort_by="source"), _scan_result(["z", "a"]))

        assert list(builder.build("fr", {"m": "M"})) == ["m", "z", "a"]

    def test_stale_ids(self) -> None:
        """Persisted ids not found in sources."""
        builder = DictionaryBuilder(ExtractionConfig(), _scan_result(["a"]))

        assert builder.stale_ids({"a": "", "gone": "x"}) == ["gone"]

    def test_artifacts(self) -> None:
        """Template and message map in JSON form."""
        result = _scan_result(["a"])
        builder = DictionaryBuilder(ExtractionConfig(), result)

        assert builder.template == {"a": ""}
        assert builder.message_map_json() == {"a": [{"pos": "app.js:1:1", "code": "__('a')"}]}
        assert builder.file_map_json() == {}
