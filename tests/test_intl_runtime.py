"""Tests for the runtime entry points: Intl and IntlContext."""

from __future__ import annotations

import dataclasses
import logging
from datetime import date, datetime, time, timedelta

import pytest

from intlkit import Intl, IntlContext, MessageDescriptor, TemplateStore

# ============================================================================
# FORMAT
# ============================================================================


class TestFormat:
    """Template selection, substitution and the ICU step together."""

    def test_default_locale(self, locale_config: dict[str, dict[str, str]]) -> None:
        """Without a locale the default language is used."""
        assert Intl(locale_config).format("hello") == "Hello"

    def test_explicit_locale(self, locale_config: dict[str, dict[str, str]]) -> None:
        """The named locale's template is used."""
        intl = Intl(locale_config)

        assert intl.format("greeting", {"name": "Jack"}, "fr") == "Bonjour Jack !"

    def test_assignment_example(self, locale_config: dict[str, dict[str, str]]) -> None:
        """Several placeholders in one template."""
        result = Intl(locale_config).format("task.assigned", {"user": "Jack", "assignee": "Black"})

        assert result == "Jack assigned Black a task"

    def test_nested_reference(self, locale_config: dict[str, dict[str, str]]) -> None:
        """A reference is looked up in the same locale."""
        intl = Intl(locale_config)

        assert intl.format("user.status", {"status": "ok"}) == "Status: Active"
        assert intl.format("user.status", {"status": "ok"}, "fr") == "Statut : Actif"

    def test_nested_reference_as_whole_template(self) -> None:
        """A template consisting of a single reference."""
        intl = Intl({"en": {"user.status.ok": "Active", "s": "{@'user.status.{status}'}"}})

        assert intl.format("s", {"status": "ok"}) == "Active"

    def test_nested_reference_to_gap_filled_message(
        self, locale_config: dict[str, dict[str, str]]
    ) -> None:
        """Referenced messages see gap-filled templates too."""
        intl = Intl(locale_config)

        assert intl.format("user.status", {"status": "banned"}, "fr") == "Statut : [en]Banned"

    def test_plural(self, locale_config: dict[str, dict[str, str]]) -> None:
        """The ICU step applies locale plural rules."""
        intl = Intl(locale_config)

        assert intl.format("files", {"count": 1}) == "1 file"
        assert intl.format("files", {"count": 2}, "fr") == "2 fichiers"

    def test_descriptor_default_message(self, locale_config: dict[str, dict[str, str]]) -> None:
        """A missing id uses the descriptor's default message."""
        desc = MessageDescriptor("new.message", "Hi {name}")

        assert Intl(locale_config).format(desc, {"name": "Jo"}) == "Hi Jo"

    def test_dictionary_wins_over_default_message(
        self, locale_config: dict[str, dict[str, str]]
    ) -> None:
        """The default message is only used when the dictionary has nothing."""
        desc = MessageDescriptor("hello", "Hi there")

        assert Intl(locale_config).format(desc, locale="fr") == "Bonjour"

    def test_missing_message_returns_id(
        self, locale_config: dict[str, dict[str, str]], caplog: pytest.LogCaptureFixture
    ) -> None:
        """With no template at all the id itself is returned and an error logged."""
        with caplog.at_level(logging.ERROR):
            result = Intl(locale_config).format("nope")

        assert result == "nope"
        assert "Message 'nope' not found for locale 'en'" in caplog.text

    def test_missing_message_with_fallback(self, locale_config: dict[str, dict[str, str]]) -> None:
        """The fallback is returned as-is."""
        assert Intl(locale_config).format("nope", {"x": 1}, fallback="Oops {x}") == "Oops {x}"

    def test_unknown_locale(self, locale_config: dict[str, dict[str, str]]) -> None:
        """An unknown locale behaves like a missing message."""
        assert Intl(locale_config).format("hello", locale="de", fallback="-") == "-"

    def test_unresolved_placeholder_kept(
        self, locale_config: dict[str, dict[str, str]], caplog: pytest.LogCaptureFixture
    ) -> None:
        """Missing values survive the ICU step as literal text."""
        with caplog.at_level(logging.WARNING):
            result = Intl(locale_config).format("greeting", {})

        assert result == "Hello {name}!"
        assert "ICU formatting of 'greeting' failed" in caplog.text

    def test_unresolved_placeholder_fallback(
        self, locale_config: dict[str, dict[str, str]]
    ) -> None:
        """The fallback replaces a partially substituted message."""
        assert Intl(locale_config).format("greeting", {}, fallback="Hello!") == "Hello!"

    def test_icu_syntax_error_returns_substituted_text(self) -> None:
        """A template the ICU step rejects is returned after substitution."""
        intl = Intl({"en": {"broken": "{n, plural, one {item}} for {who}"}})

        assert intl.format("broken", {"n": 1, "who": "you", "item": "x"}) == (
            "{n, plural, one x} for you"
        )

    def test_reference_cycle_terminates(self) -> None:
        """A self-referencing message stops at the depth ceiling."""
        intl = Intl({"en": {"loop": "{@'loop'}"}}, max_reference_depth=5)

        assert intl.format("loop") == "{@'loop'}"

    def test_fan_out_cycle_terminates(self) -> None:
        """Messages referencing each other twice stop once the ceiling is hit."""
        intl = Intl({"en": {"x": "{@'x'}{@'y'}", "y": "{@'x'}{@'y'}"}})

        assert intl.format("x").endswith("{@'y'}")

    def test_accepts_store(self, locale_config: dict[str, dict[str, str]]) -> None:
        """An existing TemplateStore is used directly."""
        store = TemplateStore(locale_config, default_language="fr")
        intl = Intl(store)

        assert intl.store is store
        assert intl.default_language == "fr"
        assert intl.format("hello") == "Bonjour"

    def test_default_language_for_configuration(
        self, locale_config: dict[str, dict[str, str]]
    ) -> None:
        """default_language applies to a store built from a configuration."""
        assert Intl(locale_config, default_language="fr").format("hello") == "Bonjour"

    @pytest.mark.parametrize(("desc", "error"), [("", ValueError), (42, TypeError)])
    def test_invalid_descriptor(
        self, locale_config: dict[str, dict[str, str]], desc: object, error: type[Exception]
    ) -> None:
        """Programmer errors raise."""
        with pytest.raises(error):
            Intl(locale_config).format(desc)  # type: ignore[arg-type]


# ============================================================================
# LOOKUP AND INVERSE
# ============================================================================


class TestLookupAndExtract:
    """Raw templates and value recovery."""

    def test_get_message_template(self, locale_config: dict[str, dict[str, str]]) -> None:
        """Descriptor or bare id."""
        intl = Intl(locale_config)

        assert intl.get_message_template("greeting") == "Hello {name}!"
        assert intl.get_message_template(MessageDescriptor("greeting"), "fr") == "Bonjour {name} !"
        assert intl.get_message_template("nope") is None

    def test_get_message_template_empty_id(self, locale_config: dict[str, dict[str, str]]) -> None:
        """An empty id is rejected."""
        with pytest.raises(ValueError, match="empty id"):
            Intl(locale_config).get_message_template(MessageDescriptor(""))

    def test_extract_variables(self, locale_config: dict[str, dict[str, str]]) -> None:
        """Values come back from formatted text in the same locale."""
        intl = Intl(locale_config)

        assert intl.extract_variables("greeting", "Hello Jack!") == {"name": "Jack"}
        assert intl.extract_variables("greeting", "Bonjour Jack !", "fr") == {"name": "Jack"}

    def test_extract_variables_missing_message(
        self, locale_config: dict[str, dict[str, str]]
    ) -> None:
        """No template, no values."""
        assert Intl(locale_config).extract_variables("nope", "Hello Jack!") == {}

    def test_language_name(self, locale_config: dict[str, dict[str, str]]) -> None:
        """intl.language of the locale, or the code."""
        intl = Intl(locale_config)

        assert intl.get_language_name("fr") == "Français"
        assert intl.get_language_name("de") == "de"


# ============================================================================
# LOCALE CONTEXT
# ============================================================================


class TestIntlContext:
    """An Intl bound to one locale."""

    def test_format(self, locale_config: dict[str, dict[str, str]]) -> None:
        """Calls use the bound locale."""
        fr = Intl(locale_config).for_locale("fr")

        assert isinstance(fr, IntlContext)
        assert fr.format("greeting", {"name": "Jack"}) == "Bonjour Jack !"
        assert fr.lookup("hello") == "Bonjour"
        assert fr.extract_variables("greeting", "Bonjour Jo !") == {"name": "Jo"}

    def test_contexts_are_independent(self, locale_config: dict[str, dict[str, str]]) -> None:
        """Two contexts over one Intl never share a locale."""
        intl = Intl(locale_config)
        en, fr = intl.for_locale("en"), intl.for_locale("fr")

        assert (en.format("hello"), fr.format("hello")) == ("Hello", "Bonjour")

    def test_immutable(self, locale_config: dict[str, dict[str, str]]) -> None:
        """The bound locale cannot be changed."""
        ctx = Intl(locale_config).for_locale("en")

        with pytest.raises(dataclasses.FrozenInstanceError):
            ctx.locale = "fr"  # type: ignore[misc]

    def test_fallback(self, locale_config: dict[str, dict[str, str]]) -> None:
        """Options pass through."""
        assert Intl(locale_config).for_locale("fr").format("nope", fallback="?") == "?"


# ============================================================================
# DATES AND TIMES
# ============================================================================


class TestDateFormatting:
    """Thin wrappers over babel.dates."""

    def test_format_date_default_pattern(self, locale_config: dict[str, dict[str, str]]) -> None:
        """ISO-like default pattern."""
        assert Intl(locale_config).format_date(date(2024, 3, 5)) == "2024-03-05"

    def test_format_date_localized(self, locale_config: dict[str, dict[str, str]]) -> None:
        """Month names follow the locale."""
        fr = Intl(locale_config).for_locale("fr")

        assert fr.format_date(date(2024, 3, 5), "d MMMM yyyy") == "5 mars 2024"

    def test_format_time(self, locale_config: dict[str, dict[str, str]]) -> None:
        """Default pattern is 24-hour HH:mm."""
        assert Intl(locale_config).format_time(time(14, 7)) == "14:07"

    def test_format_relative_recent(self, locale_config: dict[str, dict[str, str]]) -> None:
        """Within a week: a relative phrase."""
        now = datetime(2024, 3, 10, 12, 0)

        result = Intl(locale_config).format_relative(now - timedelta(days=2), now=now)

        assert result == "2 days ago"

    def test_format_relative_old(self, locale_config: dict[str, dict[str, str]]) -> None:
        """Beyond a week: a date."""
        now = datetime(2024, 3, 10, 12, 0)

        result = Intl(locale_config).format_relative(now - timedelta(days=30), now=now)

        assert result == "2024-02-09"

    def test_unknown_locale_formats(self, locale_config: dict[str, dict[str, str]]) -> None:
        """Locale codes unknown to CLDR fall back to default rules."""
        assert Intl(locale_config).format_date(date(2024, 1, 2), locale="zz-qq") == "2024-01-02"
