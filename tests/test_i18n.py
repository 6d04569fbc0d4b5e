from __future__ import annotations

import pytest

from sevasetu.i18n import SUPPORTED_LANGUAGES, is_supported, language_label, translate
from sevasetu.i18n.translations import TRANSLATIONS


def test_every_supported_language_has_a_table():
    assert [lang.value for lang in SUPPORTED_LANGUAGES] == ["en-US", "hi-IN", "mr-IN", "ta-IN", "bn-IN"]
    for lang in SUPPORTED_LANGUAGES:
        assert lang.value in TRANSLATIONS


def test_english_table_is_complete_reference():
    english = set(TRANSLATIONS["en-US"])
    for code, table in TRANSLATIONS.items():
        assert set(table) <= english, code


def test_missing_key_falls_back_to_english():
    assert "instructions" not in TRANSLATIONS["ta-IN"]
    assert translate("ta-IN", "instructions") == TRANSLATIONS["en-US"]["instructions"]


def test_unknown_key_returns_key():
    assert translate("hi-IN", "noSuchKey") == "noSuchKey"


def test_unknown_language_uses_english():
    assert translate("fr-FR", "askAge") == "Thank you. What is your age?"


def test_placeholders_are_substituted():
    assert translate("en-US", "welcomeBack", name="Ravi").startswith("Welcome back, Ravi!")
    assert "{name}" in translate("en-US", "welcomeBack")


@pytest.mark.parametrize("code,supported", [("mr-IN", True), ("bn-IN", True), ("en-GB", False), ("", False)])
def test_is_supported(code, supported):
    assert is_supported(code) is supported


def test_language_label():
    assert language_label("ta-IN") == "Tamil"
    assert language_label("xx") == "xx"
