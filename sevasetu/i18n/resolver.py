# sevasetu/i18n/resolver.py
from __future__ import annotations

from dataclasses import dataclass
from typing import List

from sevasetu.i18n.translations import TRANSLATIONS, DEFAULT_LANGUAGE


@dataclass(frozen=True)
class Language:
    value: str
    label: str


SUPPORTED_LANGUAGES: List[Language] = [
    Language("en-US", "English"),
    Language("hi-IN", "Hindi"),
    Language("mr-IN", "Marathi"),
    Language("ta-IN", "Tamil"),
    Language("bn-IN", "Bengali"),
]


def is_supported(language: str) -> bool:
    return any(lang.value == language for lang in SUPPORTED_LANGUAGES)


def language_label(language: str) -> str:
    """Human-readable name, used as the language hint in model prompts."""
    for lang in SUPPORTED_LANGUAGES:
        if lang.value == language:
            return lang.label
    return language


def translate(language: str, key: str, **replacements: str) -> str:
    """
    Look up `key` for `language`.

    Falls back to the English table, then to the key itself. Each
    `{placeholder}` named in `replacements` is substituted; unknown
    placeholders are left as they are.
    """
    table = TRANSLATIONS.get(language, {})
    template = table.get(key) or TRANSLATIONS[DEFAULT_LANGUAGE].get(key) or key

    for placeholder, value in replacements.items():
        template = template.replace(f"{{{placeholder}}}", value)
    return template
