# sevasetu/i18n/__init__.py
from .resolver import (
    Language,
    SUPPORTED_LANGUAGES,
    is_supported,
    language_label,
    translate,
)
from .translations import DEFAULT_LANGUAGE

__all__ = [
    "DEFAULT_LANGUAGE",
    "Language",
    "SUPPORTED_LANGUAGES",
    "is_supported",
    "language_label",
    "translate",
]
