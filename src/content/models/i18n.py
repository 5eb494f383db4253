"""
Internationalization (i18n) support for bilingual content.

This module provides the Language enumeration shared by the build-time
content schema and the run-time language controller, and the
LocalizedString class for text that carries a Vietnamese overlay on top
of its English original.
"""

from enum import Enum

from pydantic import BaseModel, Field


class Language(str, Enum):
    """Supported display languages, in switch order."""

    EN = "en"
    VI = "vi"


SUPPORTED_LANGUAGES: tuple[str, ...] = tuple(lang.value for lang in Language)
DEFAULT_LANGUAGE: str = Language.EN.value


def is_supported(lang: object) -> bool:
    """Check whether a value is one of the supported language codes."""
    return isinstance(lang, str) and lang in SUPPORTED_LANGUAGES


class LocalizedString(BaseModel):
    """
    English string with an optional Vietnamese overlay.

    The English text is always present; get() falls back to it whenever
    the requested language has no text.

    Examples:
        >>> text = LocalizedString(en="Hello", vi="Xin chào")
        >>> text.get("vi")
        'Xin chào'
        >>> LocalizedString(en="Hello").get("vi")  # No overlay
        'Hello'
        >>> text.get("fr")  # Falls back to en
        'Hello'
    """

    en: str = Field(..., description="English text")
    vi: str | None = Field(default=None, description="Vietnamese text")

    def get(self, lang: str = DEFAULT_LANGUAGE) -> str:
        """
        Get localized string with fallback.

        Args:
            lang: Language code ("en" or "vi"). Defaults to "en".

        Returns:
            The text in the requested language, or English if not available.
        """
        if lang == Language.VI.value and self.vi:
            return self.vi
        return self.en

    @property
    def has_overlay(self) -> bool:
        return bool(self.vi)

    def __str__(self) -> str:
        """Return English version by default."""
        return self.en

    def __repr__(self) -> str:
        return f"LocalizedString(en='{self.en}', vi='{self.vi}')"
