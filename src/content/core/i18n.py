"""
Internationalization (i18n) service for UI strings.

Loads the JSON catalogues under locale/{lang}/ that label the parts of a
page not authored per post, such as the language switch buttons.
"""

import json
from pathlib import Path
from typing import Any

from src.content.core.config import get_settings
from src.content.models.i18n import DEFAULT_LANGUAGE, SUPPORTED_LANGUAGES


class I18nService:
    """
    Centralized UI string catalogue.

    Loads all JSON files from locale/{lang}/ directories on initialization
    and provides a get() method to retrieve localized strings with fallback.

    The service follows a fallback chain:
    1. Requested language
    2. Default language (en)
    3. Error placeholder "[MISSING: key]"

    Examples:
        >>> i18n = I18nService()
        >>> i18n.get("common.language.vi", lang="vi")
        'Tiếng Việt'
        >>> i18n.get("common.language.vi", lang="fr")  # Fallback to en
        'Vietnamese'
    """

    def __init__(self, default_lang: str = DEFAULT_LANGUAGE, locale_dir: Path | None = None):
        """
        Initialize the i18n service.

        Args:
            default_lang: Default language code (used for fallback)
            locale_dir: Path to locale directory (defaults to project's locale/)
        """
        self.default_lang = default_lang
        self._cache: dict[str, dict[str, Any]] = {}

        if locale_dir is None:
            # src/content/core -> project root
            project_root = Path(__file__).parent.parent.parent.parent
            locale_dir = project_root / "locale"

        self.locale_dir = Path(locale_dir)
        self._load_all()

    def _load_all(self) -> None:
        """Load all JSON files from locale directories."""
        if not self.locale_dir.exists():
            raise FileNotFoundError(f"Locale directory not found: {self.locale_dir}")

        for lang_code in SUPPORTED_LANGUAGES:
            lang_dir = self.locale_dir / lang_code
            if not lang_dir.exists():
                continue

            for json_file in lang_dir.glob("*.json"):
                cache_key = f"{lang_code}.{json_file.stem}"
                try:
                    with open(json_file, encoding="utf-8") as f:
                        self._cache[cache_key] = json.load(f)
                except json.JSONDecodeError as exc:
                    raise ValueError(f"Invalid JSON in {json_file}: {exc}") from exc

    def _lookup(self, key: str, lang: str) -> str:
        parts = key.split(".")
        if len(parts) < 2:
            raise KeyError(f"Invalid key format: {key}")

        data: Any = self._cache.get(f"{lang}.{parts[0]}")
        if data is None:
            raise KeyError(f"Namespace not found: {lang}.{parts[0]}")

        for segment in parts[1:]:
            data = data[segment]

        if not isinstance(data, str):
            raise KeyError(f"Key '{key}' does not point to a string")
        return data

    def get(self, key: str, lang: str | None = None, **kwargs: Any) -> str:
        """
        Get localized string with fallback.

        Args:
            key: Dot-separated key (e.g., "common.language.en")
            lang: Language code (en/vi). If None, uses default_lang.
            **kwargs: Optional format arguments for string interpolation

        Returns:
            Localized string, or "[MISSING: key]" if not found
        """
        lang = lang or self.default_lang
        for candidate in dict.fromkeys((lang, self.default_lang)):
            try:
                text = self._lookup(key, candidate)
            except (KeyError, TypeError):
                continue
            return text.format(**kwargs) if kwargs else text
        return f"[MISSING: {key}]"

    def has_key(self, key: str, lang: str | None = None) -> bool:
        """Check if a key exists (in the language or its fallback)."""
        return not self.get(key, lang).startswith("[MISSING:")

    def reload(self) -> None:
        """Reload all locale files from disk."""
        self._cache.clear()
        self._load_all()


_global_i18n: I18nService | None = None


def get_i18n() -> I18nService:
    """
    Get the global i18n service instance.

    Creates the instance on first call, honouring the configured locale
    directory.
    """
    global _global_i18n
    if _global_i18n is None:
        settings = get_settings().i18n
        locale_dir = Path(settings.locale_dir) if settings.locale_dir else None
        _global_i18n = I18nService(default_lang=settings.default_language, locale_dir=locale_dir)
    return _global_i18n


def reset_i18n() -> None:
    """Reset the global i18n instance (useful for testing)."""
    global _global_i18n
    _global_i18n = None
