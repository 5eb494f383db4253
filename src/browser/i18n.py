"""
Language preference controller for bilingual pages.

Resolves the active display language, persists it, and shows only the
page fragments tagged with that language. Resolution order on load:
1. A previously stored preference, if supported
2. The browser-reported language, matched by primary subtag
3. The default language (en)

The controller keeps its page, storage and navigator as explicit
collaborators, so any number of controllers can run side by side.
"""

import logging
from collections.abc import Sequence

from src.browser.document import (
    DOM_CONTENT_LOADED,
    LOADING,
    Event,
    Listener,
    Navigator,
    Page,
    hide,
    show,
)
from src.browser.storage import PreferenceStorage
from src.content.core.config import Settings
from src.content.models.i18n import DEFAULT_LANGUAGE, SUPPORTED_LANGUAGES

logger = logging.getLogger(__name__)

STORAGE_KEY = "blog-language"
LANG_ATTRIBUTE = "data-lang"
SWITCH_ATTRIBUTE = "data-lang-switch"
LANGUAGE_CHANGE_EVENT = "languagechange"
ACTIVE_CLASS = "active"


class LanguageController:
    """
    Decides, persists and applies the page's display language.

    Examples:
        >>> page = Page('<p data-lang="en">Hi</p><p data-lang="vi">Chào</p>')
        >>> from src.browser.storage import MemoryStorage
        >>> controller = LanguageController(page, MemoryStorage(), Navigator("vi-VN"))
        >>> controller.init()
        'vi'
        >>> controller.toggle_language()
        'en'
    """

    SUPPORTED_LANGUAGES: tuple[str, ...] = SUPPORTED_LANGUAGES
    DEFAULT_LANGUAGE: str = DEFAULT_LANGUAGE

    def __init__(
        self,
        page: Page,
        storage: PreferenceStorage,
        navigator: Navigator | None = None,
        storage_key: str = STORAGE_KEY,
        default_language: str = DEFAULT_LANGUAGE,
    ):
        self.page = page
        self.storage = storage
        self.navigator = navigator or Navigator()
        self.storage_key = storage_key
        if default_language not in self.SUPPORTED_LANGUAGES:
            raise ValueError(f"Default language '{default_language}' is not supported")
        self.default_language = default_language

    @classmethod
    def from_settings(
        cls,
        page: Page,
        storage: PreferenceStorage,
        navigator: Navigator | None,
        settings: Settings,
    ) -> "LanguageController":
        return cls(
            page,
            storage,
            navigator,
            storage_key=settings.i18n.storage_key,
            default_language=settings.i18n.default_language,
        )

    def detect_browser_language(self) -> str:
        """Match the browser-reported language against the supported set."""
        browser_lang = self.navigator.language or self.navigator.user_language
        if not browser_lang:
            return self.default_language
        lang_code = browser_lang.split("-")[0].lower()
        return lang_code if lang_code in self.SUPPORTED_LANGUAGES else self.default_language

    def get_language(self) -> str:
        """Stored preference if valid, otherwise the detected browser language."""
        stored = self.storage.get_item(self.storage_key)
        if stored and stored in self.SUPPORTED_LANGUAGES:
            return stored
        return self.detect_browser_language()

    def set_language(self, lang: str) -> str:
        """
        Persist and apply a language.

        Unsupported codes are coerced to the default language with a warning.

        Returns:
            The language actually applied
        """
        if lang not in self.SUPPORTED_LANGUAGES:
            logger.warning("Unsupported language: %s. Using default.", lang)
            lang = self.default_language
        self.storage.set_item(self.storage_key, lang)
        self.apply_language(lang)
        return lang

    def apply_language(self, lang: str) -> None:
        """Update the document, fragments and switches, then notify listeners."""
        self.page.lang = lang

        for element in self.page.query_all(LANG_ATTRIBUTE):
            if element.get(LANG_ATTRIBUTE) == lang:
                show(element)
            else:
                hide(element)

        for button in self.page.query_all(SWITCH_ATTRIBUTE):
            is_active = button.get(SWITCH_ATTRIBUTE) == lang
            if is_active:
                button.classes.add(ACTIVE_CLASS)
            else:
                button.classes.discard(ACTIVE_CLASS)
            button.set("aria-pressed", "true" if is_active else "false")

        self.page.dispatch_event(Event(LANGUAGE_CHANGE_EVENT, detail={"language": lang}))

    def next_language(self, current: str) -> str:
        languages: Sequence[str] = self.SUPPORTED_LANGUAGES
        index = languages.index(current) if current in languages else -1
        return languages[(index + 1) % len(languages)]

    def toggle_language(self) -> str:
        """Advance to the next supported language, wrapping around."""
        return self.set_language(self.next_language(self.get_language()))

    def init(self) -> str:
        """
        Apply the resolved language and wire every switch control.

        The resolved language is applied but not stored; only an explicit
        switch writes a preference.
        """
        lang = self.get_language()
        self.apply_language(lang)

        for button in self.page.query_all(SWITCH_ATTRIBUTE):
            self.page.add_click_listener(button, self._switch_handler(button.get(SWITCH_ATTRIBUTE)))

        return lang

    def _switch_handler(self, target_lang: str) -> Listener:
        def handle_click(event: Event) -> None:
            event.prevent_default()
            self.set_language(target_lang)

        return handle_click

    def on_language_change(self, listener: Listener) -> None:
        self.page.add_event_listener(LANGUAGE_CHANGE_EVENT, listener)


def auto_init(controller: LanguageController) -> None:
    """Initialize now, or on DOMContentLoaded while the page is still loading."""
    if controller.page.ready_state == LOADING:
        controller.page.add_event_listener(DOM_CONTENT_LOADED, lambda _event: controller.init())
    else:
        controller.init()
