"""
Bilingual page runtime.

Language preference controller and the page/storage model it runs on.
"""

from .document import Event, Navigator, Page
from .i18n import LANGUAGE_CHANGE_EVENT, STORAGE_KEY, LanguageController, auto_init
from .storage import JsonFileStorage, MemoryStorage

__all__ = [
    "Event",
    "JsonFileStorage",
    "LANGUAGE_CHANGE_EVENT",
    "LanguageController",
    "MemoryStorage",
    "Navigator",
    "Page",
    "STORAGE_KEY",
    "auto_init",
]
