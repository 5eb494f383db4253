"""
Page document model for the language controller.

Wraps an lxml HTML tree with the small part of the browser surface the
controller relies on:
- attribute queries over the document
- show/hide of elements through inline style and the ``hidden`` attribute
- window-level events and per-element click listeners
- the document ready state
"""

import logging
from collections.abc import Callable
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from lxml import html

logger = logging.getLogger(__name__)

LOADING = "loading"
INTERACTIVE = "interactive"
COMPLETE = "complete"

DOM_CONTENT_LOADED = "DOMContentLoaded"


@dataclass
class Event:
    """A dispatched event. Listeners may call prevent_default()."""

    type: str
    detail: dict[str, Any] = field(default_factory=dict)
    target: html.HtmlElement | None = None
    default_prevented: bool = False

    def prevent_default(self) -> None:
        self.default_prevented = True


@dataclass(frozen=True)
class Navigator:
    """Browser-reported language values (read-only input)."""

    language: str | None = None
    user_language: str | None = None


Listener = Callable[[Event], None]


def _style_declarations(element: html.HtmlElement) -> dict[str, str]:
    declarations: dict[str, str] = {}
    for part in (element.get("style") or "").split(";"):
        name, sep, value = part.partition(":")
        if sep and name.strip():
            declarations[name.strip().lower()] = value.strip()
    return declarations


def _write_style(element: html.HtmlElement, declarations: dict[str, str]) -> None:
    if declarations:
        element.set("style", "; ".join(f"{k}: {v}" for k, v in declarations.items()))
    elif "style" in element.attrib:
        del element.attrib["style"]


def show(element: html.HtmlElement) -> None:
    """Clear the inline display override and the hidden attribute."""
    declarations = _style_declarations(element)
    declarations.pop("display", None)
    _write_style(element, declarations)
    element.attrib.pop("hidden", None)


def hide(element: html.HtmlElement) -> None:
    """Hide with display: none and mark the element hidden."""
    declarations = _style_declarations(element)
    declarations["display"] = "none"
    _write_style(element, declarations)
    element.set("hidden", "")


def is_hidden(element: html.HtmlElement) -> bool:
    return "hidden" in element.attrib or _style_declarations(element).get("display") == "none"


class Page:
    """
    An HTML page with window events and click dispatch.

    Examples:
        >>> page = Page('<p data-lang="vi">Xin chào</p>')
        >>> [el.text for el in page.query_all("data-lang")]
        ['Xin chào']
    """

    def __init__(self, markup: str, ready_state: str = COMPLETE):
        """
        Parse the page.

        Args:
            markup: Full document or fragment HTML
            ready_state: Initial document ready state ("loading" or "complete")
        """
        self.document_element: html.HtmlElement = html.document_fromstring(markup)
        self._tree = self.document_element.getroottree()
        self._window_listeners: dict[str, list[Listener]] = {}
        self._click_listeners: dict[str, list[Listener]] = {}
        self.ready_state = ready_state
        self.location: str | None = None

    @classmethod
    def from_file(cls, path: Path | str, ready_state: str = COMPLETE) -> "Page":
        with open(path, encoding="utf-8") as f:
            return cls(f.read(), ready_state=ready_state)

    @property
    def lang(self) -> str | None:
        return self.document_element.get("lang")

    @lang.setter
    def lang(self, value: str) -> None:
        self.document_element.set("lang", value)

    def query_all(self, attribute: str) -> list[html.HtmlElement]:
        """All elements carrying an attribute, in document order."""
        return self.document_element.xpath(f"//*[@{attribute}]")

    def add_event_listener(self, event_type: str, listener: Listener) -> None:
        self._window_listeners.setdefault(event_type, []).append(listener)

    def remove_event_listener(self, event_type: str, listener: Listener) -> None:
        listeners = self._window_listeners.get(event_type, [])
        if listener in listeners:
            listeners.remove(listener)

    def _notify(self, listeners: list[Listener], event: Event) -> None:
        for listener in list(listeners):
            try:
                listener(event)
            except Exception as e:
                logger.error("Listener error for '%s': %s", event.type, e)

    def dispatch_event(self, event: Event) -> Event:
        """Synchronously call every window listener for the event type."""
        self._notify(self._window_listeners.get(event.type, []), event)
        return event

    def add_click_listener(self, element: html.HtmlElement, listener: Listener) -> None:
        self._click_listeners.setdefault(self._tree.getpath(element), []).append(listener)

    def click(self, element: html.HtmlElement) -> Event:
        """
        Simulate a user click.

        Runs the element's click listeners; unless one prevented the default,
        following a link records its href in ``location``.
        """
        event = Event("click", target=element)
        self._notify(self._click_listeners.get(self._tree.getpath(element), []), event)
        if not event.default_prevented and element.tag == "a" and element.get("href"):
            self.location = element.get("href")
        return event

    def finish_loading(self) -> None:
        """Leave the loading state and fire DOMContentLoaded once."""
        if self.ready_state != LOADING:
            return
        self.ready_state = INTERACTIVE
        self.dispatch_event(Event(DOM_CONTENT_LOADED))

    def to_html(self) -> str:
        return html.tostring(self.document_element, encoding="unicode", doctype="<!DOCTYPE html>")
