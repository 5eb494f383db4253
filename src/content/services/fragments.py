"""
Bilingual HTML fragments for rendered pages.

Emits the attribute conventions the language controller consumes:
- ``data-lang="<code>"`` on every language-specific fragment
- ``data-lang-switch="<code>"`` on every language switch control
"""

from lxml import html
from lxml.html.builder import CLASS, E

from src.content.core.i18n import I18nService
from src.content.models.i18n import SUPPORTED_LANGUAGES, Language
from src.content.models.post import BlogPost

LANG_ATTRIBUTE = "data-lang"
SWITCH_ATTRIBUTE = "data-lang-switch"


def _fragment(tag, lang: str | None, text: str, class_name: str) -> html.HtmlElement:
    element = tag(text)
    element.set("class", class_name)
    if lang is not None:
        element.set(LANG_ATTRIBUTE, lang)
    return element


def render_post_header(post: BlogPost) -> html.HtmlElement:
    """
    Render a post's title and summary.

    A bilingual post gets parallel fragments tagged en and vi; a missing
    Vietnamese summary falls back to the English text inside the vi
    fragment. An English-only post is emitted untagged, so it stays visible
    whichever language is active.
    """
    meta = post.data
    header = E.header(CLASS("post-header"))

    languages: list[str | None] = [None]
    if meta.is_bilingual:
        languages = [lang.value for lang in Language]

    for lang in languages:
        text_lang = lang or Language.EN.value
        header.append(_fragment(E.h1, lang, meta.localized_title.get(text_lang), "post-title"))
        header.append(
            _fragment(E.p, lang, meta.localized_description.get(text_lang), "post-description")
        )

    header.append(
        E.time(meta.publication_date.isoformat(), datetime=meta.publication_date.isoformat())
    )
    return header


def render_language_switch(i18n: I18nService) -> html.HtmlElement:
    """Render one switch button per supported language, labelled in that language."""
    nav = E.nav(CLASS("lang-switch"))
    nav.set("aria-label", i18n.get("common.language.switch"))
    for lang in SUPPORTED_LANGUAGES:
        button = E.button(i18n.get(f"common.language.{lang}", lang=lang), type="button")
        button.set(SWITCH_ATTRIBUTE, lang)
        button.set("aria-pressed", "false")
        nav.append(button)
    return nav


def to_html(element: html.HtmlElement) -> str:
    return html.tostring(element, encoding="unicode")
