"""
End-to-end flow: validated post -> rendered fragments -> language controller.
"""

from lxml.html.builder import E

from src.browser.document import Navigator, Page, is_hidden
from src.browser.i18n import STORAGE_KEY, LanguageController, auto_init
from src.browser.storage import JsonFileStorage
from src.content.core.i18n import get_i18n
from src.content.services.collection import ContentCollection
from src.content.services.fragments import render_language_switch, render_post_header, to_html


def build_page(post) -> str:
    document = E.html(
        E.head(E.title(post.data.title)),
        E.body(render_language_switch(get_i18n()), render_post_header(post)),
    )
    return "<!DOCTYPE html>\n" + to_html(document)


def visible_titles(page: Page) -> list[str]:
    return [el.text for el in page.document_element.xpath("//h1") if not is_hidden(el)]


class TestBilingualFlow:
    """Posts rendered at build time are switched at run time."""

    def test_fresh_session_english_browser(self, write_post, bilingual_frontmatter, tmp_path):
        write_post("hello.md", bilingual_frontmatter)
        post = ContentCollection("blog", write_post.directory).load("hello")
        page = Page(build_page(post), ready_state="loading")
        storage = JsonFileStorage(tmp_path / "profile.json")

        auto_init(LanguageController(page, storage, Navigator("en-US")))
        page.finish_loading()

        assert page.lang == "en"
        assert visible_titles(page) == ["Test Post"]
        assert storage.get_item(STORAGE_KEY) is None

    def test_preference_survives_page_loads(self, write_post, bilingual_frontmatter, tmp_path):
        write_post("hello.md", bilingual_frontmatter)
        post = ContentCollection("blog", write_post.directory).load("hello")
        markup = build_page(post)
        profile = tmp_path / "profile.json"

        first = Page(markup)
        LanguageController(first, JsonFileStorage(profile), Navigator("en-US")).init()
        vi_button = first.document_element.xpath('//button[@data-lang-switch="vi"]')[0]
        first.click(vi_button)
        assert visible_titles(first) == ["Bài viết thử"]

        second = Page(markup)
        language = LanguageController(second, JsonFileStorage(profile), Navigator("en-US")).init()

        assert language == "vi"
        assert second.lang == "vi"
        assert visible_titles(second) == ["Bài viết thử"]

    def test_english_only_post_under_vietnamese(self, write_post, valid_frontmatter, tmp_path):
        write_post("plain.md", valid_frontmatter)
        post = ContentCollection("blog", write_post.directory).load("plain")
        page = Page(build_page(post))

        LanguageController(page, JsonFileStorage(tmp_path / "p.json"), Navigator("vi-VN")).init()

        assert page.lang == "vi"
        assert visible_titles(page) == ["Test Post"]
        assert page.document_element.xpath("//time")[0].text == "2024-05-20"
