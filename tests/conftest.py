"""
Pytest configuration and shared fixtures.
"""

import logging
from pathlib import Path

import pytest
import yaml

from src.content.core.config import reset_settings
from src.content.core.i18n import reset_i18n


@pytest.fixture(autouse=True)
def fresh_singletons():
    """Drop cached settings and i18n catalogues around every test."""
    root_logger = logging.getLogger()
    handlers, level = list(root_logger.handlers), root_logger.level
    reset_settings()
    reset_i18n()
    yield
    reset_settings()
    reset_i18n()
    # setup_build_logging() replaces the root handlers
    for handler in root_logger.handlers:
        if handler not in handlers:
            handler.close()
    root_logger.handlers[:] = handlers
    root_logger.setLevel(level)


@pytest.fixture
def valid_frontmatter():
    """Minimal English-only frontmatter."""
    return {
        "title": "Test Post",
        "description": "A post used in tests",
        "pubDate": "2024-05-20",
        "tags": ["testing", "python"],
    }


@pytest.fixture
def bilingual_frontmatter(valid_frontmatter):
    """Frontmatter with a Vietnamese overlay."""
    return {
        **valid_frontmatter,
        "titleVi": "Bài viết thử",
        "descriptionVi": "Một bài viết dùng để kiểm thử",
    }


@pytest.fixture
def write_post(tmp_path):
    """Write a post file into a temporary collection directory."""
    collection_dir = tmp_path / "blog"
    collection_dir.mkdir()

    def _write(name: str, metadata: dict | None, body: str = "Body text.\n") -> Path:
        path = collection_dir / name
        path.parent.mkdir(parents=True, exist_ok=True)
        if metadata is None:
            path.write_text(body, encoding="utf-8")
        else:
            header = yaml.safe_dump(metadata, allow_unicode=True, sort_keys=False)
            path.write_text(f"---\n{header}---\n\n{body}", encoding="utf-8")
        return path

    _write.directory = collection_dir
    return _write


@pytest.fixture
def bilingual_page_html():
    """A page with tagged fragments and both switch controls."""
    return """<!DOCTYPE html>
<html>
  <head><title>Post</title></head>
  <body>
    <nav class="lang-switch">
      <a href="?lang=en" data-lang-switch="en">English</a>
      <a href="?lang=vi" data-lang-switch="vi">Tiếng Việt</a>
    </nav>
    <h1 data-lang="en">Hello</h1>
    <h1 data-lang="vi">Xin chào</h1>
    <p data-lang="en" style="color: red">English body</p>
    <p data-lang="vi">Nội dung tiếng Việt</p>
    <footer>Shared footer</footer>
  </body>
</html>
"""
