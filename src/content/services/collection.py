"""
Content collection loading service.

Reads markdown/MDX posts from a collection directory, validates their
frontmatter and caches the resulting BlogPost records.
"""

import logging
from collections.abc import Iterable
from pathlib import Path
from typing import Any

import frontmatter
import yaml

from src.content.core.config import Settings, get_settings
from src.content.core.schemas import SchemaValidationError, validate_post_frontmatter
from src.content.models.post import BlogPost

logger = logging.getLogger(__name__)


class HeaderNotMappingError(ValueError):
    """Raised when a frontmatter header parses to something other than a mapping."""


class FrontmatterLoader(yaml.SafeLoader):
    """
    SafeLoader that keeps impossible timestamps as plain strings.

    ``pubDate: 2024-02-30`` matches the YAML timestamp pattern but is not a
    calendar date; left as a string it fails later as a ``pubDate`` error.
    """

    def construct_yaml_timestamp(self, node: yaml.Node) -> Any:
        try:
            return super().construct_yaml_timestamp(node)
        except ValueError:
            return self.construct_scalar(node)


FrontmatterLoader.add_constructor(
    "tag:yaml.org,2002:timestamp", FrontmatterLoader.construct_yaml_timestamp
)


class PostHeaderHandler(frontmatter.YAMLHandler):
    """YAML frontmatter handler that rejects non-mapping headers."""

    def load(self, fm: str, **kwargs: Any) -> Any:
        kwargs.setdefault("Loader", FrontmatterLoader)
        metadata = super().load(fm, **kwargs)
        # python-frontmatter silently drops anything that is not a dict
        if metadata is not None and not isinstance(metadata, dict):
            raise HeaderNotMappingError(
                f"Frontmatter must be a mapping of keys to values, got {type(metadata).__name__}"
            )
        return metadata


class ContentCollection:
    """
    Service for loading the posts of one content collection.

    Every entry is validated once and cached; an invalid entry is never
    returned, its SchemaValidationError propagates instead.

    Examples:
        >>> blog = ContentCollection("blog", Path("src/content/blog"))
        >>> post = blog.load("hello-world")
        >>> post.data.author
        'Vinh Nguyen'
    """

    def __init__(
        self,
        name: str,
        directory: Path | str,
        extensions: Iterable[str] = (".md", ".mdx"),
    ):
        """
        Initialize the collection.

        Args:
            name: Collection name (e.g., "blog")
            directory: Directory containing the collection's files
            extensions: File suffixes treated as content entries
        """
        self.name = name
        self.directory = Path(directory)
        self.extensions = tuple(ext.lower() for ext in extensions)
        self._cache: dict[str, BlogPost] = {}

    @classmethod
    def from_settings(cls, settings: Settings | None = None) -> "ContentCollection":
        """Build the configured collection."""
        settings = settings or get_settings()
        return cls(
            name=settings.content.collection,
            directory=settings.content.collection_path,
            extensions=settings.content.extensions,
        )

    def _entry_files(self) -> dict[str, Path]:
        if not self.directory.is_dir():
            return {}

        files: dict[str, Path] = {}
        for path in sorted(self.directory.rglob("*")):
            if not path.is_file() or path.suffix.lower() not in self.extensions:
                continue
            # Files prefixed with an underscore are drafts/partials
            if path.name.startswith("_"):
                continue
            slug = path.relative_to(self.directory).with_suffix("").as_posix()
            files.setdefault(slug, path)
        return files

    def list_entries(self) -> list[str]:
        """List the slugs of all entries in the collection."""
        return list(self._entry_files())

    def load(self, slug: str, use_cache: bool = True) -> BlogPost:
        """
        Load and validate a single entry.

        Args:
            slug: Entry slug (path relative to the collection, no extension)
            use_cache: Whether to use cached version if available

        Returns:
            The validated BlogPost

        Raises:
            FileNotFoundError: If no file exists for the slug
            SchemaValidationError: If the frontmatter is missing or malformed
        """
        if use_cache and slug in self._cache:
            return self._cache[slug]

        files = self._entry_files()
        path = files.get(slug)
        if path is None:
            raise FileNotFoundError(
                f"Entry not found in collection '{self.name}': {slug}\n"
                f"  Directory: {self.directory.absolute()}\n"
                f"Available entries: {', '.join(files) or 'none'}"
            )

        entry_id = path.relative_to(self.directory).as_posix()

        try:
            with open(path, encoding="utf-8") as f:
                source = frontmatter.load(f, handler=PostHeaderHandler())
        except HeaderNotMappingError as e:
            raise SchemaValidationError(entry_id, "root", str(e), path) from e
        except UnicodeDecodeError as e:
            raise SchemaValidationError(
                entry_id, "frontmatter", "File is not valid UTF-8", path
            ) from e
        except (yaml.YAMLError, ValueError) as e:
            raise SchemaValidationError(entry_id, "frontmatter", f"Invalid YAML: {e}", path) from e

        metadata = validate_post_frontmatter(source.metadata, entry_id, path)
        post = BlogPost(id=entry_id, slug=slug, body=source.content, data=metadata)

        logger.debug("Validated %s/%s", self.name, entry_id)
        self._cache[slug] = post
        return post

    def load_all(self) -> list[BlogPost]:
        """
        Load every entry of the collection.

        Raises:
            SchemaValidationError: On the first invalid entry
        """
        return [self.load(slug) for slug in self.list_entries()]

    def validate_all(self) -> list[SchemaValidationError]:
        """Validate every entry and collect all schema failures."""
        errors: list[SchemaValidationError] = []
        for slug in self.list_entries():
            try:
                self.load(slug)
            except SchemaValidationError as e:
                logger.error(e.message, extra={"entry_id": e.entry_id, "field": e.field})
                errors.append(e)
        return errors

    def clear_cache(self) -> None:
        self._cache.clear()


def sorted_by_date(posts: Iterable[BlogPost]) -> list[BlogPost]:
    """Sort posts newest first; ties keep their slug order."""
    return sorted(posts, key=lambda p: p.data.publication_date, reverse=True)
