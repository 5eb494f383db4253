"""
Command-line entry point for the blog content collection.

Usage:
    blog-content check [collection_dir]
    blog-content list [collection_dir]

`check` validates every post and exits with status 1 when any post has
malformed frontmatter. `list` prints the posts newest first.
"""

import logging
import sys
from collections.abc import Sequence
from pathlib import Path

from src.content.core.config import get_settings
from src.content.core.schemas import SchemaValidationError
from src.content.services.build_logger import setup_build_logging
from src.content.services.collection import ContentCollection, sorted_by_date

logger = logging.getLogger(__name__)

USAGE = "Usage: blog-content {check|list} [collection_dir]"


def _collection(args: Sequence[str]) -> ContentCollection:
    settings = get_settings()
    if args:
        return ContentCollection(
            settings.content.collection, Path(args[0]), settings.content.extensions
        )
    return ContentCollection.from_settings(settings)


def check(collection: ContentCollection) -> int:
    entries = collection.list_entries()
    errors = collection.validate_all()
    if errors:
        print(f"{len(errors)} of {len(entries)} entries failed validation:", file=sys.stderr)
        for error in errors:
            print(str(error), file=sys.stderr)
        return 1

    logger.info("Validated %d entries in '%s'", len(entries), collection.name)
    print(f"OK: {len(entries)} entries in '{collection.name}'")
    return 0


def list_posts(collection: ContentCollection) -> int:
    try:
        posts = collection.load_all()
    except SchemaValidationError as e:
        print(str(e), file=sys.stderr)
        return 1

    for post in sorted_by_date(posts):
        marker = " [en/vi]" if post.data.is_bilingual else ""
        print(f"{post.data.publication_date.isoformat()}  {post.slug}  {post.data.title}{marker}")
    return 0


def main(argv: Sequence[str] | None = None) -> int:
    args = list(sys.argv[1:] if argv is None else argv)
    if not args or args[0] not in ("check", "list"):
        print(USAGE, file=sys.stderr)
        return 2

    settings = get_settings()
    setup_build_logging(settings.logging.level, settings.logging.file)

    collection = _collection(args[1:])
    if args[0] == "check":
        return check(collection)
    return list_posts(collection)


if __name__ == "__main__":
    sys.exit(main())
