"""
Blog post models for the `blog` content collection.

A post is a markdown/MDX file whose frontmatter describes it:
- English metadata (title, description) is always required
- Vietnamese metadata (titleVi, descriptionVi) is an optional overlay
- Frontmatter keys keep their camelCase spelling through field aliases
"""

from datetime import date, datetime

from pydantic import BaseModel, ConfigDict, Field, field_validator

from .i18n import LocalizedString

DEFAULT_AUTHOR = "Vinh Nguyen"


class PostMetadata(BaseModel):
    """
    Validated frontmatter of a single blog post.

    Built from the raw frontmatter mapping, so fields are populated by their
    frontmatter names (``pubDate``, ``titleVi``, ...). Unknown keys are
    ignored.

    Examples:
        >>> meta = PostMetadata.model_validate({
        ...     "title": "Hello",
        ...     "description": "First post",
        ...     "pubDate": "2024-03-01",
        ...     "tags": ["intro"],
        ... })
        >>> meta.author
        'Vinh Nguyen'
        >>> meta.is_bilingual
        False
    """

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    title: str = Field(..., min_length=1, description="English title")
    description: str = Field(..., min_length=1, description="English summary")
    publication_date: date = Field(..., alias="pubDate", description="Publication date")
    author: str = Field(default=DEFAULT_AUTHOR, description="Post author")
    tags: list[str] = Field(..., description="Tags, in authored order")
    title_vi: str | None = Field(default=None, alias="titleVi", description="Vietnamese title")
    description_vi: str | None = Field(
        default=None, alias="descriptionVi", description="Vietnamese summary"
    )

    @field_validator("publication_date", mode="before")
    @classmethod
    def coerce_datetime(cls, v: object) -> object:
        """Accept YAML dates, datetimes and ISO 8601 date strings only."""
        # YAML timestamps with a time part arrive as datetime
        if isinstance(v, datetime):
            return v.date()
        # Numbers would otherwise be read as Unix timestamps
        if isinstance(v, (bool, int, float)):
            raise ValueError(f"Expected a calendar date, got {type(v).__name__} {v!r}")
        if isinstance(v, str):
            try:
                return date.fromisoformat(v.strip())
            except ValueError as e:
                raise ValueError(f"Expected an ISO 8601 date (YYYY-MM-DD), got {v!r}") from e
        return v

    @property
    def is_bilingual(self) -> bool:
        """True when the post carries any Vietnamese overlay field."""
        return self.title_vi is not None or self.description_vi is not None

    @property
    def localized_title(self) -> LocalizedString:
        return LocalizedString(en=self.title, vi=self.title_vi)

    @property
    def localized_description(self) -> LocalizedString:
        return LocalizedString(en=self.description, vi=self.description_vi)


class BlogPost(BaseModel):
    """
    A loaded content item: identifier, body and validated metadata.

    Attributes:
        id: Path of the file relative to the collection, with extension
        slug: URL slug (id without extension)
        body: Markdown/MDX source after the frontmatter
        data: Validated frontmatter
    """

    model_config = ConfigDict(frozen=True)

    id: str = Field(..., description="Entry identifier")
    slug: str = Field(..., description="URL slug")
    body: str = Field(default="", description="Content body")
    data: PostMetadata = Field(..., description="Validated frontmatter")
