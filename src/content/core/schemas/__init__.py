"""
JSON Schema definitions for blog content.

Provides the two-pass frontmatter validation used by the content
collection: JSON Schema for structure, then Pydantic for typed values.
"""

import json
from functools import lru_cache
from pathlib import Path
from typing import Any

import jsonschema
from pydantic import ValidationError as PydanticValidationError

from src.content.models.post import PostMetadata


class SchemaValidationError(ValueError):
    """
    Raised when a content item's frontmatter fails validation.

    Attributes:
        entry_id: Identifier of the offending content item
        field: Frontmatter key that failed ("root" for the whole record)
        message: Human-readable reason
        path: Source file, when known
    """

    def __init__(self, entry_id: str, field: str, message: str, path: Path | None = None):
        self.entry_id = entry_id
        self.field = field
        self.message = message
        self.path = path

        lines = [f"Invalid frontmatter in '{entry_id}':"]
        if path is not None:
            lines.append(f"  File: {path.absolute()}")
        lines.append(f"  Field: {field}")
        lines.append(f"  Error: {message}")
        super().__init__("\n".join(lines))


SCHEMA_DIR = Path(__file__).parent


@lru_cache
def load_schema(schema_name: str) -> dict[str, Any]:
    """
    Read a bundled JSON Schema once per process.

    Raises:
        FileNotFoundError: If no ``<schema_name>.json`` ships with the package
        ValueError: If the schema file is not valid JSON
    """
    schema_path = SCHEMA_DIR / f"{schema_name}.json"
    try:
        return json.loads(schema_path.read_text(encoding="utf-8"))
    except FileNotFoundError as e:
        raise FileNotFoundError(f"No bundled schema named '{schema_name}' in {SCHEMA_DIR}") from e
    except json.JSONDecodeError as e:
        raise ValueError(f"Bundled schema '{schema_name}' is not valid JSON: {e}") from e


def _schema_error_field(error: jsonschema.ValidationError) -> str:
    """Name the frontmatter key a JSON Schema error is about."""
    if error.validator == "required" and isinstance(error.instance, dict):
        missing = [key for key in error.validator_value if key not in error.instance]
        if missing:
            return str(missing[0])
    if error.absolute_path:
        return " -> ".join(str(p) for p in error.absolute_path)
    return "root"


def validate_post_frontmatter(
    data: Any, entry_id: str, path: Path | None = None
) -> PostMetadata:
    """
    Validate raw frontmatter and return the normalized metadata.

    Args:
        data: Mapping parsed from the content file header
        entry_id: Content item identifier, used in error reports
        path: Source file, used in error reports

    Returns:
        PostMetadata with defaults applied

    Raises:
        SchemaValidationError: If any field is missing or malformed
    """
    try:
        jsonschema.validate(instance=data, schema=load_schema("post"))
    except jsonschema.ValidationError as e:
        raise SchemaValidationError(entry_id, _schema_error_field(e), e.message, path) from e

    try:
        return PostMetadata.model_validate(data)
    except PydanticValidationError as e:
        first = e.errors()[0]
        field = " -> ".join(str(p) for p in first["loc"]) or "root"
        raise SchemaValidationError(entry_id, field, first["msg"], path) from e


__all__ = ["SchemaValidationError", "load_schema", "validate_post_frontmatter"]
