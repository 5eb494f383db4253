"""Configuration loader for the blog content toolkit."""

import logging
import os
from functools import lru_cache
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, Field, field_validator

from src.content.models.i18n import DEFAULT_LANGUAGE, SUPPORTED_LANGUAGES

logger = logging.getLogger(__name__)

CONFIG_ENV_VAR = "BLOG_CONFIG"


class ContentConfig(BaseModel):
    """Content collection configuration."""

    directory: str = Field(default="src/content", description="Root of all collections")
    collection: str = Field(default="blog", description="Collection holding the posts")
    extensions: list[str] = Field(default_factory=lambda: [".md", ".mdx"])

    @property
    def collection_path(self) -> Path:
        return Path(self.directory) / self.collection


class I18nConfig(BaseModel):
    """Language preference configuration."""

    default_language: str = Field(default=DEFAULT_LANGUAGE)
    storage_key: str = Field(default="blog-language", min_length=1)
    locale_dir: str | None = Field(default=None, description="UI string catalogue")

    @field_validator("default_language")
    @classmethod
    def validate_default_language(cls, v: str) -> str:
        if v not in SUPPORTED_LANGUAGES:
            raise ValueError(
                f"default_language must be one of {', '.join(SUPPORTED_LANGUAGES)}, got '{v}'"
            )
        return v


class LoggingConfig(BaseModel):
    """Logging configuration."""

    level: str = Field(default="INFO")
    file: str | None = Field(default=None)


class Settings(BaseModel):
    """Complete toolkit settings."""

    content: ContentConfig = Field(default_factory=ContentConfig)
    i18n: I18nConfig = Field(default_factory=I18nConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)


def find_config_file() -> Path | None:
    """Find settings.yaml: BLOG_CONFIG env, project root, or cwd."""
    env_path = os.environ.get(CONFIG_ENV_VAR)
    if env_path:
        path = Path(env_path)
        if path.exists():
            return path

    current = Path(__file__).resolve()
    for parent in current.parents:
        config_path = parent / "config" / "settings.yaml"
        if config_path.exists():
            return config_path
        if (parent / "pyproject.toml").exists():
            break

    cwd_config = Path("config/settings.yaml")
    if cwd_config.exists():
        return cwd_config

    return None


def load_settings_from_file(path: Path) -> dict[str, Any]:
    """Load settings dict from a YAML file."""
    with open(path, encoding="utf-8") as f:
        data = yaml.safe_load(f)
    return data or {}


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Get toolkit settings (cached)."""
    config_path = find_config_file()

    if config_path:
        try:
            data = load_settings_from_file(config_path)
            return Settings.model_validate(data)
        except Exception as e:
            logger.warning("Failed to load config from %s: %s. Using default settings", config_path, e)

    return Settings()


def reset_settings() -> None:
    """Clear cached settings."""
    get_settings.cache_clear()


def reload_settings() -> Settings:
    """Force reload settings from file."""
    reset_settings()
    return get_settings()
