"""Pydantic configuration models with code-baked defaults.

Sparse TOML contract: defaults baked here, blogctl.toml only contains
overrides. A site that keeps the standard layout needs no config file.
"""

from __future__ import annotations

import re

from pydantic import BaseModel, Field, field_validator

from blogctl.domain.ids import DEFAULT_TEST_MARKERS

# --- blogctl.toml sections ---


class ContentConfig(BaseModel):
    """[content] section; paths are relative to the site root."""

    model_config = {"frozen": True}

    root: str = "content"
    blog_dir: str = "content/blog"
    pages_dir: str = "content/pages"
    extension: str = ".mdx"


class IdsConfig(BaseModel):
    """[ids] section."""

    model_config = {"frozen": True}

    data_dir: str = "data"
    tag_file: str = "tag-ids.json"
    category_file: str = "category-ids.json"
    blog_file: str = "blog-ids.json"
    test_markers: list[str] = Field(default_factory=lambda: list(DEFAULT_TEST_MARKERS))


class MetadataConfig(BaseModel):
    """[metadata] section."""

    model_config = {"frozen": True}

    utc_offset: str = "+09:00"

    @field_validator("utc_offset")
    @classmethod
    def _check_offset(cls, value: str) -> str:
        if not re.fullmatch(r"[+-]\d{2}:\d{2}", value):
            msg = f"utc_offset must look like +HH:MM, got {value!r}"
            raise ValueError(msg)
        return value


class BlogConfig(BaseModel):
    """Root configuration composing all sections."""

    model_config = {"frozen": True}

    content: ContentConfig = Field(default_factory=ContentConfig)
    ids: IdsConfig = Field(default_factory=IdsConfig)
    metadata: MetadataConfig = Field(default_factory=MetadataConfig)
