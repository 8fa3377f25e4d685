"""Front matter schema models used when scaffolding new content.

Python attribute names are snake_case; the YAML keys are the camelCase
aliases (``lastUpdated``, ``contentHash``). Key order on disk is decided
by :func:`blogctl.domain.content.render_frontmatter`, not by field order.

All models use Pydantic with frozen config for immutability.
"""

from __future__ import annotations

from typing import Any, ClassVar

from pydantic import BaseModel, Field

from blogctl.domain.content import ContentKind


class BaseFrontmatter(BaseModel):
    """Fields shared by posts and pages."""

    model_config = {"frozen": True, "populate_by_name": True}

    kind: ClassVar[ContentKind]

    title: str
    description: str = ""
    last_updated: str = Field(alias="lastUpdated")
    content_hash: str = Field(alias="contentHash", pattern=r"^[0-9a-f]{64}$")

    def to_frontmatter(self) -> dict[str, Any]:
        """Serialize to a front matter dict keyed by YAML names."""
        return self.model_dump(mode="json", by_alias=True)


class BlogFrontmatter(BaseFrontmatter):
    """Front matter for a blog post."""

    kind: ClassVar[ContentKind] = ContentKind.BLOG

    date: str
    excerpt: str = ""
    categories: list[str] = Field(default_factory=list)
    tags: list[str] = Field(default_factory=list)


class PageFrontmatter(BaseFrontmatter):
    """Front matter for a standalone page."""

    kind: ClassVar[ContentKind] = ContentKind.PAGE


FRONTMATTER_MODELS: dict[ContentKind, type[BaseFrontmatter]] = {
    ContentKind.BLOG: BlogFrontmatter,
    ContentKind.PAGE: PageFrontmatter,
}
