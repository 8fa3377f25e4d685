"""Tests for the scaffold front matter models."""

import pytest
from pydantic import ValidationError

from blogctl.domain.content import ContentKind
from blogctl.domain.frontmatter import (
    FRONTMATTER_MODELS,
    BlogFrontmatter,
    PageFrontmatter,
)
from blogctl.domain.hashing import compute_content_hash

HASH = compute_content_hash("body")
NOW = "2024-06-01T12:00:00+09:00"


class TestBlogFrontmatter:
    def test_aliases_in_output(self) -> None:
        model = BlogFrontmatter(title="T", date=NOW, lastUpdated=NOW, contentHash=HASH)
        fm = model.to_frontmatter()
        assert fm["lastUpdated"] == NOW
        assert fm["contentHash"] == HASH
        assert "last_updated" not in fm

    def test_populate_by_name(self) -> None:
        model = BlogFrontmatter(title="T", date=NOW, last_updated=NOW, content_hash=HASH)
        assert model.last_updated == NOW

    def test_defaults(self) -> None:
        model = BlogFrontmatter(title="T", date=NOW, lastUpdated=NOW, contentHash=HASH)
        fm = model.to_frontmatter()
        assert fm["categories"] == []
        assert fm["tags"] == []
        assert fm["excerpt"] == ""

    def test_hash_must_be_sha256_hex(self) -> None:
        with pytest.raises(ValidationError):
            BlogFrontmatter(title="T", date=NOW, lastUpdated=NOW, contentHash="abc")

    def test_frozen(self) -> None:
        model = BlogFrontmatter(title="T", date=NOW, lastUpdated=NOW, contentHash=HASH)
        with pytest.raises(ValidationError):
            model.title = "Other"  # type: ignore[misc]


class TestPageFrontmatter:
    def test_no_blog_fields(self) -> None:
        fm = PageFrontmatter(title="T", lastUpdated=NOW, contentHash=HASH).to_frontmatter()
        assert set(fm) == {"title", "description", "lastUpdated", "contentHash"}


def test_model_registry() -> None:
    assert FRONTMATTER_MODELS[ContentKind.BLOG] is BlogFrontmatter
    assert FRONTMATTER_MODELS[ContentKind.PAGE] is PageFrontmatter
    assert BlogFrontmatter.kind is ContentKind.BLOG
