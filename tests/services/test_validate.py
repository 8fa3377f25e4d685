"""Tests for ValidateService: read-only front matter checks."""

from __future__ import annotations

from pathlib import Path

from blogctl.infrastructure.site import Site
from blogctl.services.validate import ValidateService
from tests.conftest import mdx, post_fields, write_page, write_post


class TestValidate:
    def test_all_valid(self, site: Site, site_root: Path) -> None:
        write_post(site_root, "a")
        write_page(site_root, "about")
        result = ValidateService(site).validate()
        assert result.ok
        assert result.op == "validate_content"
        assert result.data["checked"] == 2
        assert result.data["valid"] == 2
        assert result.data["files"] == []

    def test_invalid_file_fails(self, site: Site, site_root: Path) -> None:
        write_post(site_root, "good")
        write_post(site_root, "bad", post_fields(excerpt=""))
        result = ValidateService(site).validate()
        assert not result.ok
        assert result.error is not None
        assert result.error.code == "VALIDATION_FAILED"
        assert result.data["invalid"] == 1
        assert result.data["error_count"] == 1
        (report,) = result.data["files"]
        assert report["path"] == "content/blog/bad.mdx"
        assert report["type"] == "blog"
        assert report["errors"] == ["Missing required field 'excerpt'"]

    def test_stale_hash(self, site: Site, site_root: Path) -> None:
        write_post(site_root, "p", post_fields(body="other"))
        result = ValidateService(site).validate()
        (report,) = result.data["files"]
        assert report["state"] == "stale"
        assert "update-metadata" in report["errors"][0]

    def test_page_rules_apply_outside_blog(self, site: Site, site_root: Path) -> None:
        write_page(site_root, "about")
        nested = site_root / "content" / "docs" / "guide.mdx"
        nested.parent.mkdir()
        nested.write_text(mdx({"title": "Guide"}))
        result = ValidateService(site).validate()
        (report,) = result.data["files"]
        assert report["type"] == "page"
        assert report["path"] == "content/docs/guide.mdx"
        assert len(report["errors"]) == 3

    def test_order_warning_only(self, site: Site, site_root: Path) -> None:
        fields = post_fields()
        write_post(site_root, "p", {"tags": fields.pop("tags"), **fields})
        result = ValidateService(site).validate()
        assert result.ok
        (report,) = result.data["files"]
        assert report["errors"] == []
        assert report["warnings"] == ["Front matter keys are not in canonical order"]

    def test_unreadable_file(self, site: Site) -> None:
        (site.blog_dir / "bad.mdx").write_text("---\ntitle: [x\n---\n")
        result = ValidateService(site).validate()
        assert not result.ok
        assert result.data["files"][0]["errors"][0].startswith("Cannot read file")

    def test_never_writes(self, site: Site, site_root: Path) -> None:
        path = write_post(site_root, "p", post_fields(date="2024-01-01", body="x"))
        before = path.read_text()
        ValidateService(site).validate()
        assert path.read_text() == before

    def test_custom_root(self, site: Site, site_root: Path) -> None:
        write_post(site_root, "bad", post_fields(title=""))
        write_page(site_root, "about")
        result = ValidateService(site).validate("content/pages")
        assert result.ok
        assert result.data["checked"] == 1

    def test_missing_root(self, site: Site) -> None:
        result = ValidateService(site).validate("nowhere")
        assert not result.ok
        assert result.error is not None
        assert result.error.code == "CONTENT_DIR_NOT_FOUND"

    def test_empty_tree(self, site: Site) -> None:
        result = ValidateService(site).validate()
        assert result.ok
        assert result.data["checked"] == 0
