"""Tests for the Site context object."""

from datetime import datetime, timedelta, timezone
from pathlib import Path

import pytest

from blogctl.config.settings import BlogSettings
from blogctl.domain.content import ContentKind
from blogctl.domain.ids import BlogIdMapper, IdMapper
from blogctl.infrastructure.mapping_store import LoadStatus, MissingMappingFileError
from blogctl.infrastructure.site import Site
from tests.conftest import mdx, post_fields, write_page, write_post

NOW = "2024-06-01T03:00:00.000Z"


class TestPaths:
    def test_default_layout(self, site: Site, site_root: Path) -> None:
        root = site_root.resolve()
        assert site.root == root
        assert site.blog_dir == root / "content" / "blog"
        assert site.pages_dir == root / "content" / "pages"
        assert site.tag_mapping_path == root / "data" / "tag-ids.json"
        assert site.category_mapping_path == root / "data" / "category-ids.json"
        assert site.blog_mapping_path == root / "data" / "blog-ids.json"
        assert site.extension == ".mdx"

    def test_configured_layout(self, site_root: Path) -> None:
        (site_root / "blogctl.toml").write_text(
            '[content]\nblog_dir = "posts"\n\n[ids]\ndata_dir = "public/ids"\n',
            encoding="utf-8",
        )
        site = Site(BlogSettings.from_cli(site_root=site_root))
        assert site.blog_dir == site.root / "posts"
        assert site.blog_mapping_path == site.root / "public" / "ids" / "blog-ids.json"

    def test_tzinfo(self, site: Site) -> None:
        assert site.tzinfo == timezone(timedelta(hours=9))

    def test_dir_and_kind(self, site: Site) -> None:
        assert site.dir_for(ContentKind.BLOG) == site.blog_dir
        assert site.dir_for(ContentKind.PAGE) == site.pages_dir
        assert site.kind_for(site.blog_dir / "a.mdx") is ContentKind.BLOG
        assert site.kind_for(site.pages_dir / "a.mdx") is ContentKind.PAGE

    def test_resolve(self, site: Site) -> None:
        assert site.resolve("content/blog/a.mdx") == site.blog_dir / "a.mdx"
        assert site.resolve(Path("/abs/a.mdx")) == Path("/abs/a.mdx")


class TestCollectPosts:
    def test_reads_summaries(self, site: Site, site_root: Path) -> None:
        write_post(site_root, "hello", post_fields(categories=["Tech"], tags=["python", "cli"]))
        scan = site.collect_posts()
        assert scan.warnings == []
        (post,) = scan.posts
        assert post.slug == "hello"
        assert post.categories == ("Tech",)
        assert post.tags == ("python", "cli")
        assert post.date == datetime(2024, 1, 1, 9, 0, tzinfo=timezone(timedelta(hours=9)))

    def test_scalar_tag_and_empty_names(self, site: Site, site_root: Path) -> None:
        write_post(site_root, "a", post_fields(tags="solo", categories=["", None, "Real"]))
        (post,) = site.collect_posts().posts
        assert post.tags == ("solo",)
        assert post.categories == ("Real",)

    def test_names_kept_verbatim(self, site: Site, site_root: Path) -> None:
        write_post(site_root, "a", post_fields(tags=[" padded ", "python"]))
        (post,) = site.collect_posts().posts
        assert post.tags == (" padded ", "python")

    def test_missing_date(self, site: Site, site_root: Path) -> None:
        fields = post_fields()
        del fields["date"]
        write_post(site_root, "undated", fields)
        (post,) = site.collect_posts().posts
        assert post.date is None

    def test_unreadable_post_is_warning(self, site: Site, site_root: Path) -> None:
        write_post(site_root, "good")
        (site.blog_dir / "bad.mdx").write_text("---\ntags: [oops\n---\n", encoding="utf-8")
        scan = site.collect_posts()
        assert [p.slug for p in scan.posts] == ["good"]
        assert len(scan.warnings) == 1
        assert "bad.mdx" in scan.warnings[0]

    def test_pages_ignored(self, site: Site, site_root: Path) -> None:
        write_page(site_root, "about")
        assert site.collect_posts().posts == []

    def test_all_names(self, site: Site, site_root: Path) -> None:
        write_post(site_root, "a", post_fields(tags=["x", "y"], categories=["C"]))
        write_post(site_root, "b", post_fields(tags=["y", "z"], categories=["C", "D"]))
        scan = site.collect_posts()
        assert scan.all_tags() == {"x", "y", "z"}
        assert scan.all_categories() == {"C", "D"}


class TestHashIndex:
    def test_index_from_posts(self, site: Site, site_root: Path) -> None:
        write_post(site_root, "a", post_fields(tags=["python"], categories=["Tech"]))
        index = site.hash_index()
        assert index.tags.all_originals() == ["python"]
        assert index.categories.all_originals() == ["Tech"]


class TestMappingFiles:
    def test_open_missing(self, site: Site) -> None:
        assert site.open_tag_mapper().load.status is LoadStatus.MISSING
        assert site.open_category_mapper().load.status is LoadStatus.MISSING
        assert isinstance(site.open_blog_mapper().mapper, BlogIdMapper)

    def test_configured_test_markers(self, site_root: Path) -> None:
        (site_root / "blogctl.toml").write_text(
            '[ids]\ntest_markers = ["draft"]\n', encoding="utf-8"
        )
        site = Site(BlogSettings.from_cli(site_root=site_root))
        assert site.open_blog_mapper().mapper.test_markers == ("draft",)

    def test_save_and_registry(self, site: Site) -> None:
        tags = IdMapper("tag")
        tags.register("python")
        categories = IdMapper("category")
        categories.register("Tech")
        blog = BlogIdMapper()
        blog.register_all(["hello", "test-x"])

        written = site.save_mappers(tags=tags, categories=categories, blog=blog, now=NOW)
        assert all(path.exists() for path in written)

        registry = site.id_registry()
        assert registry.tag_id("python") == 1
        assert registry.category_id("Tech") == 1
        assert registry.post_id("test-x") == -1
        assert registry.post_slug(1) == "hello"

    def test_registry_requires_files(self, site: Site) -> None:
        with pytest.raises(MissingMappingFileError):
            site.id_registry()


def test_empty_tag_list(site: Site) -> None:
    path = site.blog_dir / "x.mdx"
    path.write_text(mdx({"title": "X", "tags": []}), encoding="utf-8")
    assert site.collect_posts().posts[0].tags == ()
