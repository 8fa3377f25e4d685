"""Site: the single context object injected into every service.

A Site owns path resolution for one blog checkout (content directories,
mapping files) and the factories that open mappers and build hash
indexes from the current content. There is no shared state between
Site instances and nothing is cached at module level.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import datetime, timezone
from pathlib import Path
from typing import TYPE_CHECKING, Any

from blogctl.domain.content import ContentKind, parse_post_date, parse_utc_offset
from blogctl.domain.hashing import HashIndex, HashMapper
from blogctl.domain.ids import BlogIdMapper, IdMapper
from blogctl.infrastructure.filesystem import (
    kind_for,
    list_content_files,
    read_content_file,
    slug_for,
)
from blogctl.infrastructure.mapping_store import (
    BLOG_NOTE,
    CATEGORY_NOTE,
    TAG_NOTE,
    MappingRegistry,
    OpenedMapper,
    open_blog_id_mapper,
    open_id_mapper,
    open_strict,
    save_mapper,
)

if TYPE_CHECKING:
    from blogctl.config.settings import BlogSettings

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PostSummary:
    """The front matter fields ID generation needs from one blog post."""

    slug: str
    path: Path
    date: datetime | None
    categories: tuple[str, ...] = ()
    tags: tuple[str, ...] = ()


@dataclass(frozen=True)
class PostScan:
    """Readable posts plus one warning per post that could not be read."""

    posts: list[PostSummary] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)

    def all_tags(self) -> set[str]:
        return {tag for post in self.posts for tag in post.tags}

    def all_categories(self) -> set[str]:
        return {cat for post in self.posts for cat in post.categories}


def _name_list(value: Any) -> tuple[str, ...]:
    """Tag/category names from a front matter value, verbatim; empty strings dropped."""
    if value is None:
        return ()
    items = [value] if isinstance(value, str) else value
    if not isinstance(items, list):
        return ()
    return tuple(str(item) for item in items if item is not None and str(item) != "")


class Site:
    """Paths and mapping-file access for one blog checkout."""

    def __init__(self, settings: BlogSettings) -> None:
        self._settings = settings
        self._root = settings.site_root.resolve()

    @property
    def settings(self) -> BlogSettings:
        return self._settings

    @property
    def root(self) -> Path:
        return self._root

    # --- Paths ---

    @property
    def extension(self) -> str:
        return self._settings.content.extension

    @property
    def content_root(self) -> Path:
        return self._root / self._settings.content.root

    @property
    def blog_dir(self) -> Path:
        return self._root / self._settings.content.blog_dir

    @property
    def pages_dir(self) -> Path:
        return self._root / self._settings.content.pages_dir

    @property
    def data_dir(self) -> Path:
        return self._root / self._settings.ids.data_dir

    @property
    def tag_mapping_path(self) -> Path:
        return self.data_dir / self._settings.ids.tag_file

    @property
    def category_mapping_path(self) -> Path:
        return self.data_dir / self._settings.ids.category_file

    @property
    def blog_mapping_path(self) -> Path:
        return self.data_dir / self._settings.ids.blog_file

    @property
    def utc_offset(self) -> str:
        return self._settings.metadata.utc_offset

    @property
    def tzinfo(self) -> timezone:
        return parse_utc_offset(self.utc_offset)

    def dir_for(self, kind: ContentKind) -> Path:
        return self.blog_dir if kind is ContentKind.BLOG else self.pages_dir

    def kind_for(self, path: Path) -> ContentKind:
        return kind_for(path, self.blog_dir)

    def resolve(self, path: Path | str) -> Path:
        """Make *path* absolute, relative paths taken from the site root."""
        p = Path(path)
        return p if p.is_absolute() else self._root / p

    # --- Content scan ---

    def blog_files(self) -> list[Path]:
        return list_content_files(self.blog_dir, extension=self.extension)

    def collect_posts(self) -> PostScan:
        """Read slug, date, categories and tags of every blog post.

        Posts that cannot be read or parsed are skipped with a warning.
        """
        tz = self.tzinfo
        posts: list[PostSummary] = []
        warnings: list[str] = []
        for path in self.blog_files():
            try:
                fm, _body = read_content_file(path)
            except (OSError, UnicodeDecodeError, ValueError) as exc:
                logger.warning("Skipping unreadable post %s: %s", path, exc)
                warnings.append(f"Skipped unreadable post {path.name}: {exc}")
                continue
            posts.append(
                PostSummary(
                    slug=slug_for(path, extension=self.extension),
                    path=path,
                    date=parse_post_date(fm.get("date"), tz),
                    categories=_name_list(fm.get("categories")),
                    tags=_name_list(fm.get("tags")),
                )
            )
        return PostScan(posts=posts, warnings=warnings)

    def hash_index(self, scan: PostScan | None = None) -> HashIndex:
        """Hash mappers primed with every tag and category in use."""
        scan = scan if scan is not None else self.collect_posts()
        return HashIndex(
            tags=HashMapper.from_names(sorted(scan.all_tags())),
            categories=HashMapper.from_names(sorted(scan.all_categories())),
        )

    # --- Mapping files ---

    def open_tag_mapper(self) -> OpenedMapper[IdMapper]:
        return open_id_mapper(self.tag_mapping_path, "tag")

    def open_category_mapper(self) -> OpenedMapper[IdMapper]:
        return open_id_mapper(self.category_mapping_path, "category")

    def open_blog_mapper(self) -> OpenedMapper[BlogIdMapper]:
        return open_blog_id_mapper(
            self.blog_mapping_path,
            test_markers=tuple(self._settings.ids.test_markers),
        )

    def save_mappers(
        self,
        *,
        tags: IdMapper,
        categories: IdMapper,
        blog: BlogIdMapper,
        now: str,
    ) -> list[Path]:
        """Write all three mapping files. Returns the paths written."""
        written = [
            (self.tag_mapping_path, tags, TAG_NOTE),
            (self.category_mapping_path, categories, CATEGORY_NOTE),
            (self.blog_mapping_path, blog, BLOG_NOTE),
        ]
        for path, mapper, note in written:
            save_mapper(path, mapper, note=note, now=now)
        return [path for path, _, _ in written]

    def id_registry(self) -> MappingRegistry:
        """Strict read-only view of the three mapping files.

        Raises:
            MissingMappingFileError: If any file has not been generated.
            MalformedMappingFileError: If any file is corrupt.
        """
        blog = open_strict(self.blog_mapping_path, "blog")
        assert isinstance(blog, BlogIdMapper)
        return MappingRegistry(
            tags=open_strict(self.tag_mapping_path, "tag"),
            categories=open_strict(self.category_mapping_path, "category"),
            blog=blog,
        )
