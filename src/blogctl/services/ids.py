"""IdService: assign permanent IDs to tags, categories and blog posts.

Pipeline: SCAN POSTS -> OPEN MAPPERS -> REGISTER (frozen order) -> SAVE -> RESPOND

Each run loads every mapping file once, registers in memory, then
writes each file once. Existing IDs are never changed.
"""

from __future__ import annotations

import logging
from typing import Any

from blogctl.domain.ids import (
    IdMapper,
    sort_names_for_registration,
    sort_posts_for_registration,
)
from blogctl.infrastructure.mapping_store import LoadStatus, OpenedMapper
from blogctl.services._helpers import now_utc_iso
from blogctl.services.base import BaseService
from blogctl.services.result import ErrorCode, ServiceResult

logger = logging.getLogger(__name__)

_OP = "generate_ids"


def _register_new(mapper: IdMapper, keys: list[str]) -> dict[str, int]:
    """Register *keys* in order and return only the newly assigned IDs."""
    fresh = [key for key in keys if key not in mapper]
    mapper.register_all(keys)
    return {key: mapper.get_id(key) for key in fresh}


def _load_warning(label: str, opened: OpenedMapper[Any]) -> str | None:
    if opened.load.status is not LoadStatus.RECOVERED_EMPTY:
        return None
    return (
        f"{label} mapping file {opened.load.path} was unreadable ({opened.load.error}); "
        "started from an empty mapping. Previously published IDs may have been reassigned; "
        "restore the file from version control and rerun"
    )


class IdService(BaseService):
    """Generates and persists the ID mapping files."""

    def generate(self) -> ServiceResult:
        site = self._site
        warnings: list[str] = []

        if not site.blog_dir.is_dir():
            warnings.append(f"Blog content directory not found: {site.blog_dir}")

        scan = site.collect_posts()
        warnings.extend(scan.warnings)

        tags = site.open_tag_mapper()
        categories = site.open_category_mapper()
        blog = site.open_blog_mapper()
        opened = {"tags": tags, "categories": categories, "blog": blog}
        for label, entry in opened.items():
            message = _load_warning(label, entry)
            if message:
                warnings.append(message)

        assigned = {
            "tags": _register_new(tags.mapper, sort_names_for_registration(scan.all_tags())),
            "categories": _register_new(
                categories.mapper, sort_names_for_registration(scan.all_categories())
            ),
            "blog": _register_new(
                blog.mapper,
                sort_posts_for_registration(
                    (post.slug, post.date) for post in scan.posts
                ),
            ),
        }
        logger.debug(
            "Registered %d tag(s), %d categor(ies), %d post(s)",
            len(assigned["tags"]),
            len(assigned["categories"]),
            len(assigned["blog"]),
        )

        try:
            written = site.save_mappers(
                tags=tags.mapper,
                categories=categories.mapper,
                blog=blog.mapper,
                now=now_utc_iso(),
            )
        except OSError as exc:
            return ServiceResult.fail(
                _OP,
                ErrorCode.WRITE_FAILED,
                f"Cannot write mapping files: {exc}",
                warnings=warnings,
            )

        return ServiceResult(
            ok=True,
            op=_OP,
            data={
                "posts": len(scan.posts),
                "tags": len(scan.all_tags()),
                "categories": len(scan.all_categories()),
                "assigned": assigned,
                "stats": {label: entry.mapper.stats() for label, entry in opened.items()},
                "files": [str(path) for path in written],
                "loads": {label: entry.load.status.value for label, entry in opened.items()},
                "recovered": [
                    str(entry.load.path) for entry in opened.values() if entry.load.data_lost
                ],
            },
            warnings=warnings,
        )
