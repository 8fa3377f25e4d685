"""CreateService: scaffold a new blog post or page.

Pipeline: VALIDATE -> RENDER BODY -> BUILD FRONT MATTER -> WRITE -> RESPOND

The new file is born in the ``updated`` state: ``contentHash`` already
matches the template body, so ``validate-content`` only flags the
placeholder fields the author still has to fill in.
"""

from __future__ import annotations

import logging

from pydantic import ValidationError

from blogctl.domain.content import ContentKind
from blogctl.domain.frontmatter import FRONTMATTER_MODELS
from blogctl.domain.hashing import compute_content_hash
from blogctl.domain.ids import generate_slug
from blogctl.infrastructure.filesystem import resolve_content_path, write_content_file
from blogctl.infrastructure.templates import render_body
from blogctl.services._helpers import now_iso
from blogctl.services.base import BaseService
from blogctl.services.result import ErrorCode, ServiceResult

logger = logging.getLogger(__name__)

_OP = "create_content"


def default_excerpt(title: str) -> str:
    return f"An article about {title}"


class CreateService(BaseService):
    """Creates new content files from templates."""

    def create_content(
        self,
        kind: str,
        *,
        title: str | None = None,
        slug: str | None = None,
        description: str = "",
        excerpt: str | None = None,
        categories: list[str] | None = None,
        tags: list[str] | None = None,
    ) -> ServiceResult:
        """Write ``{blog_dir|pages_dir}/{slug}.mdx`` with starter front matter.

        The slug defaults to one derived from *title*; the title defaults
        to the slug. Existing files are never overwritten.
        """
        try:
            content_kind = ContentKind(kind)
        except ValueError:
            return ServiceResult.fail(
                _OP,
                ErrorCode.INVALID_TYPE,
                f"Unknown content type {kind!r} (expected 'blog' or 'page')",
            )

        title = (title or "").strip()
        slug = (slug or "").strip() or generate_slug(title)
        if not slug:
            return ServiceResult.fail(
                _OP,
                ErrorCode.INVALID_SLUG,
                "Could not derive a slug; pass --slug or a title with ASCII letters or digits",
                title=title,
            )
        title = title or slug

        site = self._site
        try:
            path = resolve_content_path(site.dir_for(content_kind), slug, extension=site.extension)
        except ValueError as exc:
            return ServiceResult.fail(_OP, ErrorCode.INVALID_SLUG, str(exc), slug=slug)

        if path.exists():
            return ServiceResult.fail(
                _OP,
                ErrorCode.ALREADY_EXISTS,
                f"File already exists: {path}",
                path=str(path),
            )

        body = render_body(content_kind, site_root=site.root, title=title)
        now = now_iso(site.utc_offset)
        fields: dict[str, object] = {
            "title": title,
            "description": description,
            "lastUpdated": now,
            "contentHash": compute_content_hash(body),
        }
        if content_kind is ContentKind.BLOG:
            fields.update(
                date=now,
                excerpt=excerpt or default_excerpt(title),
                categories=categories or [],
                tags=tags or [],
            )
        try:
            model = FRONTMATTER_MODELS[content_kind].model_validate(fields)
        except ValidationError as exc:
            return ServiceResult.fail(_OP, ErrorCode.WRITE_FAILED, str(exc), slug=slug)

        try:
            write_content_file(path, model.to_frontmatter(), body, content_kind)
        except OSError as exc:
            logger.debug("Create failed for %s", path, exc_info=True)
            return ServiceResult.fail(_OP, ErrorCode.WRITE_FAILED, f"Cannot write {path}: {exc}")

        warnings: list[str] = []
        if not description:
            warnings.append(f"{path.name}: description is empty; fill it in before committing")

        return ServiceResult(
            ok=True,
            op=_OP,
            data={
                "path": str(path),
                "slug": slug,
                "type": content_kind.value,
                "title": title,
                "content_hash": model.content_hash,
            },
            warnings=warnings,
        )
