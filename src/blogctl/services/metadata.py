"""MetadataService: refresh contentHash, lastUpdated, dates and key order.

Pipeline per file: FILTER -> READ -> APPLY UPDATE RULE -> WRITE IF CHANGED

A file whose body hash already matches keeps its ``lastUpdated``, so
running the update twice in a row writes nothing the second time.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from pathlib import Path
from typing import Any

from blogctl.domain.content import apply_metadata_update
from blogctl.infrastructure.filesystem import (
    list_content_files,
    read_content_file,
    write_content_file,
)
from blogctl.services._helpers import now_iso
from blogctl.services.base import BaseService
from blogctl.services.result import ErrorCode, ServiceResult

logger = logging.getLogger(__name__)

_OP = "update_metadata"


class MetadataService(BaseService):
    """Applies the metadata update rule to MDX files."""

    def update_all(self) -> ServiceResult:
        """Update every post and page in the configured content directories."""
        site = self._site
        files = list_content_files(site.blog_dir, extension=site.extension)
        files += list_content_files(site.pages_dir, extension=site.extension)
        return self.update_files(files)

    def update_files(self, paths: Iterable[Path | str]) -> ServiceResult:
        """Update the given files; paths without the content extension are skipped."""
        site = self._site
        now = now_iso(site.utc_offset)

        updated: list[dict[str, Any]] = []
        unchanged: list[str] = []
        skipped: list[str] = []
        errors: list[dict[str, str]] = []

        for raw in paths:
            path = site.resolve(raw)
            if not path.name.endswith(site.extension):
                skipped.append(str(raw))
                continue

            try:
                fm, body = read_content_file(path)
            except (OSError, UnicodeDecodeError, ValueError) as exc:
                logger.debug("Cannot read %s", path, exc_info=True)
                errors.append({"path": str(raw), "error": str(exc)})
                continue

            kind = site.kind_for(path)
            update = apply_metadata_update(fm, body, kind, now=now, utc_offset=site.utc_offset)
            if not update.changed:
                unchanged.append(str(raw))
                continue

            try:
                write_content_file(path, update.frontmatter, body, kind)
            except OSError as exc:
                errors.append({"path": str(raw), "error": str(exc)})
                continue
            logger.debug("Updated %s: %s", path, update.fields_changed)
            updated.append(
                {
                    "path": str(raw),
                    "fields": update.fields_changed,
                    "reordered": update.reordered,
                }
            )

        data = {
            "updated": updated,
            "unchanged": unchanged,
            "skipped": skipped,
            "errors": errors,
            "count": len(updated),
            "total": len(updated) + len(unchanged) + len(skipped) + len(errors),
        }
        if errors:
            return ServiceResult.fail(
                _OP,
                ErrorCode.UPDATE_FAILED,
                f"{len(errors)} file(s) could not be updated",
                data=data,
                paths=[e["path"] for e in errors],
            )
        return ServiceResult(ok=True, op=_OP, data=data)
