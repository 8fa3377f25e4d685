"""ValidateService: read-only front matter checks for every MDX file.

Run as a pre-commit or CI gate. Nothing is ever fixed here; the fix for
a stale ``contentHash`` is ``blogctl update-metadata``.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

from blogctl.domain.content import validate_frontmatter
from blogctl.domain.lifecycle import compute_content_state
from blogctl.infrastructure.filesystem import find_content_files, read_content_file
from blogctl.services.base import BaseService
from blogctl.services.result import ErrorCode, ServiceResult

logger = logging.getLogger(__name__)

_OP = "validate_content"


class ValidateService(BaseService):
    """Validates MDX front matter under a content root."""

    def validate(self, root: Path | str | None = None) -> ServiceResult:
        """Check every MDX file under *root* (default: the content root), recursively."""
        site = self._site
        content_root = site.resolve(root) if root is not None else site.content_root
        if not content_root.is_dir():
            return ServiceResult.fail(
                _OP,
                ErrorCode.CONTENT_DIR_NOT_FOUND,
                f"Content directory not found: {content_root}",
                path=str(content_root),
            )

        reports: list[dict[str, Any]] = []
        for path in find_content_files(content_root, extension=site.extension):
            reports.append(self._check_file(path))

        invalid = [r for r in reports if r["errors"]]
        data = {
            "root": str(content_root),
            "checked": len(reports),
            "valid": len(reports) - len(invalid),
            "invalid": len(invalid),
            "error_count": sum(len(r["errors"]) for r in invalid),
            "files": [r for r in reports if r["errors"] or r["warnings"]],
        }
        logger.debug("Validated %d file(s), %d invalid", len(reports), len(invalid))

        if invalid:
            return ServiceResult.fail(
                _OP,
                ErrorCode.VALIDATION_FAILED,
                f"{len(invalid)} of {len(reports)} file(s) have front matter errors",
                data=data,
            )
        return ServiceResult(ok=True, op=_OP, data=data)

    def _check_file(self, path: Path) -> dict[str, Any]:
        site = self._site
        shown = str(path.relative_to(site.root)) if path.is_relative_to(site.root) else str(path)
        kind = site.kind_for(path)
        report: dict[str, Any] = {
            "path": shown,
            "type": kind.value,
            "state": None,
            "errors": [],
            "warnings": [],
        }
        try:
            fm, body = read_content_file(path)
        except (OSError, UnicodeDecodeError, ValueError) as exc:
            report["errors"] = [f"Cannot read file: {exc}"]
            return report

        result = validate_frontmatter(fm, body, kind)
        report["state"] = compute_content_state(fm, body).value
        report["errors"] = list(result.errors)
        report["warnings"] = list(result.warnings)
        return report
