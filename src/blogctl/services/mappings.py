"""MappingsService: the static JSON lookup tables the site publishes.

Three payloads, one per op:

- ``mappings_ids``: tag and category ID <-> name tables.
- ``mappings_blog``: blog ID <-> slug tables, split into regular/test.
- ``mappings_hashes``: tag and category hash -> name tables.

The ID payloads read the mapping files strictly (they must have been
generated); the hash payload is rebuilt from the current posts.
"""

from __future__ import annotations

import json
from collections.abc import Callable
from pathlib import Path
from typing import Any

from blogctl.domain.hashing import HashMapper
from blogctl.domain.ids import IdMapper
from blogctl.infrastructure.mapping_store import (
    BLOG_NOTE,
    MalformedMappingFileError,
    MappingRegistry,
    MissingMappingFileError,
)
from blogctl.services.base import BaseService
from blogctl.services.result import ErrorCode, ServiceResult


def _id_table(mapper: IdMapper, noun: str) -> dict[str, Any]:
    """``{"ids": [...], "idTo<Noun>": {...}, "<noun>ToId": {...}}``."""
    ids = mapper.all_ids()
    id_to_name = {str(i): mapper.get_name(i) for i in ids}
    return {
        "ids": ids,
        f"idTo{noun.capitalize()}": id_to_name,
        f"{noun}ToId": {name: int(i) for i, name in id_to_name.items()},
    }


def _hash_table(mapper: HashMapper) -> dict[str, str]:
    table: dict[str, str] = {}
    for digest in mapper.all_hashes():
        name = mapper.get_original(digest)
        if name is not None:
            table[digest] = name
    return table


def build_ids_payload(registry: MappingRegistry) -> dict[str, Any]:
    return {
        "categories": _id_table(registry.categories, "category"),
        "tags": _id_table(registry.tags, "tag"),
    }


def build_blog_payload(registry: MappingRegistry) -> dict[str, Any]:
    blog = registry.blog
    all_ids = blog.all_ids()
    id_to_slug = {str(i): blog.get_name(i) for i in all_ids}
    regular = blog.regular_ids()
    test = blog.test_ids()
    return {
        "all": {
            "ids": all_ids,
            "idToSlug": id_to_slug,
            "slugToId": {slug: int(i) for i, slug in id_to_slug.items()},
        },
        "regular": {"ids": regular, "count": len(regular)},
        "test": {"ids": test, "count": len(test)},
        "note": BLOG_NOTE,
    }


class MappingsService(BaseService):
    """Builds (and optionally writes) the published mapping payloads."""

    def ids(self, *, output: Path | str | None = None) -> ServiceResult:
        return self._from_registry("mappings_ids", build_ids_payload, output)

    def blog(self, *, output: Path | str | None = None) -> ServiceResult:
        return self._from_registry("mappings_blog", build_blog_payload, output)

    def hashes(self, *, output: Path | str | None = None) -> ServiceResult:
        scan = self._site.collect_posts()
        index = self._site.hash_index(scan)
        categories = _hash_table(index.categories)
        tags = _hash_table(index.tags)
        payload = {
            "categories": categories,
            "tags": tags,
            "categoryHashes": list(categories),
            "tagHashes": list(tags),
        }
        return self._respond("mappings_hashes", payload, output, warnings=scan.warnings)

    # ------------------------------------------------------------------

    def _from_registry(
        self,
        op: str,
        build: Callable[[MappingRegistry], dict[str, Any]],
        output: Path | str | None,
    ) -> ServiceResult:
        try:
            registry = self._site.id_registry()
        except MissingMappingFileError as exc:
            return ServiceResult.fail(op, ErrorCode.MAPPINGS_MISSING, str(exc), path=str(exc.path))
        except MalformedMappingFileError as exc:
            return ServiceResult.fail(op, ErrorCode.READ_FAILED, str(exc), path=str(exc.path))
        except OSError as exc:
            msg = f"Cannot read mapping files: {exc}"
            return ServiceResult.fail(op, ErrorCode.READ_FAILED, msg)
        return self._respond(op, build(registry), output)

    def _respond(
        self,
        op: str,
        payload: dict[str, Any],
        output: Path | str | None,
        *,
        warnings: list[str] | None = None,
    ) -> ServiceResult:
        written: str | None = None
        if output is not None:
            path = self._site.resolve(output)
            try:
                path.parent.mkdir(parents=True, exist_ok=True)
                path.write_text(
                    json.dumps(payload, indent=2, ensure_ascii=False) + "\n", encoding="utf-8"
                )
            except OSError as exc:
                return ServiceResult.fail(op, ErrorCode.WRITE_FAILED, f"Cannot write {path}: {exc}")
            written = str(path)
        return ServiceResult(
            ok=True,
            op=op,
            data={"payload": payload, "output": written},
            warnings=warnings or [],
        )
