"""JSON persistence for ID mapping files (tag-ids.json, category-ids.json, blog-ids.json).

File shape::

    {
      "nextId": 4,
      "nextTestId": -2,          # blog-ids.json only
      "mappings": {"hello-world": 1, ...},
      "lastUpdated": "2026-10-19T01:02:03.456Z",
      "note": "..."
    }

Two ways to open a file:

- :func:`open_id_mapper` / :func:`open_blog_id_mapper` (allocation side):
  never fail on content. A missing file gives a fresh mapper; a corrupt
  one gives a fresh mapper tagged ``RECOVERED_EMPTY`` plus a warning
  log. Every previously issued ID in that file is gone, so callers must
  surface the status.
- :func:`open_strict` (lookup side, used during page generation):
  raises :class:`MissingMappingFileError` / :class:`MalformedMappingFileError`.

Each save is a single ``write_text`` of the full state.
"""

from __future__ import annotations

import json
from dataclasses import dataclass
from enum import StrEnum
from pathlib import Path
from typing import Any, Generic, TypeVar

import structlog
from pydantic import BaseModel, Field, StrictInt, ValidationError

from blogctl.domain.ids import (
    DEFAULT_TEST_MARKERS,
    FIRST_ID,
    FIRST_TEST_ID,
    BlogIdMapper,
    IdMapper,
)

log = structlog.get_logger(__name__)

TAG_NOTE = "Tag ID mappings"
CATEGORY_NOTE = "Category ID mappings"
BLOG_NOTE = "Positive IDs: regular posts, negative IDs: test/experimental posts"


class MissingMappingFileError(FileNotFoundError):
    """A lookup needed a mapping file that has not been generated yet."""

    def __init__(self, path: Path) -> None:
        self.path = path
        super().__init__(
            f"ID mapping file not found: {path}. Run 'blogctl generate-ids' first."
        )


class MalformedMappingFileError(ValueError):
    """A mapping file exists but is not a valid mapping record."""

    def __init__(self, path: Path, reason: str) -> None:
        self.path = path
        self.reason = reason
        super().__init__(f"ID mapping file is malformed: {path}: {reason}")


# ---------------------------------------------------------------------------
# Record schema
# ---------------------------------------------------------------------------


class IdMappingRecord(BaseModel):
    """Schema check for a loaded mapping file. Unknown keys are ignored."""

    model_config = {"frozen": True, "populate_by_name": True}

    next_id: StrictInt | None = Field(default=None, alias="nextId")
    mappings: dict[str, StrictInt] | None = None
    last_updated: str | None = Field(default=None, alias="lastUpdated")
    note: str | None = None


class BlogIdMappingRecord(IdMappingRecord):
    next_test_id: StrictInt | None = Field(default=None, alias="nextTestId")


# ---------------------------------------------------------------------------
# Load outcome
# ---------------------------------------------------------------------------


class LoadStatus(StrEnum):
    """How a mapping file was opened."""

    LOADED = "loaded"
    MISSING = "missing"
    RECOVERED_EMPTY = "recovered_empty"


@dataclass(frozen=True)
class MappingLoad:
    path: Path
    status: LoadStatus
    error: str | None = None

    @property
    def data_lost(self) -> bool:
        return self.status is LoadStatus.RECOVERED_EMPTY


M = TypeVar("M", bound=IdMapper)


@dataclass(frozen=True)
class OpenedMapper(Generic[M]):
    """A mapper together with how its file was loaded."""

    mapper: M
    load: MappingLoad


def _read_record(path: Path, record_cls: type[IdMappingRecord]) -> IdMappingRecord:
    """Parse and validate *path*.

    Raises:
        OSError: If the file cannot be read.
        MalformedMappingFileError: If the content is not a valid record.
    """
    raw = path.read_bytes()
    try:
        data = json.loads(raw.decode("utf-8"))
    except UnicodeDecodeError as exc:
        raise MalformedMappingFileError(path, f"not UTF-8: {exc}") from exc
    except json.JSONDecodeError as exc:
        raise MalformedMappingFileError(path, f"invalid JSON: {exc}") from exc
    try:
        return record_cls.model_validate(data)
    except ValidationError as exc:
        reason = f"{exc.error_count()} schema error(s): {exc.errors()[0]['msg']}"
        raise MalformedMappingFileError(path, reason) from exc


def _load(path: Path, record_cls: type[IdMappingRecord]) -> tuple[IdMappingRecord, MappingLoad]:
    if not path.exists():
        return record_cls(), MappingLoad(path=path, status=LoadStatus.MISSING)
    try:
        record = _read_record(path, record_cls)
    except MalformedMappingFileError as exc:
        log.warning(
            "mapping_file.recovered_empty",
            path=str(path),
            reason=exc.reason,
            hint="previously issued IDs in this file are lost; restore it from version control",
        )
        return record_cls(), MappingLoad(
            path=path, status=LoadStatus.RECOVERED_EMPTY, error=exc.reason
        )
    return record, MappingLoad(path=path, status=LoadStatus.LOADED)


def _note_counter_repair(path: Path, name: str, stored: int | None, effective: int) -> None:
    if stored is not None and stored != effective:
        log.debug("mapping_file.counter_repaired", path=str(path), counter=name,
                  stored=stored, effective=effective)


def _build_id_mapper(path: Path, item_type: str, record: IdMappingRecord) -> IdMapper:
    mapper = IdMapper(item_type, mappings=record.mappings, next_id=record.next_id or FIRST_ID)
    _note_counter_repair(path, "nextId", record.next_id, mapper.next_id)
    return mapper


def _build_blog_mapper(
    path: Path, record: BlogIdMappingRecord, test_markers: tuple[str, ...]
) -> BlogIdMapper:
    mapper = BlogIdMapper(
        mappings=record.mappings,
        next_id=record.next_id or FIRST_ID,
        next_test_id=record.next_test_id or FIRST_TEST_ID,
        test_markers=test_markers,
    )
    _note_counter_repair(path, "nextId", record.next_id, mapper.next_id)
    _note_counter_repair(path, "nextTestId", record.next_test_id, mapper.next_test_id)
    return mapper


# ---------------------------------------------------------------------------
# Factories
# ---------------------------------------------------------------------------


def open_id_mapper(path: Path, item_type: str) -> OpenedMapper[IdMapper]:
    """Load a tag/category mapper for allocation. Never raises on bad content."""
    record, load = _load(path, IdMappingRecord)
    return OpenedMapper(mapper=_build_id_mapper(path, item_type, record), load=load)


def open_blog_id_mapper(
    path: Path,
    *,
    test_markers: tuple[str, ...] = DEFAULT_TEST_MARKERS,
) -> OpenedMapper[BlogIdMapper]:
    """Load the blog mapper for allocation. Never raises on bad content."""
    record, load = _load(path, BlogIdMappingRecord)
    assert isinstance(record, BlogIdMappingRecord)
    return OpenedMapper(mapper=_build_blog_mapper(path, record, test_markers), load=load)


def open_strict(path: Path, item_type: str) -> IdMapper:
    """Load a mapper for lookups; the file must exist and be valid.

    ``item_type == "blog"`` returns a :class:`BlogIdMapper`.

    Raises:
        MissingMappingFileError: If *path* does not exist.
        MalformedMappingFileError: If *path* is not a valid record.
    """
    if not path.exists():
        raise MissingMappingFileError(path)
    if item_type == "blog":
        record = _read_record(path, BlogIdMappingRecord)
        assert isinstance(record, BlogIdMappingRecord)
        return _build_blog_mapper(path, record, DEFAULT_TEST_MARKERS)
    return _build_id_mapper(path, item_type, _read_record(path, IdMappingRecord))


# ---------------------------------------------------------------------------
# Save
# ---------------------------------------------------------------------------


def serialize_mapper(mapper: IdMapper, *, note: str, now: str) -> dict[str, Any]:
    """Full on-disk payload for *mapper*, keys in file order."""
    payload: dict[str, Any] = {"nextId": mapper.next_id}
    if isinstance(mapper, BlogIdMapper):
        payload["nextTestId"] = mapper.next_test_id
    payload["mappings"] = mapper.mappings
    payload["lastUpdated"] = now
    payload["note"] = note
    return payload


def save_mapper(path: Path, mapper: IdMapper, *, note: str, now: str) -> None:
    """Overwrite *path* with the full state of *mapper* in one write."""
    path.parent.mkdir(parents=True, exist_ok=True)
    payload = serialize_mapper(mapper, note=note, now=now)
    path.write_text(json.dumps(payload, indent=2, ensure_ascii=False) + "\n", encoding="utf-8")


# ---------------------------------------------------------------------------
# Strict lookup registry
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class MappingRegistry:
    """Read-only view of all three mapping files for page generation.

    ``get_id`` on any mapper is a "must exist" lookup; the ``lookup_*``
    and ``get_name`` methods return None for unknown keys.
    """

    tags: IdMapper
    categories: IdMapper
    blog: BlogIdMapper

    def tag_id(self, name: str) -> int:
        return self.tags.get_id(name)

    def category_id(self, name: str) -> int:
        return self.categories.get_id(name)

    def post_id(self, slug: str) -> int:
        return self.blog.get_id(slug)

    def post_slug(self, post_id: int) -> str | None:
        return self.blog.get_name(post_id)
