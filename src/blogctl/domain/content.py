"""Front matter parsing, canonical ordering, validation, and the update rule.

Two content kinds share one file format (YAML front matter between
``---`` lines, followed by an MDX body):

- ``blog``: posts under ``content/blog``.
- ``page``: standalone pages under ``content/pages``.

Canonical key order is the kind's required-field order, followed by any
extra keys in their original relative order. Reordering never drops or
changes a value.

INVARIANT: ``contentHash`` equals SHA-256 of the body (everything after
the closing ``---`` line). A mismatch means the body was edited without
running the metadata update.

Everything here is pure: callers read and write files and pass "now".
"""

from __future__ import annotations

import re
from collections.abc import Mapping
from dataclasses import dataclass, field
from datetime import date, datetime, timedelta, timezone
from enum import StrEnum
from io import StringIO
from typing import Any

from ruamel.yaml import YAML
from ruamel.yaml.comments import CommentedMap
from ruamel.yaml.error import YAMLError
from ruamel.yaml.scalarstring import DoubleQuotedScalarString

from blogctl.domain.hashing import compute_content_hash

# ---------------------------------------------------------------------------
# YAML parser (round-trip preserves quote styles and flow sequences)
# ---------------------------------------------------------------------------


def _new_yaml() -> YAML:
    """Create a fresh round-trip YAML parser.

    ruamel.yaml's YAML object keeps emitter state between calls, so each
    operation gets its own instance.
    """
    y = YAML()
    y.preserve_quotes = True
    y.default_flow_style = False
    y.width = 4096
    return y


# ---------------------------------------------------------------------------
# Content kinds and required fields
# ---------------------------------------------------------------------------


class ContentKind(StrEnum):
    """Which rule set a content file follows."""

    BLOG = "blog"
    PAGE = "page"


BLOG_REQUIRED_FIELDS: tuple[str, ...] = (
    "title",
    "date",
    "description",
    "excerpt",
    "categories",
    "tags",
    "lastUpdated",
    "contentHash",
)

PAGE_REQUIRED_FIELDS: tuple[str, ...] = (
    "title",
    "description",
    "lastUpdated",
    "contentHash",
)

REQUIRED_FIELDS: dict[ContentKind, tuple[str, ...]] = {
    ContentKind.BLOG: BLOG_REQUIRED_FIELDS,
    ContentKind.PAGE: PAGE_REQUIRED_FIELDS,
}

_TIMESTAMP_FIELDS: dict[ContentKind, tuple[str, ...]] = {
    ContentKind.BLOG: ("date", "lastUpdated"),
    ContentKind.PAGE: ("lastUpdated",),
}

_LIST_FIELDS: dict[ContentKind, tuple[str, ...]] = {
    ContentKind.BLOG: ("categories", "tags"),
    ContentKind.PAGE: (),
}

_FRONTMATTER_DELIMITER = "---"


class FrontmatterError(ValueError):
    """The front matter block is not valid YAML or not a mapping."""


# YYYY-MM-DDTHH:MM:SS[.mmm]+HH:MM
ISO_WITH_TIMEZONE = re.compile(
    r"^\d{4}-\d{2}-\d{2}T\d{2}:\d{2}:\d{2}(\.\d{3})?[+-]\d{2}:\d{2}$", re.ASCII
)
_DATE_ONLY = re.compile(r"^\d{4}-\d{2}-\d{2}$", re.ASCII)


# ---------------------------------------------------------------------------
# Validation result
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class ValidationResult:
    """Result of a content validation check."""

    valid: bool
    errors: list[str] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)


# ---------------------------------------------------------------------------
# Pure parsing / rendering utilities
# ---------------------------------------------------------------------------


def parse_frontmatter(content: str) -> tuple[dict[str, Any], str]:
    """Parse YAML front matter and body from MDX content.

    Expects the file to start with ``---`` on the first line. The second
    ``---`` closes the YAML block. Everything after that line is the body,
    byte for byte (apart from ``\\r\\n`` -> ``\\n``).

    Returns:
        A ``(frontmatter, body)`` tuple. If no valid delimiters are found,
        returns ``({}, content)``.

    Raises:
        FrontmatterError: If the YAML block does not parse or is not a mapping.
    """
    normalized = content.replace("\r\n", "\n")
    lines = normalized.split("\n")
    if not lines or lines[0].strip() != _FRONTMATTER_DELIMITER:
        return {}, content

    end_idx: int | None = None
    for i, line in enumerate(lines[1:], start=1):
        if line.strip() == _FRONTMATTER_DELIMITER:
            end_idx = i
            break

    if end_idx is None:
        return {}, content

    yaml_block = "\n".join(lines[1:end_idx])
    body = "\n".join(lines[end_idx + 1 :])

    try:
        fm = _new_yaml().load(yaml_block) or {}
    except YAMLError as exc:
        msg = f"Invalid YAML front matter: {exc}"
        raise FrontmatterError(msg) from exc
    if not isinstance(fm, Mapping):
        msg = f"Front matter must be a mapping, got {type(fm).__name__}"
        raise FrontmatterError(msg)
    return fm, body


def order_frontmatter(fm: Mapping[str, Any], kind: ContentKind) -> dict[str, Any]:
    """Return *fm* with keys in canonical order for *kind*.

    Required fields come first in their declared order, then every other
    key in the order it already had.
    """
    required = REQUIRED_FIELDS[kind]
    ordered: dict[str, Any] = {key: fm[key] for key in required if key in fm}
    for key, value in fm.items():
        if key not in ordered:
            ordered[key] = value
    return ordered


def is_canonical_order(fm: Mapping[str, Any], kind: ContentKind) -> bool:
    return list(fm) == list(order_frontmatter(fm, kind))


def _quoted(value: Any) -> Any:
    """Double-quote plain strings so dates and hashes stay strings on reload.

    Values loaded from a file (ruamel scalar strings, commented sequences)
    keep their original style.
    """
    if type(value) is str:
        return DoubleQuotedScalarString(value)
    if type(value) is list:
        return [_quoted(item) for item in value]
    return value


def render_frontmatter(frontmatter: Mapping[str, Any], body: str, kind: ContentKind) -> str:
    """Render front matter and body into MDX text, keys in canonical order."""
    # A plain dict would be key-sorted by the emitter; CommentedMap keeps order.
    ordered = CommentedMap()
    for key, value in order_frontmatter(frontmatter, kind).items():
        ordered[key] = _quoted(value)

    yaml_text = ""
    if ordered:
        buf = StringIO()
        _new_yaml().dump(ordered, buf)
        yaml_text = buf.getvalue()

    return "".join([_FRONTMATTER_DELIMITER, "\n", yaml_text, _FRONTMATTER_DELIMITER, "\n", body])


# ---------------------------------------------------------------------------
# Dates
# ---------------------------------------------------------------------------


def is_iso_with_timezone(value: object) -> bool:
    """True for ``YYYY-MM-DDTHH:MM:SS[.mmm]±HH:MM`` strings."""
    return isinstance(value, str) and ISO_WITH_TIMEZONE.fullmatch(value) is not None


def parse_utc_offset(offset: str) -> timezone:
    """Parse ``+09:00`` / ``-05:30`` into a fixed-offset timezone.

    Raises:
        ValueError: If *offset* is not a valid offset string.
    """
    match = re.fullmatch(r"([+-])(\d{2}):(\d{2})", offset)
    if match is None:
        msg = f"Invalid UTC offset: {offset!r} (expected +HH:MM)"
        raise ValueError(msg)
    sign, hours, minutes = match.groups()
    delta = timedelta(hours=int(hours), minutes=int(minutes))
    return timezone(-delta if sign == "-" else delta)


def format_timestamp(moment: datetime) -> str:
    """Format an aware datetime as ``YYYY-MM-DDTHH:MM:SS±HH:MM``."""
    if moment.tzinfo is None:
        msg = "Timestamp must be timezone-aware"
        raise ValueError(msg)
    return moment.replace(microsecond=0).isoformat()


def expand_date(value: str, utc_offset: str) -> str:
    """Expand a bare ``YYYY-MM-DD`` to midnight at *utc_offset*.

    Any other value is returned unchanged.
    """
    if _DATE_ONLY.fullmatch(value):
        return f"{value}T00:00:00{utc_offset}"
    return value


def parse_post_date(value: object, default_tz: timezone) -> datetime | None:
    """Best-effort timezone-aware datetime for a front matter ``date``.

    Accepts ISO strings (with or without offset), bare dates, and the
    datetime/date objects YAML produces for unquoted timestamps. Naive
    values are placed in *default_tz*. Returns None when unusable.
    """
    moment: datetime
    if isinstance(value, datetime):
        moment = value
    elif isinstance(value, date):
        moment = datetime(value.year, value.month, value.day)
    elif isinstance(value, str) and value.strip():
        try:
            moment = datetime.fromisoformat(value.strip())
        except ValueError:
            return None
    else:
        return None

    if moment.tzinfo is None:
        moment = moment.replace(tzinfo=default_tz)
    return moment


# ---------------------------------------------------------------------------
# Validation
# ---------------------------------------------------------------------------


def _is_missing(value: object) -> bool:
    if value is None:
        return True
    return isinstance(value, str) and not value.strip()


def validate_frontmatter(fm: Mapping[str, Any], body: str, kind: ContentKind) -> ValidationResult:
    """Check *fm* and *body* against the rules for *kind*. Never mutates.

    Reports each missing required field, timestamps outside
    ``YYYY-MM-DDTHH:MM:SS[.mmm]±HH:MM``, non-list ``categories``/``tags``
    (blog only), and a stored ``contentHash`` that differs from the body.
    """
    errors: list[str] = []

    for name in REQUIRED_FIELDS[kind]:
        if _is_missing(fm.get(name)):
            errors.append(f"Missing required field '{name}'")

    for name in _TIMESTAMP_FIELDS[kind]:
        value = fm.get(name)
        if _is_missing(value):
            continue
        if not isinstance(value, str):
            errors.append(
                f"Field '{name}' must be a quoted ISO-8601 string, got {type(value).__name__}"
            )
        elif not is_iso_with_timezone(value):
            errors.append(
                f"Field '{name}' is not ISO-8601 with a timezone offset "
                f"(YYYY-MM-DDTHH:MM:SS±HH:MM): {value}"
            )

    for name in _LIST_FIELDS[kind]:
        value = fm.get(name)
        if value is not None and not isinstance(value, list):
            errors.append(f"Field '{name}' must be a list")

    stored_hash = fm.get("contentHash")
    if not _is_missing(stored_hash) and str(stored_hash) != compute_content_hash(body):
        errors.append(
            "contentHash does not match the body "
            "(run 'blogctl update-metadata' on this file before committing)"
        )

    warnings: list[str] = []
    if not is_canonical_order(fm, kind):
        warnings.append("Front matter keys are not in canonical order")

    return ValidationResult(valid=not errors, errors=errors, warnings=warnings)


# ---------------------------------------------------------------------------
# Metadata update rule
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class MetadataUpdate:
    """Outcome of :func:`apply_metadata_update`."""

    frontmatter: dict[str, Any]
    fields_changed: list[str] = field(default_factory=list)
    reordered: bool = False

    @property
    def changed(self) -> bool:
        return bool(self.fields_changed) or self.reordered


def apply_metadata_update(
    fm: Mapping[str, Any],
    body: str,
    kind: ContentKind,
    *,
    now: str,
    utc_offset: str,
) -> MetadataUpdate:
    """Compute refreshed front matter for *body*.

    - Body hash differs from ``contentHash``: set ``contentHash`` and
      ``lastUpdated = now``. Otherwise both stay untouched.
    - A bare ``YYYY-MM-DD`` ``date``/``lastUpdated`` is expanded to
      midnight at *utc_offset*; unquoted YAML timestamps become strings.
    - Keys are put in canonical order.

    Running it again on its own output with the same body changes nothing.
    """
    updated: dict[str, Any] = dict(fm)
    fields_changed: list[str] = []

    body_hash = compute_content_hash(body)
    if str(updated.get("contentHash") or "") != body_hash:
        updated["contentHash"] = DoubleQuotedScalarString(body_hash)
        updated["lastUpdated"] = DoubleQuotedScalarString(now)
        fields_changed.extend(["contentHash", "lastUpdated"])

    for name in ("date", "lastUpdated"):
        if name not in updated or name in fields_changed:
            continue
        normalized = _normalize_timestamp(updated[name], utc_offset)
        if normalized is not None:
            updated[name] = DoubleQuotedScalarString(normalized)
            fields_changed.append(name)

    ordered = order_frontmatter(updated, kind)
    # Only the relative order of keys that were already there counts.
    reordered = [key for key in ordered if key in fm] != list(fm)
    return MetadataUpdate(frontmatter=ordered, fields_changed=fields_changed, reordered=reordered)


def _normalize_timestamp(value: object, utc_offset: str) -> str | None:
    """String form for a timestamp field, or None when it needs no change."""
    if isinstance(value, str):
        expanded = expand_date(value, utc_offset)
        return expanded if expanded != value else None
    if isinstance(value, datetime):
        if value.tzinfo is None:
            value = value.replace(tzinfo=parse_utc_offset(utc_offset))
        return format_timestamp(value)
    if isinstance(value, date):
        return expand_date(value.isoformat(), utc_offset)
    return None
