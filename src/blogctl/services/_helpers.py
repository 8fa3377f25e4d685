"""Shared service-layer helper functions."""

from __future__ import annotations

from datetime import UTC, datetime

from blogctl.domain.content import format_timestamp, parse_utc_offset


def now_iso(utc_offset: str) -> str:
    """Current time at *utc_offset*, seconds precision (front matter timestamps).

    >>> now_iso("+09:00")  # doctest: +SKIP
    '2026-10-19T18:04:05+09:00'
    """
    return format_timestamp(datetime.now(parse_utc_offset(utc_offset)))


def now_utc_iso() -> str:
    """Current UTC time with milliseconds and a ``Z`` suffix (mapping files)."""
    return datetime.now(UTC).isoformat(timespec="milliseconds").replace("+00:00", "Z")


def split_csv(value: str | None) -> list[str]:
    """``"a, b,,c"`` -> ``["a", "b", "c"]``; None -> ``[]``."""
    if not value:
        return []
    return [part.strip() for part in value.split(",") if part.strip()]
