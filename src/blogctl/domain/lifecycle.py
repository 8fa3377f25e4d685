"""Content file lifecycle around the stored content hash.

  created -> edited -> stale -> updated -> committed -> edited ...

``stale`` (stored hash != hash of the body) is a legitimate transient
state while a post is being written. It only becomes an error when
``validate-content`` runs as a commit or CI gate.

Only ``stale`` and ``updated`` can be told apart from a file alone;
``created``, ``edited`` and ``committed`` depend on the tooling step or
the VCS and are listed for the transition map.
"""

from __future__ import annotations

from collections.abc import Mapping
from enum import StrEnum
from typing import Any

from blogctl.domain.hashing import compute_content_hash


class ContentState(StrEnum):
    """Where a content file sits in the edit/update/commit loop."""

    CREATED = "created"
    EDITED = "edited"
    STALE = "stale"
    UPDATED = "updated"
    COMMITTED = "committed"


CONTENT_TRANSITIONS: dict[str, list[str]] = {
    "created": ["edited", "committed"],
    "edited": ["stale"],
    "stale": ["updated"],
    "updated": ["committed", "edited"],
    "committed": ["edited"],
}


def is_valid_transition(current: str, target: str) -> bool:
    """Check if moving from *current* to *target* is allowed."""
    return target in CONTENT_TRANSITIONS.get(current, [])


def compute_content_state(fm: Mapping[str, Any], body: str) -> ContentState:
    """``updated`` when the stored hash matches the body, else ``stale``."""
    stored = fm.get("contentHash")
    if stored and str(stored) == compute_content_hash(body):
        return ContentState.UPDATED
    return ContentState.STALE
