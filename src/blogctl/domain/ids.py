"""Incremental integer IDs for tags, categories, and blog posts.

Two counters:
- Positive (all mappers): ``1, 2, 3, ...`` for regular content.
- Negative (blog posts only): ``-1, -2, -3, ...`` for slugs carrying a
  test marker (``test-``, ``sample-``, ``demo-``, ``experiment-``).

INVARIANT: IDs are permanent. Once a key is registered its ID never
changes and is never handed to another key, even after the content is
deleted. Published URLs depend on this.

INVARIANT: Batch registration order is frozen. Tags and categories are
registered in code point order of their names; posts by date ascending,
then slug. Changing either order renumbers a fresh data file.
"""

from __future__ import annotations

import re
import unicodedata
from collections.abc import Iterable, Mapping
from datetime import datetime
from typing import Any

DEFAULT_TEST_MARKERS: tuple[str, ...] = ("test-", "sample-", "demo-", "experiment-")

FIRST_ID = 1
FIRST_TEST_ID = -1


class UnknownKeyError(KeyError):
    """Lookup of a name, slug, or ID that was never registered."""

    def __init__(self, item_type: str, key: object) -> None:
        self.item_type = item_type
        self.key = key
        super().__init__(key)

    def __str__(self) -> str:
        return (
            f"No {self.item_type} ID registered for {self.key!r}. "
            "Run 'blogctl generate-ids' to assign IDs."
        )


def is_test_slug(slug: str, markers: Iterable[str] = DEFAULT_TEST_MARKERS) -> bool:
    """Return True when *slug* is test/experimental content.

    A slug matches when it contains a marker anywhere (the ``startswith``
    case is subsumed). ``contest-results`` therefore matches ``test-``.
    """
    return any(marker in slug or slug.startswith(marker) for marker in markers)


def generate_slug(title: str) -> str:
    """Derive a URL slug from a title.

    Applies NFKC (full-width ASCII becomes ASCII), lowercases, drops
    everything except ASCII word characters, whitespace and hyphens,
    then joins words with single hyphens. Titles with no ASCII word
    characters produce an empty slug.
    """
    text = unicodedata.normalize("NFKC", title).lower()
    text = re.sub(r"[^\w\s-]", "", text, flags=re.ASCII)
    text = re.sub(r"\s+", "-", text.strip())
    text = re.sub(r"-+", "-", text)
    return text.strip("-")


def sort_names_for_registration(names: Iterable[str]) -> list[str]:
    """Unique names in the frozen registration order (code point order)."""
    return sorted(set(names))


def sort_posts_for_registration(posts: Iterable[tuple[str, datetime | None]]) -> list[str]:
    """Slugs in the frozen registration order: date ascending, then slug.

    *posts* yields ``(slug, date)`` pairs with timezone-aware dates.
    Posts without a usable date go last, ordered by slug.
    """

    def _key(post: tuple[str, datetime | None]) -> tuple[int, float, str]:
        slug, when = post
        if when is None:
            return (1, 0.0, slug)
        return (0, when.timestamp(), slug)

    return [slug for slug, _ in sorted(posts, key=_key)]


class IdMapper:
    """Name -> positive ID allocator for one vocabulary.

    Usage::

        mapper = IdMapper("tag")
        for name in sort_names_for_registration(all_tags):
            mapper.register(name)
    """

    def __init__(
        self,
        item_type: str,
        *,
        mappings: Mapping[str, int] | None = None,
        next_id: int = FIRST_ID,
    ) -> None:
        self.item_type = item_type
        self._name_to_id: dict[str, int] = dict(mappings or {})
        self._id_to_name: dict[int, str] = {v: k for k, v in self._name_to_id.items()}
        positives = [i for i in self._name_to_id.values() if i > 0]
        self.next_id = max([next_id, FIRST_ID, *(i + 1 for i in positives)])

    # --- Allocation ---

    def register(self, key: str) -> int:
        """Return the ID for *key*, assigning the next one on first sight."""
        existing = self._name_to_id.get(key)
        if existing is not None:
            return existing
        new_id = self._claim_id(key)
        self._name_to_id[key] = new_id
        self._id_to_name[new_id] = key
        return new_id

    def register_all(self, keys: Iterable[str]) -> list[int]:
        """Register *keys* in the order given."""
        return [self.register(key) for key in keys]

    def _claim_id(self, key: str) -> int:
        new_id = self.next_id
        self.next_id += 1
        return new_id

    # --- Lookup ---

    def get_id(self, key: str) -> int:
        """ID for *key*; the key must already be registered.

        Raises:
            UnknownKeyError: If *key* has no ID yet.
        """
        found = self._name_to_id.get(key)
        if found is None:
            raise UnknownKeyError(self.item_type, key)
        return found

    def lookup_id(self, key: str) -> int | None:
        return self._name_to_id.get(key)

    def get_name(self, item_id: int) -> str | None:
        return self._id_to_name.get(item_id)

    def all_ids(self) -> list[int]:
        return sorted(self._id_to_name)

    def all_names(self) -> list[str]:
        return sorted(self._name_to_id)

    @property
    def mappings(self) -> dict[str, int]:
        """Copy of the name -> ID table in insertion order."""
        return dict(self._name_to_id)

    def stats(self) -> dict[str, Any]:
        return {"count": len(self._name_to_id), "next_id": self.next_id}

    def __len__(self) -> int:
        return len(self._name_to_id)

    def __contains__(self, key: object) -> bool:
        return key in self._name_to_id


class BlogIdMapper(IdMapper):
    """Slug -> ID allocator with a negative range for test content.

    Classification runs once, when a slug is first registered. Editing
    the marker list later never moves an existing slug between ranges.
    """

    def __init__(
        self,
        *,
        mappings: Mapping[str, int] | None = None,
        next_id: int = FIRST_ID,
        next_test_id: int = FIRST_TEST_ID,
        test_markers: Iterable[str] = DEFAULT_TEST_MARKERS,
    ) -> None:
        super().__init__("blog", mappings=mappings, next_id=next_id)
        self.test_markers = tuple(test_markers)
        negatives = [i for i in self._name_to_id.values() if i < 0]
        self.next_test_id = min([next_test_id, FIRST_TEST_ID, *(i - 1 for i in negatives)])

    def is_test_slug(self, slug: str) -> bool:
        return is_test_slug(slug, self.test_markers)

    def _claim_id(self, key: str) -> int:
        if self.is_test_slug(key):
            new_id = self.next_test_id
            self.next_test_id -= 1
            return new_id
        return super()._claim_id(key)

    def regular_ids(self) -> list[int]:
        """Positive IDs, ascending."""
        return sorted(i for i in self._id_to_name if i > 0)

    def test_ids(self) -> list[int]:
        """Negative IDs, nearest to zero first (-1, -2, ...)."""
        return sorted((i for i in self._id_to_name if i < 0), reverse=True)

    def all_slugs(self) -> list[str]:
        """Registered slugs in insertion order."""
        return list(self._name_to_id)

    def stats(self) -> dict[str, Any]:
        return {
            "count": len(self._name_to_id),
            "regular": len(self.regular_ids()),
            "test": len(self.test_ids()),
            "next_id": self.next_id,
            "next_test_id": self.next_test_id,
        }
