"""SHA-256 hashing for post bodies and tag/category names.

Tag and category names are published in URLs as their full SHA-256 hex
digest. The digest is a pure function of the name, so nothing is
persisted; a :class:`HashMapper` keeps the reverse index (hash -> name)
for the names it has seen in this process.

INVARIANT: ``get_original`` only answers for hashes registered in this
process. A hash of a name that was never registered is "not found",
even though any party knowing the name could recompute it.
"""

from __future__ import annotations

import hashlib
from collections.abc import Iterable, Iterator
from dataclasses import dataclass, field


def generate_hash(text: str) -> str:
    """Full 64-char lowercase SHA-256 hex digest of *text* (UTF-8)."""
    return hashlib.sha256(text.encode("utf-8")).hexdigest()


def compute_content_hash(body: str) -> str:
    """Hash of a post body, excluding front matter."""
    return generate_hash(body)


class HashMapper:
    """Bidirectional name <-> hash table for one vocabulary (tags or categories).

    Collisions are not detected; the input domain is a handful of
    human-chosen names.
    """

    def __init__(self) -> None:
        self._hash_to_original: dict[str, str] = {}
        self._original_to_hash: dict[str, str] = {}

    @classmethod
    def from_names(cls, names: Iterable[str]) -> HashMapper:
        """Build a mapper with every name in *names* registered."""
        mapper = cls()
        for name in names:
            mapper.register(name)
        return mapper

    def register(self, original: str) -> str:
        """Record *original* and return its hash. Idempotent."""
        existing = self._original_to_hash.get(original)
        if existing is not None:
            return existing

        digest = generate_hash(original)
        self._hash_to_original[digest] = original
        self._original_to_hash[original] = digest
        return digest

    def get_original(self, digest: str) -> str | None:
        return self._hash_to_original.get(digest)

    def get_hash(self, original: str) -> str | None:
        return self._original_to_hash.get(original)

    def all_hashes(self) -> list[str]:
        """Registered hashes in registration order."""
        return list(self._hash_to_original)

    def all_originals(self) -> list[str]:
        """Registered names in registration order."""
        return list(self._original_to_hash)

    def __len__(self) -> int:
        return len(self._original_to_hash)

    def __contains__(self, original: object) -> bool:
        return original in self._original_to_hash

    def __iter__(self) -> Iterator[str]:
        return iter(self._original_to_hash)


@dataclass(frozen=True)
class HashIndex:
    """Per-process hash mappers for the tag and category vocabularies.

    Built once from the known content (see ``Site.hash_index``) and passed
    to whoever needs hash -> name lookups.
    """

    tags: HashMapper = field(default_factory=HashMapper)
    categories: HashMapper = field(default_factory=HashMapper)
