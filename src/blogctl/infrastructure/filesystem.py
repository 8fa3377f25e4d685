"""Content file I/O, path resolution, and discovery.

Pure parsing/rendering lives in :mod:`blogctl.domain.content`; this
module does the reads and writes. Read and write failures (``OSError``,
``UnicodeDecodeError``) propagate to the calling service.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

from blogctl.domain.content import ContentKind, parse_frontmatter, render_frontmatter

# Directories never scanned for content.
_SKIP_DIRS = frozenset({".git", "node_modules", ".next", "out"})


# ---------------------------------------------------------------------------
# File I/O
# ---------------------------------------------------------------------------


def read_content_file(path: Path) -> tuple[dict[str, Any], str]:
    """Read an MDX file, returning ``(frontmatter, body)``."""
    return parse_frontmatter(path.read_text(encoding="utf-8"))


def write_content_file(
    path: Path,
    frontmatter: dict[str, Any],
    body: str,
    kind: ContentKind,
) -> None:
    """Write front matter + body in one ``write_text`` call.

    Creates parent directories if they don't exist.
    """
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(render_frontmatter(frontmatter, body, kind), encoding="utf-8")


# ---------------------------------------------------------------------------
# Path resolution
# ---------------------------------------------------------------------------


def resolve_content_path(content_dir: Path, slug: str, *, extension: str = ".mdx") -> Path:
    """Resolve ``{content_dir}/{slug}{extension}``.

    Raises:
        ValueError: If *slug* is empty or the path escapes *content_dir*.
    """
    if not slug or slug.strip() != slug or "/" in slug or "\\" in slug:
        msg = f"Invalid slug: {slug!r}"
        raise ValueError(msg)

    result = content_dir / f"{slug}{extension}"
    if not result.resolve().is_relative_to(content_dir.resolve()):
        msg = f"Path escapes content directory: {result}"
        raise ValueError(msg)
    return result


def slug_for(path: Path, *, extension: str = ".mdx") -> str:
    """``content/blog/hello-world.mdx`` -> ``hello-world``."""
    name = path.name
    return name[: -len(extension)] if name.endswith(extension) else path.stem


def kind_for(path: Path, blog_dir: Path) -> ContentKind:
    """Blog rules for files under *blog_dir*, page rules for everything else."""
    if path.resolve().is_relative_to(blog_dir.resolve()):
        return ContentKind.BLOG
    return ContentKind.PAGE


# ---------------------------------------------------------------------------
# Discovery
# ---------------------------------------------------------------------------


def list_content_files(content_dir: Path, *, extension: str = ".mdx") -> list[Path]:
    """Direct children of *content_dir* ending in *extension*, sorted.

    Posts and pages live flat in their directory; a missing directory
    yields an empty list.
    """
    if not content_dir.is_dir():
        return []
    return sorted(p for p in content_dir.iterdir() if p.is_file() and p.name.endswith(extension))


def find_content_files(root: Path, *, extension: str = ".mdx") -> list[Path]:
    """Every file under *root* ending in *extension*, recursively, sorted."""
    if not root.is_dir():
        return []
    results: list[Path] = []
    for path in root.rglob(f"*{extension}"):
        if not path.is_file():
            continue
        if any(part in _SKIP_DIRS for part in path.relative_to(root).parts):
            continue
        results.append(path)
    return sorted(results)
