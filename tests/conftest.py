"""Shared pytest fixtures and test helpers for blogctl tests."""

from __future__ import annotations

import json
import logging
from collections.abc import Generator
from pathlib import Path
from typing import Any

import pytest
import structlog
from click.testing import CliRunner

from blogctl.config.settings import BlogSettings
from blogctl.domain.hashing import compute_content_hash
from blogctl.infrastructure.site import Site

DEFAULT_BODY = "\nHello, world.\n\n<FootnoteList />\n"


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep the developer's BLOGCTL_* variables out of the tests."""
    monkeypatch.delenv("BLOGCTL_CONFIG", raising=False)


@pytest.fixture(autouse=True)
def _restore_logging() -> Generator[None]:
    """CLI runs reconfigure the root logger and bind context; undo both."""
    root = logging.getLogger()
    handlers = root.handlers[:]
    level = root.level
    yield
    root.handlers = handlers
    root.setLevel(level)
    structlog.contextvars.clear_contextvars()


@pytest.fixture
def cli_runner() -> CliRunner:
    return CliRunner()


@pytest.fixture
def site_root(tmp_path: Path) -> Path:
    """Temporary blog checkout: content/blog, content/pages, data/.

    The single source of truth for the site layout used by all
    site-related fixtures.
    """
    (tmp_path / "content" / "blog").mkdir(parents=True)
    (tmp_path / "content" / "pages").mkdir()
    (tmp_path / "data").mkdir()
    return tmp_path


@pytest.fixture
def site(site_root: Path) -> Site:
    return Site(BlogSettings.from_cli(site_root=site_root))


@pytest.fixture
def _isolated_site(site_root: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    """Run CLI tests from inside the temporary site.

    Use via ``@pytest.mark.usefixtures("_isolated_site")``.
    """
    monkeypatch.chdir(site_root)


# ---------------------------------------------------------------------------
# Content helpers
# ---------------------------------------------------------------------------


def mdx(fields: dict[str, Any], body: str = DEFAULT_BODY) -> str:
    """Build MDX text by hand (JSON scalars are valid YAML)."""
    lines = ["---"]
    lines += [f"{key}: {json.dumps(value, ensure_ascii=False)}" for key, value in fields.items()]
    lines.append("---")
    return "\n".join(lines) + "\n" + body


def post_fields(
    title: str = "Hello",
    *,
    date: str = "2024-01-01T09:00:00+09:00",
    categories: list[str] | None = None,
    tags: list[str] | None = None,
    body: str = DEFAULT_BODY,
    **extra: Any,
) -> dict[str, Any]:
    """A complete, valid set of blog front matter for *body*."""
    fields: dict[str, Any] = {
        "title": title,
        "date": date,
        "description": f"About {title}",
        "excerpt": f"Excerpt of {title}",
        "categories": categories if categories is not None else ["General"],
        "tags": tags if tags is not None else ["intro"],
        "lastUpdated": date,
        "contentHash": compute_content_hash(body),
    }
    fields.update(extra)
    return fields


def page_fields(title: str = "About", *, body: str = DEFAULT_BODY) -> dict[str, Any]:
    return {
        "title": title,
        "description": f"About {title}",
        "lastUpdated": "2024-01-01T09:00:00+09:00",
        "contentHash": compute_content_hash(body),
    }


def write_post(
    root: Path,
    slug: str,
    fields: dict[str, Any] | None = None,
    *,
    body: str = DEFAULT_BODY,
) -> Path:
    """Write ``content/blog/{slug}.mdx`` under *root*."""
    path = root / "content" / "blog" / f"{slug}.mdx"
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(mdx(fields if fields is not None else post_fields(slug, body=body), body))
    return path


def write_page(root: Path, slug: str, fields: dict[str, Any] | None = None) -> Path:
    path = root / "content" / "pages" / f"{slug}.mdx"
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(mdx(fields if fields is not None else page_fields(slug)))
    return path
