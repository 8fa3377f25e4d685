"""Jinja2 loading for scaffold bodies, with per-site overrides."""

from __future__ import annotations

from pathlib import Path

from jinja2 import BaseLoader, ChoiceLoader, Environment, FileSystemLoader, PackageLoader

OVERRIDE_DIR = Path(".blogctl") / "templates"


def build_template_environment(group: str, *, site_root: Path | None = None) -> Environment:
    """Build a Jinja2 environment that prefers site templates over packaged ones.

    Overrides live in ``.blogctl/templates/<group>/`` or directly in
    ``.blogctl/templates/`` under the site root.
    """
    loaders: list[BaseLoader] = []
    if site_root is not None:
        template_root = site_root / OVERRIDE_DIR
        loaders.append(FileSystemLoader([str(template_root / group), str(template_root)]))

    loaders.append(PackageLoader("blogctl", f"templates/{group}"))
    return Environment(loader=ChoiceLoader(loaders), keep_trailing_newline=True)


def render_body(kind: str, *, site_root: Path | None = None, **context: object) -> str:
    """Render the starter body for a new ``blog`` or ``page`` file."""
    env = build_template_environment("content", site_root=site_root)
    return env.get_template(f"{kind}.mdx.j2").render(**context)
