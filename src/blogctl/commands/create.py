"""Command: scaffold a new blog post or page."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from blogctl.commands._base import BlogCommand

if TYPE_CHECKING:
    from blogctl.commands._context import AppContext


@click.command(
    "create-content",
    cls=BlogCommand,
    examples="""\
  blogctl create-content --title "Stern-Brocot tree"
  blogctl create-content -t "Stern-Brocot tree" -c "Math,Data structures" --tags "math,algorithms"
  blogctl create-content --type page --title "Privacy policy" --slug privacy-policy
  blogctl create-content --title "Layout experiment" --slug test-new-layout --type blog""",
)
@click.option(
    "--type",
    "content_type",
    type=click.Choice(["blog", "page"]),
    default="blog",
    show_default=True,
    help="Content type.",
)
@click.option("-t", "--title", default=None, help="Title (the slug is derived from it).")
@click.option("-s", "--slug", default=None, help="File name without extension.")
@click.option("-d", "--description", default="", help="Description.")
@click.option("-e", "--excerpt", default=None, help="Excerpt (blog only).")
@click.option("-c", "--categories", default=None, help="Comma-separated categories (blog only).")
@click.option("--tags", default=None, help="Comma-separated tags (blog only).")
@click.pass_obj
def create_content(
    app: AppContext,
    content_type: str,
    title: str | None,
    slug: str | None,
    description: str,
    excerpt: str | None,
    categories: str | None,
    tags: str | None,
) -> None:
    """Create an MDX file from the starter template."""
    from blogctl.services._helpers import split_csv
    from blogctl.services.create import CreateService

    if not title and not slug:
        raise click.UsageError("Pass --title or --slug.")

    app.emit(
        CreateService(app.site).create_content(
            content_type,
            title=title,
            slug=slug,
            description=description,
            excerpt=excerpt,
            categories=split_csv(categories),
            tags=split_csv(tags),
        )
    )
