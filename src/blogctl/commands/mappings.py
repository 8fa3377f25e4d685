"""Command group: print or write the published mapping tables."""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

import click

from blogctl.commands._base import BlogGroup

if TYPE_CHECKING:
    from blogctl.commands._context import AppContext

_output_option = click.option(
    "-o",
    "--output",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="Write the JSON to this file instead of stdout.",
)


@click.group(
    cls=BlogGroup,
    examples="""\
  blogctl mappings ids
  blogctl mappings blog --output out/api/blog-ids.json
  blogctl mappings hashes > public/hash-mappings.json""",
)
def mappings() -> None:
    """Static JSON lookup tables for the site."""


def _absolute(path: Path | None) -> Path | None:
    return path.absolute() if path is not None else None


@mappings.command("ids")
@_output_option
@click.pass_obj
def ids(app: AppContext, output: Path | None) -> None:
    """Tag and category ID <-> name tables."""
    from blogctl.services.mappings import MappingsService

    app.emit(MappingsService(app.site).ids(output=_absolute(output)))


@mappings.command("blog")
@_output_option
@click.pass_obj
def blog(app: AppContext, output: Path | None) -> None:
    """Blog ID <-> slug tables, split into regular and test posts."""
    from blogctl.services.mappings import MappingsService

    app.emit(MappingsService(app.site).blog(output=_absolute(output)))


@mappings.command("hashes")
@_output_option
@click.pass_obj
def hashes(app: AppContext, output: Path | None) -> None:
    """Tag and category hash -> name tables."""
    from blogctl.services.mappings import MappingsService

    app.emit(MappingsService(app.site).hashes(output=_absolute(output)))
