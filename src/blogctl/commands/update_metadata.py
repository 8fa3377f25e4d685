"""Command: refresh contentHash / lastUpdated before a commit."""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

import click

from blogctl.commands._base import BlogCommand

if TYPE_CHECKING:
    from blogctl.commands._context import AppContext


@click.command(
    "update-metadata",
    cls=BlogCommand,
    examples="""\
  blogctl update-metadata content/blog/hello-world.mdx
  blogctl update-metadata --all
  git diff --cached --name-only | xargs blogctl update-metadata""",
)
@click.argument("files", nargs=-1, type=click.Path(path_type=Path))
@click.option("--all", "all_files", is_flag=True, help="Update every post and page.")
@click.pass_obj
def update_metadata(app: AppContext, files: tuple[Path, ...], all_files: bool) -> None:
    """Update metadata of FILES (non-MDX paths are skipped).

    Files whose body changed get a new contentHash and lastUpdated.
    Bare dates are expanded and keys put in canonical order.
    """
    from blogctl.services.metadata import MetadataService

    svc = MetadataService(app.site)
    if all_files:
        app.emit(svc.update_all())
    else:
        app.emit(svc.update_files([f.absolute() for f in files]))
