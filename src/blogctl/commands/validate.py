"""Command: front matter validation gate."""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

import click

from blogctl.commands._base import BlogCommand

if TYPE_CHECKING:
    from blogctl.commands._context import AppContext


@click.command(
    "validate-content",
    cls=BlogCommand,
    examples="""\
  blogctl validate-content
  blogctl validate-content --root content/blog
  blogctl --json validate-content""",
)
@click.option(
    "--root",
    type=click.Path(path_type=Path),
    default=None,
    help="Directory to scan recursively (default: the configured content root).",
)
@click.pass_obj
def validate_content(app: AppContext, root: Path | None) -> None:
    """Check every MDX file; exit 1 when any file has errors."""
    from blogctl.services.validate import ValidateService

    app.emit(ValidateService(app.site).validate(root.absolute() if root else None))
