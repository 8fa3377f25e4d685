"""Command: assign permanent IDs to tags, categories and posts."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from blogctl.commands._base import BlogCommand

if TYPE_CHECKING:
    from blogctl.commands._context import AppContext


@click.command(
    "generate-ids",
    cls=BlogCommand,
    examples="""\
  blogctl generate-ids
  blogctl --json generate-ids
  blogctl -v generate-ids""",
)
@click.pass_obj
def generate_ids(app: AppContext) -> None:
    """Register new tags, categories and posts in the ID mapping files.

    Existing IDs never change. Posts are registered oldest first; slugs
    containing a test marker get negative IDs.
    """
    from blogctl.services.ids import IdService

    app.emit(IdService(app.site).generate())
