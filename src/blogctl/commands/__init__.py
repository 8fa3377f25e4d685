"""Subcommand modules for blogctl.

:func:`register_commands` imports command modules only when the root
group is built, keeping service imports out of ``blogctl --help``.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    import click


def register_commands(cli: click.Group) -> None:
    """Attach the build-script commands and the ``mappings`` group."""
    from blogctl.commands.create import create_content
    from blogctl.commands.generate_ids import generate_ids
    from blogctl.commands.mappings import mappings
    from blogctl.commands.update_metadata import update_metadata
    from blogctl.commands.validate import validate_content

    cli.add_command(create_content)
    cli.add_command(generate_ids)
    cli.add_command(update_metadata)
    cli.add_command(validate_content)
    cli.add_command(mappings)
