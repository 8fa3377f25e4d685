"""AppContext: shared Click context for all commands.

Built once by the root group and handed to subcommands through
``@click.pass_obj``. It owns the lazily created :class:`Site` and the
single place where results are printed and exit codes decided.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from blogctl.config.logging import configure_logging
from blogctl.output.formatters import OutputSettings, format_result

if TYPE_CHECKING:
    from blogctl.config.settings import BlogSettings
    from blogctl.infrastructure.site import Site
    from blogctl.services.result import ServiceResult


class AppContext:
    """Settings, the Site, and result emission for one CLI invocation.

    The Site is created on first access so ``--help``, ``--version`` and
    ``--examples`` never touch the filesystem.
    """

    def __init__(self, settings: BlogSettings) -> None:
        self.settings = settings
        self._site: Site | None = None
        configure_logging(verbose=settings.verbose, log_json=settings.log_json)

    @property
    def site(self) -> Site:
        if self._site is None:
            from blogctl.infrastructure.site import Site

            self._site = Site(self.settings)
        return self._site

    def emit(self, result: ServiceResult) -> None:
        """Print *result* and set the exit status.

        * Success: stdout, exit 0. Warnings go to stderr so piped
          output (``mappings ... > file.json``) stays clean.
        * Failure: stderr, exit 1.
        """
        settings = OutputSettings(
            json_output=self.settings.json_output,
            quiet=self.settings.quiet,
            verbose=self.settings.verbose,
        )
        output = format_result(result, settings=settings)
        if not settings.json_output:
            for warning in result.warnings:
                click.echo(f"WARNING: {warning}", err=True)
        if result.ok:
            click.echo(output)
        else:
            click.echo(output, err=True)
            raise SystemExit(1)
