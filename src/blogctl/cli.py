"""The ``blogctl`` entry point.

Global flags are collected into :class:`BlogSettings` once; every
subcommand then reaches the settings, the Site and result printing
through the :class:`AppContext` stored in ``ctx.obj``.
"""

from __future__ import annotations

from pathlib import Path

import click

from blogctl import __version__
from blogctl.commands import register_commands
from blogctl.commands._base import BlogGroup
from blogctl.commands._context import AppContext
from blogctl.config.logging import bind_command
from blogctl.config.settings import BlogSettings


@click.group(
    cls=BlogGroup,
    invoke_without_command=True,
    examples="""\
  blogctl create-content --title "Hello world"
  blogctl update-metadata --all && blogctl validate-content
  blogctl generate-ids
  blogctl --root ../my-blog mappings blog""",
)
@click.version_option(__version__, "--version", prog_name="blogctl")
@click.option("--json", "json_output", is_flag=True, help="Print results as JSON.")
@click.option("-q", "--quiet", is_flag=True, help="One-line status output.")
@click.option("-v", "--verbose", is_flag=True, help="Debug logging and error details.")
@click.option("--log-json", is_flag=True, help="Emit stderr logs as JSON lines.")
@click.option(
    "-c",
    "--config",
    "config_path",
    type=click.Path(dir_okay=False),
    default=None,
    help="Config file to use instead of the discovered blogctl.toml.",
)
@click.option(
    "--root",
    "site_root",
    type=click.Path(file_okay=False, exists=True, path_type=Path),
    default=None,
    help="Site root (default: discovered from the working directory).",
)
@click.pass_context
def cli(
    ctx: click.Context,
    json_output: bool,
    quiet: bool,
    verbose: bool,
    log_json: bool,
    config_path: str | None,
    site_root: Path | None,
) -> None:
    """Build-time tooling for an MDX blog: IDs, content hashes, front matter checks."""
    ctx.obj = AppContext(
        BlogSettings.from_cli(
            config_path=config_path,
            site_root=site_root.absolute() if site_root is not None else None,
            json_output=json_output,
            quiet=quiet,
            verbose=verbose,
            log_json=log_json,
        )
    )
    bind_command(ctx.invoked_subcommand)
    if ctx.invoked_subcommand is None:
        click.echo(ctx.get_help())


register_commands(cli)
