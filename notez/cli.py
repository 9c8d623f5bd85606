"""Command-line interface for notez."""

from __future__ import annotations

import logging
import os
from pathlib import Path

import click

from notez import __version__
from notez.config import Config, load_config
from notez.exceptions import NotezError
from notez.utils.output import (
    error,
    set_color,
    set_pager,
    set_verbosity,
    warning,
)

QUERY_SYNTAX_HELP = """\b
Query syntax:
  word            title or body contains word
  tag:NAME        note has tag NAME (tag:"two words" for spaces)
  folder:NAME     note is filed in folder NAME
  pinned:true     pinned notes (pinned:false for the rest)
  a AND b, a b    both match
  a OR b          either matches
  NOT a           a does not match
  ( ... )         grouping
"""


class Context:
    """Shared state handed to every command."""

    def __init__(self) -> None:
        self.config: Config | None = None
        self.quiet: bool = False


pass_context = click.make_pass_decorator(Context, ensure=True)


def _configure_output(no_color: bool, verbose: bool, debug: bool, pager: bool | None) -> bool:
    """Apply console switches. Returns True when color was turned off."""
    set_verbosity(verbose=verbose, debug=debug)
    set_pager(pager)
    if debug:
        # Surfaces the compiled search SQL logged by notez.store
        logging.basicConfig(level=logging.DEBUG, format="%(name)s: %(message)s")

    color_off = no_color or os.environ.get("NO_COLOR") is not None
    if color_off:
        set_color(False)
    return color_off


def _load_config(config_path: Path | None, database: Path | None) -> tuple[Config, list[str]]:
    config, warnings = load_config(config_path)
    if database is not None:
        config.database = database.expanduser().resolve()
        # The configured database no longer applies
        warnings = [w for w in warnings if not w.startswith("Notes database not found")]
    return config, warnings


@click.group(epilog=QUERY_SYNTAX_HELP)
@click.option(
    "--config",
    "-c",
    "config_path",
    type=click.Path(dir_okay=False, path_type=Path),
    help="Config file (default: ~/.config/notez/config.toml)",
)
@click.option(
    "--database",
    "-d",
    type=click.Path(dir_okay=False, path_type=Path),
    help="Notes database to search instead of [paths] database",
)
@click.option("--no-color", is_flag=True, default=False, help="Plain output without colors")
@click.option("--verbose", "-v", is_flag=True, default=False, help="Report match counts")
@click.option(
    "--debug",
    is_flag=True,
    default=False,
    help="Log the SQL each search runs (implies --verbose)",
)
@click.option("--quiet", "-q", is_flag=True, default=False, help="Only print results and errors")
@click.option(
    "--pager/--no-pager",
    default=None,
    help="Page long result tables (default: only when they overflow the terminal)",
)
@click.version_option(version=__version__, prog_name="notez")
@click.pass_context
def cli(
    ctx: click.Context,
    config_path: Path | None,
    database: Path | None,
    no_color: bool,
    verbose: bool,
    debug: bool,
    quiet: bool,
    pager: bool | None,
) -> None:
    """notez: find notes by tag, folder, pin state and text.

    Settings come from ~/.config/notez/config.toml unless --config
    points elsewhere; run `notez init-config` to create one.

    \b
    Examples:
      notez search 'tag:work AND NOT folder:archive'
      notez search --tag work --exclude-folder archive
      notez filters --tags
    """
    app_ctx = ctx.ensure_object(Context)
    app_ctx.quiet = quiet

    color_off = _configure_output(no_color, verbose, debug, pager)

    try:
        config, warnings = _load_config(config_path, database)
    except NotezError as e:
        error(str(e), hint="Fix the config file or pass --config")
        ctx.exit(1)
        return

    app_ctx.config = config
    if not color_off and not config.colored_output:
        set_color(False)

    if not quiet:
        for message in warnings:
            warning(message)


def register_commands() -> None:
    """Attach every command module under notez.commands to the group."""
    from notez.commands import discover_commands

    for command in discover_commands():
        cli.add_command(command)


register_commands()
