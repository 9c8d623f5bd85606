"""List the tags and folders available as search filters."""

from __future__ import annotations

import click

from notez.cli import Context, pass_context
from notez.commands.search import EXIT_DATABASE_ERROR, EXIT_NO_DATABASE
from notez.exceptions import DatabaseError, DatabaseNotFoundError
from notez.search.ast_nodes import Folder, Tag
from notez.search.serializer import serialize
from notez.store.repository import NoteStore
from notez.store.session import get_session
from notez.utils.output import console, create_table, error, info


@click.command("filters")
@click.option("--tags", "kind", flag_value="tags", help="Only list tags")
@click.option("--folders", "kind", flag_value="folders", help="Only list folders")
@click.option(
    "--plain",
    is_flag=True,
    default=False,
    help="Print one filter per line in query syntax",
)
@pass_context
def cli(ctx: Context, kind: str | None, plain: bool) -> None:
    """List tags and folders usable as search filters.

    Plain output can be pasted into a query as-is.

    Examples:

    \b
      notez filters
      notez filters --tags --plain
    """
    config = ctx.config
    if config is None:
        error("Configuration not loaded")
        raise SystemExit(EXIT_NO_DATABASE)

    try:
        with get_session(config.database, create=False) as session:
            store = NoteStore(session)
            tags = store.list_tags() if kind != "folders" else []
            folders = store.list_folders() if kind != "tags" else []
    except DatabaseNotFoundError as e:
        error(str(e), hint="Check [paths] database in your config or pass --database")
        raise SystemExit(EXIT_NO_DATABASE)
    except DatabaseError as e:
        error(f"Database error: {e}")
        raise SystemExit(EXIT_DATABASE_ERROR)

    filters = [serialize(Tag(name)) for name in tags]
    filters += [serialize(Folder(name)) for name in folders]

    if plain:
        for line in filters:
            click.echo(line)
        return

    if not filters:
        if not ctx.quiet:
            info("No tags or folders yet")
        return

    table = create_table(show_header=True, header_style="bold")
    table.add_column("Kind", no_wrap=True)
    table.add_column("Name", style="note.tags")
    table.add_column("Filter", style="query")
    for name in tags:
        table.add_row("tag", name, serialize(Tag(name)))
    for name in folders:
        table.add_row("folder", name, serialize(Folder(name)))
    console.print(table)
