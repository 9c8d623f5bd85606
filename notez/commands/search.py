"""Search notes with the query language or filter chips."""

from __future__ import annotations

import io
import json

import click
from rich.console import Console

from notez.cli import Context, pass_context
from notez.exceptions import DatabaseError, DatabaseNotFoundError
from notez.search.chips import ChipLogic, FilterChip
from notez.search.serializer import serialize
from notez.search.state import SearchMode, SearchSession
from notez.store.repository import NoteStore, NoteWithTags
from notez.store.session import get_session
from notez.utils.output import (
    THEME,
    console,
    create_table,
    error,
    info,
    pager_print,
    verbose,
)

EXIT_SUCCESS = 0
EXIT_NO_RESULTS = 0
EXIT_PARSE_ERROR = 1
EXIT_DATABASE_ERROR = 2
EXIT_NO_DATABASE = 3

PINNED_MARKER = "●"


def _build_chips(
    tags: tuple[str, ...],
    folders: tuple[str, ...],
    exclude_tags: tuple[str, ...],
    exclude_folders: tuple[str, ...],
    pinned: bool | None,
) -> list[FilterChip]:
    """Turn chip options into chips, in option order."""
    chips = [FilterChip.tag(name) for name in tags]
    chips += [FilterChip.folder(name) for name in folders]
    chips += [FilterChip.tag(name, negated=True) for name in exclude_tags]
    chips += [FilterChip.folder(name, negated=True) for name in exclude_folders]
    if pinned is not None:
        chips.append(FilterChip.pinned(pinned))
    return chips


@click.command("search")
@click.argument("query", nargs=-1)
@click.option("--tag", "-t", "tags", multiple=True, help="Only notes with this tag (chip)")
@click.option(
    "--folder", "-F", "folders", multiple=True, help="Only notes in this folder (chip)"
)
@click.option("--exclude-tag", multiple=True, help="Skip notes with this tag (chip)")
@click.option("--exclude-folder", multiple=True, help="Skip notes in this folder (chip)")
@click.option(
    "--pinned/--unpinned",
    default=None,
    help="Only pinned / only unpinned notes (chip)",
)
@click.option(
    "--any",
    "match_any",
    is_flag=True,
    default=False,
    help="Combine chips with OR instead of AND",
)
@click.option(
    "--format",
    "-f",
    "output_format",
    type=click.Choice(["table", "json", "ids"]),
    default="table",
    help="Output format (default: table)",
)
@click.option(
    "--limit",
    "-l",
    type=click.IntRange(min=1),
    default=None,
    help="Limit number of results",
)
@click.option(
    "--show-query",
    is_flag=True,
    default=False,
    help="Print the canonical form of the query before the results",
)
@pass_context
def cli(
    ctx: Context,
    query: tuple[str, ...],
    tags: tuple[str, ...],
    folders: tuple[str, ...],
    exclude_tag: tuple[str, ...],
    exclude_folder: tuple[str, ...],
    pinned: bool | None,
    match_any: bool,
    output_format: str,
    limit: int | None,
    show_query: bool,
) -> None:
    """Search notes by tag, folder, pinned state and text.

    QUERY uses the search language. Multiple arguments are joined with
    spaces. Without QUERY, the chip options build the filter instead;
    with neither, every note is listed.

    \b
    Syntax examples:
      notez search urgent
      notez search tag:work urgent
      notez search 'tag:work AND NOT folder:archive'
      notez search '(tag:home OR tag:family) pinned:true'
      notez search 'tag:"co op"'

    \b
    Chip examples:
      notez search --tag work --exclude-folder archive
      notez search --any --tag home --tag family

    \b
    Output formats:
      --format table   Rich table (default)
      --format json    JSON array of notes
      --format ids     One note id per line
    """
    config = ctx.config
    if config is None:
        error("Configuration not loaded")
        raise SystemExit(EXIT_NO_DATABASE)

    try:
        chips = _build_chips(tags, folders, exclude_tag, exclude_folder, pinned)
    except ValueError as e:
        error(f"Invalid filter: {e}")
        raise SystemExit(EXIT_PARSE_ERROR)
    query_string = " ".join(query)

    if query_string.strip() and chips:
        error("Use either a QUERY or chip options, not both")
        raise SystemExit(EXIT_PARSE_ERROR)

    if match_any:
        chip_logic = ChipLogic.OR
    else:
        chip_logic = ChipLogic(config.chip_logic)

    if limit is None:
        limit = config.search_limit

    try:
        with get_session(config.database, create=False) as session:
            search = SearchSession(NoteStore(session), chip_logic=chip_logic)
            if query_string.strip():
                search.mode = SearchMode.TEXT
                search.text_query = query_string
            else:
                search.chips = chips

            results = search.search()
    except DatabaseNotFoundError as e:
        error(str(e), hint="Check [paths] database in your config or pass --database")
        raise SystemExit(EXIT_NO_DATABASE)
    except DatabaseError as e:
        error(f"Database error: {e}")
        raise SystemExit(EXIT_DATABASE_ERROR)

    if search.parse_error is not None:
        error(f"{search.parse_error}: {query_string}")
        raise SystemExit(EXIT_PARSE_ERROR)

    if search.error is not None:
        error(f"Database error: {search.error}")
        raise SystemExit(EXIT_DATABASE_ERROR)

    expression = search.current_expression()
    canonical = serialize(expression) if expression is not None else ""
    if show_query and canonical:
        console.print(f"[query]{canonical}[/query]", highlight=False)
    verbose(f"{len(results)} notes matched")

    if limit is not None:
        results = results[:limit]

    if not results:
        if output_format == "table" and not ctx.quiet:
            info(f"No results for: {canonical or query_string or '(all notes)'}")
        raise SystemExit(EXIT_NO_RESULTS)

    if output_format == "table":
        _print_table(results, canonical, config.snippet_length)
    elif output_format == "json":
        _print_json(results, config.snippet_length)
    elif output_format == "ids":
        _print_ids(results)

    raise SystemExit(EXIT_SUCCESS)


def _print_table(notes: list[NoteWithTags], canonical: str, snippet_length: int) -> None:
    """Print results as a Rich table, using pager when appropriate."""
    title = canonical or "all notes"
    info(f"Search: {title} ({len(notes)} results)")

    table = create_table(show_header=True, header_style="bold")
    table.add_column(PINNED_MARKER, justify="center", style="note.pinned", no_wrap=True)
    table.add_column("Title", style="note.title", no_wrap=True)
    table.add_column("Folder", style="note.folder", no_wrap=True)
    table.add_column("Tags", style="note.tags")
    table.add_column("Modified", justify="right", no_wrap=True)
    table.add_column("Snippet", style="note.snippet")

    for note in notes:
        table.add_row(
            PINNED_MARKER if note.pinned else "",
            note.title or "(untitled)",
            note.folder_name or "",
            ", ".join(sorted(note.tag_names, key=str.lower)),
            note.modified_at.strftime("%Y-%m-%d %H:%M"),
            note.snippet(snippet_length),
        )

    buf = io.StringIO()
    render_console = Console(
        file=buf,
        theme=THEME,
        force_terminal=not console.no_color,
        width=max(console.width, 120),
        no_color=console.no_color,
    )
    render_console.print(table)
    pager_print(buf.getvalue(), header_lines=3)


def _print_json(notes: list[NoteWithTags], snippet_length: int) -> None:
    """Print results as JSON array."""
    results = [
        {
            "id": note.id,
            "title": note.title,
            "folder": note.folder_name,
            "tags": sorted(note.tag_names, key=str.lower),
            "pinned": note.pinned,
            "created_at": note.created_at.isoformat(),
            "modified_at": note.modified_at.isoformat(),
            "snippet": note.snippet(snippet_length),
        }
        for note in notes
    ]
    click.echo(json.dumps(results, indent=2))


def _print_ids(notes: list[NoteWithTags]) -> None:
    """Print one note id per line."""
    for note in notes:
        click.echo(str(note.id))
