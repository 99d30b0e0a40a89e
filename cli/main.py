"""
LECTIO - Command Line Interface

Terminal front end for the reader: list books by testament and category,
read a chapter in parallel translations, and search the canonical text.
"""
import asyncio
from enum import Enum
from typing import List, Optional

import typer
from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from config import get_config
from core.errors import LectioError
from data.canon import BOOK_METADATA, TESTAMENT_LABELS, BookCategory, Testament
from data.corpus import CorpusLoader
from data.schemas import CorpusSnapshot
from data.translations import CANONICAL_TRANSLATION_ID, TRANSLATION_DEFINITIONS, get_translation
from domain.hierarchy import ALL, books_matching, sanitize_category
from domain.location import Location
from domain.reader import ReaderSession
from observability import LoggingConfig, get_logger, setup_logging

app = typer.Typer(
    name="lectio",
    help="LECTIO - Parallel Scripture Reader",
    add_completion=False,
)

console = Console()
logger = get_logger("lectio.cli")


class TestamentOption(str, Enum):
    OT = "OT"
    NT = "NT"


@app.callback()
def configure(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Verbose logging"),
    json_logs: bool = typer.Option(False, "--json-logs", help="Emit logs as JSON"),
):
    """Parallel scripture reader."""
    logging_config = get_config().logging
    setup_logging(
        LoggingConfig(
            level="DEBUG" if verbose else logging_config.level,
            json_format=json_logs or logging_config.json_format,
        ),
        force=True,
    )


@app.command()
def books(
    testament: Optional[TestamentOption] = typer.Option(None, "--testament", "-T", help="OT or NT"),
    category: Optional[str] = typer.Option(None, "--category", "-c", help="e.g. 'Gospels'"),
):
    """List canonical books, optionally filtered by testament and category."""
    testament_filter = Testament(testament.value) if testament else ALL
    category_filter = ALL
    if category:
        try:
            category_filter = BookCategory(category)
        except ValueError:
            valid = ", ".join(c.value for c in BookCategory)
            console.print(f"[red]Unknown category '{category}'. Choose from: {valid}[/red]")
            raise typer.Exit(1)

    resolved = sanitize_category(testament_filter, category_filter)
    if resolved is not category_filter:
        console.print(f"[yellow]{category_filter.value} does not occur in the "
                      f"{TESTAMENT_LABELS[testament_filter]}; showing all categories[/yellow]")

    table = Table(title="Books")
    table.add_column("#", justify="right")
    table.add_column("Book", style="cyan")
    table.add_column("Testament")
    table.add_column("Category")

    indices = books_matching(testament_filter, resolved)
    for index in indices:
        meta = BOOK_METADATA[index]
        table.add_row(str(index + 1), meta.name, meta.testament.value, meta.category.value)

    if not indices:
        console.print("[yellow]No books[/yellow]")
        return
    console.print(table)


@app.command()
def read(
    book: str = typer.Argument(..., help="Book name or number (e.g. 'John' or 43)"),
    chapter: int = typer.Argument(..., help="Chapter number"),
    verse: Optional[int] = typer.Argument(None, help="Verse number to mark"),
    translation: List[str] = typer.Option(
        [], "--translation", "-t", help="Translation id (repeatable, up to 3)"
    ),
):
    """Show a chapter side by side in the selected translations."""
    translation_ids = translation or [d.id for d in TRANSLATION_DEFINITIONS[:2]]
    unknown = [tid for tid in translation_ids if get_translation(tid) is None]
    if unknown:
        console.print(f"[red]Unknown translation(s): {', '.join(unknown)}[/red]")
        raise typer.Exit(1)

    session = _open_session(translation_ids)
    session.select_translations(translation_ids)

    book_index = _resolve_book(book)
    if book_index is None:
        console.print(f"[red]Unknown book: {book}[/red]")
        raise typer.Exit(1)

    session.navigate(Location(
        book_index=book_index,
        chapter_index=chapter - 1,
        verse_index=verse - 1 if verse is not None else None,
    ))
    location = session.location

    table = Table(title=session.label(location), show_lines=True)
    table.add_column("v", justify="right", style="bold")
    for translation_id in session.active_translations:
        definition = session.translation(translation_id)
        table.add_column(definition.short_name, style=definition.color)

    for row in session.verse_rows(location):
        marker = "bold reverse" if row.verse_index == location.verse_index else None
        table.add_row(
            str(row.verse_index + 1),
            *[cell.text or "" for cell in row.cells],
            style=marker,
        )
    console.print(table)


@app.command()
def search(
    term: str = typer.Argument(..., help="Text to search for (at least two characters)"),
):
    """Search the canonical translation."""
    session = _open_session([CANONICAL_TRANSLATION_ID])
    results = session.set_search_term(term)

    if len(term.strip()) < session.config.search_min_term_length:
        console.print(f"[yellow]Type at least {session.config.search_min_term_length} characters to search.[/yellow]")
        return
    if not results:
        console.print("[yellow]No verses found.[/yellow]")
        return

    for match in results:
        text = Text()
        for segment in session.highlight(match.text):
            text.append(segment.text, style="bold yellow" if segment.is_match else None)
        console.print(Text(session.label(match.location), style="bold cyan"))
        console.print(text)

    if len(results) >= session.config.search_max_results:
        console.print(f"[dim]Showing the first {len(results)} matches.[/dim]")


@app.command()
def status():
    """Show configuration and translation sources."""
    config = get_config()
    console.print(Panel.fit(
        "[bold blue]LECTIO - Parallel Scripture Reader[/bold blue]",
        border_style="blue",
    ))

    table = Table(title="Translations")
    table.add_column("Id", style="cyan")
    table.add_column("Name")
    table.add_column("Source")
    table.add_column("Local file")

    for definition in TRANSLATION_DEFINITIONS:
        local = config.corpus.data_dir / f"{definition.id}.json"
        table.add_row(
            definition.id + (" (canonical)" if definition.id == CANONICAL_TRANSLATION_ID else ""),
            definition.name,
            definition.source_url,
            "yes" if local.exists() else "no",
        )
    console.print(table)
    console.print_json(data=config.to_dict())


def _open_session(translation_ids: List[str]) -> ReaderSession:
    """Load the canonical translation plus the requested ones."""
    config = get_config()
    wanted = [CANONICAL_TRANSLATION_ID] + [tid for tid in translation_ids if tid != CANONICAL_TRANSLATION_ID]
    definitions = [get_translation(tid) for tid in wanted]

    loader = CorpusLoader(
        definitions=definitions,
        cache_dir=config.corpus.cache_dir,
        data_dir=config.corpus.data_dir,
        timeout=config.corpus.http_timeout,
    )
    session = ReaderSession(config=config.reader, definitions=definitions)
    loader.subscribe(session.update_corpus)

    snapshot: CorpusSnapshot = asyncio.run(loader.load())
    if not snapshot.is_ready:
        logger.warning("Corpus unavailable", status=snapshot.status.value, translations=wanted)
        console.print(f"[red]Error: {snapshot.error}[/red]")
        raise typer.Exit(1)
    return session


def _resolve_book(book: str) -> Optional[int]:
    if book.isdigit():
        index = int(book) - 1
        return index if 0 <= index < len(BOOK_METADATA) else None
    wanted = book.strip().lower()
    for index, meta in enumerate(BOOK_METADATA):
        if meta.name.lower() == wanted:
            return index
    return None


def main():
    """Entry point for the lectio script."""
    try:
        app()
    except LectioError as e:
        console.print(f"[red]{e}[/red]")
        raise SystemExit(1)


if __name__ == "__main__":
    main()
