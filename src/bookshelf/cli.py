"""Command-line interface for bookshelf.

Built with Typer for commands and Rich for beautiful output.
"""

import logging
from typing import Optional

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table
from rich.text import Text

from .api import OpenLibraryClient, OpenLibraryError
from .config import get_config
from .db import get_db
from .db.schemas import ReadingStatus
from .dialogs import ManualEntryDialog
from .dialogs.interactive import run_manual_entry_dialog, run_search_dialog
from .viewmodel import BookViewModel

# Create the main app
app = typer.Typer(
    name="bookshelf",
    help="Keep track of the books you want to read, are reading, and have read.",
    no_args_is_help=True,
)

# Rich console for pretty output
console = Console()


# ============================================================================
# Helper Functions
# ============================================================================


def print_error(message: str) -> None:
    """Print an error message."""
    console.print(f"[bold red]Error:[/bold red] {message}")


def print_success(message: str) -> None:
    """Print a success message."""
    console.print(f"[bold green]Success:[/bold green] {message}")


def print_info(message: str) -> None:
    """Print an info message."""
    console.print(f"[dim]{message}[/dim]")


def setup_logging(level: str) -> None:
    """Send log records through Rich."""
    logging.basicConfig(
        level=level,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=Console(stderr=True), rich_tracebacks=True)],
        force=True,
    )


def get_view_model() -> BookViewModel:
    """Build the view-model from configuration."""
    config = get_config()
    client = OpenLibraryClient(base_url=config.search_base_url, timeout=config.search_timeout)
    return BookViewModel(get_db(), client, search_limit=config.search_limit)


def format_book_table(books: list, title: str = "Books") -> Table:
    """Create a rich table for displaying books."""
    table = Table(title=title, show_header=True, header_style="bold magenta")
    table.add_column("ID", style="dim", justify="right")
    table.add_column("Title", style="cyan", no_wrap=False, max_width=40)
    table.add_column("Author", style="green", max_width=25)
    table.add_column("Pages", justify="right")
    table.add_column("Status", style="yellow")

    for book in books:
        table.add_row(
            str(book.id),
            Text(book.title),
            Text(book.author),
            str(book.page_count) if book.page_count else "-",
            book.status_label,
        )

    return table


@app.callback()
def main(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Show debug logging"),
) -> None:
    """Keep track of the books you want to read, are reading, and have read."""
    config = get_config()
    errors = config.validate()
    if errors:
        for error in errors:
            print_error(error)
        raise typer.Exit(1)

    setup_logging("DEBUG" if verbose else config.log_level)


# ============================================================================
# Book Commands
# ============================================================================


@app.command()
def add(
    query: Optional[str] = typer.Argument(None, help="Initial search text"),
) -> None:
    """Add a book by searching Open Library.

    Opens the search dialog. Type at least three characters to search, pick
    a result by number, or switch to manual entry.
    """
    config = get_config()
    with get_view_model() as view_model:
        book = run_search_dialog(
            view_model,
            console=console,
            initial_query=query,
            min_query_length=config.min_query_length,
        )

    if book is None:
        print_info("Cancelled.")
        return
    print_success(f"Added: {book.title} by {book.author}")


@app.command("add-manual")
def add_manual(
    title: Optional[str] = typer.Option(None, "--title", "-t", help="Book title"),
    author: Optional[str] = typer.Option(None, "--author", "-a", help="Author"),
    pages: str = typer.Option("", "--pages", "-p", help="Page count"),
    status: ReadingStatus = typer.Option(
        ReadingStatus.TO_READ, "--status", "-s", help="Reading status"
    ),
) -> None:
    """Add a book by typing in its details.

    Without --title/--author the manual entry dialog is opened.
    """
    with get_view_model() as view_model:
        if title is None and author is None:
            book = run_manual_entry_dialog(view_model.add_book, console=console)
            if book is None:
                print_info("Cancelled.")
                return
            print_success(f"Added: {book.title} by {book.author}")
            return

        dialog = ManualEntryDialog(on_book_added=view_model.add_book)
        dialog.set_title(title or "")
        dialog.set_author(author or "")
        dialog.set_page_count(pages)
        dialog.select_status(status)

        book = dialog.confirm()
        if book is None:
            print_error("Title and author are required.")
            raise typer.Exit(1)

    print_success(f"Added: {book.title} by {book.author}")


@app.command()
def search(
    query: str = typer.Argument(..., help="Title or author to search for"),
    limit: Optional[int] = typer.Option(None, "--limit", "-l", help="Max search results"),
) -> None:
    """Search Open Library without adding anything."""
    config = get_config()
    if len(query) < config.min_query_length:
        print_info(f"Type at least {config.min_query_length} characters to search.")
        return

    client = OpenLibraryClient(base_url=config.search_base_url, timeout=config.search_timeout)
    try:
        results = client.search(query, limit=limit or config.search_limit)
    except OpenLibraryError as e:
        print_error(f"Open Library error: {e}")
        raise typer.Exit(1)

    if not results:
        console.print(f"[dim]No books found matching: {query}[/dim]")
        return

    table = Table(title=f"Results for '{query}'", show_header=True, header_style="bold")
    table.add_column("#", style="cyan", width=3)
    table.add_column("Title", max_width=40)
    table.add_column("Author", max_width=25)
    table.add_column("Year", width=6)
    table.add_column("Pages", justify="right")

    for i, r in enumerate(results, 1):
        table.add_row(
            str(i),
            Text(r.title),
            Text(r.author),
            str(r.first_publish_year or "-"),
            str(r.page_count or "-"),
        )

    console.print(table)


@app.command("list")
def list_books(
    status: Optional[ReadingStatus] = typer.Option(
        None, "--status", "-s", help="Filter by status"
    ),
    limit: int = typer.Option(20, "--limit", "-l", help="Max books to show"),
) -> None:
    """List books, optionally filtered by status."""
    with get_view_model() as view_model:
        books = view_model.books(status)
    title = f"Books - {status.label}" if status else "All Books"

    if not books:
        console.print("[dim]No books found.[/dim]")
        return

    total = len(books)
    books = books[:limit]
    console.print(format_book_table(books, title=title))

    if len(books) < total:
        console.print(f"[dim]Showing {len(books)} of {total} books[/dim]")


@app.command()
def version() -> None:
    """Show version information."""
    from . import __version__

    console.print(f"bookshelf version {__version__}")


if __name__ == "__main__":
    app()
