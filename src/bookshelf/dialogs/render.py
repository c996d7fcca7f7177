"""Rich renderables for the dialogs.

Each function takes dialog state and returns something a Rich console can
print. Nothing here mutates state.
"""

from rich.console import Group
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from .manual_entry import ManualEntryDialog
from .search import SearchDialog

SEARCH_PLACEHOLDER = "Search by title or author..."


def _field(label: str, value: str, placeholder: str = "") -> Text:
    """One labelled input line."""
    text = Text()
    text.append(f"{label}: ", style="bold")
    if value:
        text.append(value)
    else:
        text.append(placeholder or "-", style="dim")
    return text


def render_search_dialog(state: SearchDialog) -> Panel:
    """Render the search dialog."""
    parts = []

    query = Text()
    query.append("Search: ", style="bold cyan")
    if state.query:
        query.append(state.query)
    else:
        query.append(SEARCH_PLACEHOLDER, style="dim")
    parts.append(query)

    if state.is_searching:
        parts.append(Text("Searching...", style="dim italic"))

    if state.results:
        table = Table(show_header=True, header_style="bold", expand=True)
        table.add_column("#", style="cyan", width=3)
        table.add_column("Title", ratio=3)
        table.add_column("Author", style="green", ratio=2)
        table.add_column("", width=3)
        for i, book in enumerate(state.results, 1):
            table.add_row(str(i), Text(book.title), Text(book.author), "[bold]+[/bold]")
        parts.append(table)
    elif len(state.query) >= state.min_query_length and not state.is_searching:
        parts.append(Text("No results.", style="dim"))

    parts.append(Text("m: Add manually    q: Cancel", style="bold"))

    return Panel(
        Group(*parts),
        title="[bold]Add Book[/bold]",
        border_style="cyan",
    )


def render_manual_entry(state: ManualEntryDialog) -> Panel:
    """Render the manual entry dialog."""
    parts = [
        _field("Title", state.title),
        _field("Author", state.author),
        _field("Page Count", state.page_count),
        _field("Status", f"{state.status_label} ▾"),
    ]

    if state.show_status_menu:
        menu = Table(show_header=False, box=None, padding=(0, 2))
        menu.add_column("#", style="cyan")
        menu.add_column("Status")
        for i, status in enumerate(state.status_options, 1):
            style = "bold" if status == state.selected_status else ""
            menu.add_row(str(i), Text(status.label, style=style))
        parts.append(menu)

    buttons = Text()
    buttons.append("[Cancel]", style="cyan")
    buttons.append("    ")
    buttons.append("[Add]", style="bold green" if state.can_submit else "dim")
    parts.append(buttons)

    return Panel(
        Group(*parts),
        title="[bold]Add Book Manually[/bold]",
        border_style="cyan",
    )
