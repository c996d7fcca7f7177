"""Terminal driver for the add-book dialogs.

Uses Rich prompts to feed keyboard input into the dialog state and
re-renders the dialog after every step.
"""

from concurrent.futures import Future
from typing import Callable, Optional

from rich.console import Console
from rich.prompt import Prompt

from ..db.schemas import BookCreate
from .manual_entry import ManualEntryDialog
from .render import render_manual_entry, render_search_dialog
from .search import MIN_QUERY_LENGTH, BookActions, SearchDialog

SEARCH_HELP = "Search text, result number to add, m for manual entry, q to cancel"


def _change_query(dialog: SearchDialog, text: str, console: Console) -> None:
    """Apply a new query and wait for the search it started, if any."""
    pending = dialog.on_query_change(text)
    if isinstance(pending, Future):
        with console.status("Searching..."):
            pending.result()


def _selected_index(dialog: SearchDialog, answer: str) -> Optional[int]:
    """Index of the result picked by ``answer``, or None if it is a query."""
    if not answer.isdigit() or not dialog.results:
        return None
    index = int(answer) - 1
    if 0 <= index < len(dialog.results):
        return index
    return None


def run_search_dialog(
    view_model: BookActions,
    console: Optional[Console] = None,
    initial_query: Optional[str] = None,
    min_query_length: int = MIN_QUERY_LENGTH,
) -> Optional[BookCreate]:
    """Run the search dialog until a book is added or the user cancels.

    Args:
        view_model: Provides search_books and add_book
        console: Console to draw on
        initial_query: Query to search for before the first prompt
        min_query_length: Shortest query that triggers a search

    Returns:
        The book that was added, or None if cancelled
    """
    console = console or Console()
    dialog = SearchDialog(view_model, min_query_length=min_query_length)

    if initial_query:
        _change_query(dialog, initial_query, console)

    while dialog.visible:
        console.print(render_search_dialog(dialog))
        answer = Prompt.ask(SEARCH_HELP, console=console, default="", show_default=False)
        command = answer.strip().lower()

        if command == "q":
            dialog.dismiss()
        elif command == "m":
            manual = dialog.open_manual_entry()
            _drive_manual_entry(manual, console)
        else:
            index = _selected_index(dialog, answer.strip())
            if index is not None:
                dialog.add_result(index)
            else:
                _change_query(dialog, answer.strip(), console)

    return dialog.added


def _ask(label: str, current: str, console: Console) -> str:
    return Prompt.ask(label, console=console, default=current, show_default=bool(current))


def _edit_fields(dialog: ManualEntryDialog, console: Console) -> None:
    dialog.set_title(_ask("Title", dialog.title, console))
    dialog.set_author(_ask("Author", dialog.author, console))
    dialog.set_page_count(_ask("Page Count", dialog.page_count, console))


def _choose_status(dialog: ManualEntryDialog, console: Console) -> None:
    dialog.open_status_menu()
    console.print(render_manual_entry(dialog))
    options = dialog.status_options
    current = str(options.index(dialog.selected_status) + 1)
    choice = Prompt.ask(
        "Status",
        console=console,
        choices=[str(i) for i in range(1, len(options) + 1)],
        default=current,
    )
    dialog.select_status(options[int(choice) - 1])


def _drive_manual_entry(dialog: ManualEntryDialog, console: Console) -> None:
    """Prompt through the manual entry form until it closes."""
    _edit_fields(dialog, console)

    while dialog.visible:
        console.print(render_manual_entry(dialog))
        choices = ["a", "e", "s", "c"] if dialog.can_submit else ["e", "s", "c"]
        action = Prompt.ask(
            "Add (a), edit (e), status (s), cancel (c)" if dialog.can_submit
            else "Edit (e), status (s), cancel (c)",
            console=console,
            choices=choices,
            default=choices[0],
            show_choices=False,
        )

        if action == "a":
            dialog.confirm()
        elif action == "e":
            _edit_fields(dialog, console)
        elif action == "s":
            _choose_status(dialog, console)
        else:
            dialog.dismiss()


def run_manual_entry_dialog(
    on_book_added: Callable[[BookCreate], object],
    console: Optional[Console] = None,
) -> Optional[BookCreate]:
    """Run a standalone manual entry dialog.

    Returns:
        The book handed to ``on_book_added``, or None if cancelled
    """
    console = console or Console()
    added: list[BookCreate] = []
    dialog: ManualEntryDialog

    def _added(book: BookCreate) -> None:
        on_book_added(book)
        added.append(book)
        dialog.dismiss()

    dialog = ManualEntryDialog(on_book_added=_added)
    _drive_manual_entry(dialog, console)
    return added[0] if added else None
