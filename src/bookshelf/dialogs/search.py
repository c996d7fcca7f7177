"""Search dialog: look up a book with the search service and add it."""

import logging
from typing import Callable, Optional, Protocol, Union

from ..db.schemas import BookCreate
from .manual_entry import ManualEntryDialog
from .state import DialogState

logger = logging.getLogger(__name__)

MIN_QUERY_LENGTH = 3


class BookActions(Protocol):
    """The two view-model operations the dialogs depend on."""

    def search_books(self, query: str, on_result: Callable[[list[BookCreate]], None]): ...

    def add_book(self, book: BookCreate): ...


class SearchDialog(DialogState):
    """State for the search-and-add dialog.

    Every query change of at least ``min_query_length`` characters starts a
    search. Overlapping searches are neither cancelled nor ordered, so the
    last callback to arrive wins.
    """

    def __init__(
        self,
        view_model: BookActions,
        on_dismiss: Optional[Callable[[], None]] = None,
        min_query_length: int = MIN_QUERY_LENGTH,
    ):
        super().__init__(on_dismiss)
        self.view_model = view_model
        self.min_query_length = min_query_length
        self.query = ""
        self.results: list[BookCreate] = []
        self.is_searching = False
        self.manual_entry: Optional[ManualEntryDialog] = None
        self.added: Optional[BookCreate] = None

    @property
    def show_manual_entry(self) -> bool:
        return self.manual_entry is not None

    def on_query_change(self, text: str):
        """Update the query, searching when it is long enough.

        Returns whatever the view-model's search returned (a Future for
        BookViewModel), or None when no search was started.
        """
        self.query = text
        if len(text) < self.min_query_length:
            self.results = []
            self._notify()
            return None

        self.is_searching = True
        self._notify()
        logger.debug("Searching for %r", text)
        return self.view_model.search_books(text, self._on_results)

    def _on_results(self, books: list[BookCreate]) -> None:
        self.results = list(books)
        self.is_searching = False
        self._notify()

    def add_result(self, book: Union[BookCreate, int]) -> None:
        """Add a search result (the record or its index) and close.

        Raises:
            TypeError: If ``book`` is neither a BookCreate nor an int
            IndexError: If the index is not a position in ``results``
        """
        if isinstance(book, bool) or not isinstance(book, (BookCreate, int)):
            raise TypeError(f"Expected a BookCreate or result index, got {book!r}")
        if isinstance(book, int):
            if not 0 <= book < len(self.results):
                raise IndexError(f"No search result at index {book}")
            book = self.results[book]
        self.view_model.add_book(book)
        self.added = book
        self.dismiss()

    # ========================================================================
    # Manual entry
    # ========================================================================

    def open_manual_entry(self) -> ManualEntryDialog:
        """Show the manual entry dialog on top of this one."""
        if self.manual_entry is None:
            self.manual_entry = ManualEntryDialog(
                on_dismiss=self._close_manual_entry,
                on_book_added=self._on_manual_book_added,
            )
            self._notify()
        return self.manual_entry

    def _close_manual_entry(self) -> None:
        self.manual_entry = None
        self._notify()

    def _on_manual_book_added(self, book: BookCreate) -> None:
        self.view_model.add_book(book)
        self.added = book
        if self.manual_entry is not None:
            self.manual_entry.dismiss()
        self.dismiss()
