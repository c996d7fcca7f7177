"""Manual entry dialog: type in a book's details directly."""

import re
from typing import Callable, Optional

from ..db.schemas import UNSAVED_ID, BookCreate, BookSource, ReadingStatus
from .state import DialogState

_INTEGER_RE = re.compile(r"[+-]?\d+")
_MAX_PAGE_COUNT = 2**31 - 1


def parse_page_count(text: str) -> int:
    """Parse page count text. Anything that is not a valid count becomes 0.

    Examples:
        >>> parse_page_count("320")
        320
        >>> parse_page_count("lots")
        0
        >>> parse_page_count("")
        0
    """
    if not _INTEGER_RE.fullmatch(text):
        return 0
    value = int(text)
    if value < 0 or value > _MAX_PAGE_COUNT:
        return 0
    return value


class ManualEntryDialog(DialogState):
    """State for the manual entry form.

    Collects title, author, page count and reading status. The Add action
    is enabled only while title and author are both non-blank.
    """

    def __init__(
        self,
        on_dismiss: Optional[Callable[[], None]] = None,
        on_book_added: Optional[Callable[[BookCreate], None]] = None,
    ):
        super().__init__(on_dismiss)
        self._on_book_added = on_book_added
        self.title = ""
        self.author = ""
        self.page_count = ""
        self.selected_status = ReadingStatus.TO_READ
        self.show_status_menu = False

    # ========================================================================
    # Fields
    # ========================================================================

    def set_title(self, value: str) -> None:
        self.title = value
        self._notify()

    def set_author(self, value: str) -> None:
        self.author = value
        self._notify()

    def set_page_count(self, value: str) -> None:
        self.page_count = value
        self._notify()

    @property
    def parsed_page_count(self) -> int:
        return parse_page_count(self.page_count)

    # ========================================================================
    # Status selection
    # ========================================================================

    @property
    def status_options(self) -> list[ReadingStatus]:
        return list(ReadingStatus)

    @property
    def status_label(self) -> str:
        return self.selected_status.label

    def open_status_menu(self) -> None:
        self.show_status_menu = True
        self._notify()

    def dismiss_status_menu(self) -> None:
        self.show_status_menu = False
        self._notify()

    def select_status(self, status: ReadingStatus) -> None:
        """Pick a status and close the menu."""
        self.selected_status = ReadingStatus(status)
        self.show_status_menu = False
        self._notify()

    # ========================================================================
    # Actions
    # ========================================================================

    @property
    def can_submit(self) -> bool:
        return bool(self.title.strip() and self.author.strip())

    def confirm(self) -> Optional[BookCreate]:
        """Build the book and hand it to the caller.

        Returns None without doing anything while Add is disabled. Closing
        the dialog afterwards is the caller's job.
        """
        if not self.can_submit:
            return None

        book = BookCreate(
            id=UNSAVED_ID,
            title=self.title.strip(),
            author=self.author.strip(),
            page_count=self.parsed_page_count,
            status=self.selected_status,
            source=BookSource.MANUAL,
        )
        if self._on_book_added:
            self._on_book_added(book)
        return book
