"""View-model shared by the add-book dialogs.

The dialogs never talk to the search service or the database directly.
They hand queries and finished records to a BookViewModel, which runs
searches in the background and stores books.
"""

import logging
from concurrent.futures import Executor, Future, ThreadPoolExecutor
from typing import Callable, Optional

from .api import OpenLibraryClient, OpenLibraryError
from .db import Book, BookCreate, BookResponse, Database, ReadingStatus

logger = logging.getLogger(__name__)

SearchCallback = Callable[[list[BookCreate]], None]


class BookViewModel:
    """Search and add operations consumed by the dialogs."""

    def __init__(
        self,
        db: Database,
        client: OpenLibraryClient,
        executor: Optional[Executor] = None,
        search_limit: int = 10,
    ):
        """Initialize the view-model.

        Args:
            db: Database used to store added books
            client: Search service client
            executor: Where searches run. Defaults to a private
                      single-worker thread pool.
            search_limit: Maximum results requested per search
        """
        self.db = db
        self.client = client
        self.search_limit = search_limit
        self._owns_executor = executor is None
        self._executor = executor or ThreadPoolExecutor(
            max_workers=1, thread_name_prefix="bookshelf-search"
        )

    def search_books(self, query: str, on_result: SearchCallback) -> Future:
        """Search for books and deliver the matches to ``on_result``.

        The callback is always invoked exactly once. A failed search is
        logged and delivered as an empty list.
        """
        return self._executor.submit(self._run_search, query, on_result)

    def _run_search(self, query: str, on_result: SearchCallback) -> list[BookCreate]:
        books: list[BookCreate] = []
        try:
            results = self.client.search(query, limit=self.search_limit)
            books = [r.to_book_create() for r in results]
        except OpenLibraryError as e:
            logger.warning("Search for %r failed: %s", query, e)
        except Exception:
            logger.exception("Search for %r returned unusable results", query)
        on_result(books)
        return books

    def add_book(self, book: BookCreate) -> BookResponse:
        """Store a book and return the saved record."""
        stored = self.db.create_book(book)
        logger.info("Added book %s: %s by %s", stored.id, stored.title, stored.author)
        return BookResponse.model_validate(stored)

    def books(self, status: Optional[ReadingStatus] = None) -> list[Book]:
        """Stored books, optionally filtered by status."""
        if status:
            return self.db.get_books_by_status(status)
        return self.db.get_all_books()

    def close(self) -> None:
        """Release the search worker if this view-model created it."""
        if self._owns_executor:
            self._executor.shutdown(wait=True)

    def __enter__(self) -> "BookViewModel":
        return self

    def __exit__(self, *exc) -> None:
        self.close()
