"""Pytest configuration and shared fixtures.

This module provides fixtures for testing the bookshelf application,
including temporary databases, sample books, and a fake view-model.
"""

import os
import tempfile
from pathlib import Path
from typing import Callable, Generator

import pytest
from sqlalchemy.orm import Session

from bookshelf.config import reset_config
from bookshelf.db.models import Book
from bookshelf.db.schemas import BookCreate, BookSource, ReadingStatus
from bookshelf.db.sqlite import Database, reset_db


# ============================================================================
# Database Fixtures
# ============================================================================


@pytest.fixture(scope="function")
def temp_db_path() -> Generator[Path, None, None]:
    """Create a temporary database file path."""
    with tempfile.NamedTemporaryFile(suffix=".db", delete=False) as f:
        db_path = Path(f.name)
    yield db_path
    # Cleanup
    if db_path.exists():
        db_path.unlink()


@pytest.fixture(scope="function")
def db(temp_db_path: Path) -> Generator[Database, None, None]:
    """Create a test database instance."""
    reset_db()
    reset_config()

    os.environ["BOOKSHELF_DB_PATH"] = str(temp_db_path)

    database = Database(str(temp_db_path))
    database.create_tables()
    yield database

    database.engine.dispose()
    reset_db()
    reset_config()
    if "BOOKSHELF_DB_PATH" in os.environ:
        del os.environ["BOOKSHELF_DB_PATH"]


@pytest.fixture(scope="function")
def session(db: Database) -> Generator[Session, None, None]:
    """Create a database session for testing."""
    with db.get_session() as sess:
        yield sess


# ============================================================================
# Sample Data Fixtures
# ============================================================================


@pytest.fixture
def sample_book_data() -> BookCreate:
    """A book as it arrives from a search result."""
    return BookCreate(
        title="The Great Gatsby",
        author="F. Scott Fitzgerald",
        page_count=180,
        status=ReadingStatus.READ,
        isbn="0743273567",
        isbn13="9780743273565",
        cover_url="https://covers.openlibrary.org/b/id/8432047-M.jpg",
        publication_year=1925,
        publisher="Scribner",
        source=BookSource.OPENLIBRARY,
        source_id="OL468431W",
    )


@pytest.fixture
def sample_book_minimal() -> BookCreate:
    """A book typed in by hand with only required fields."""
    return BookCreate(
        title="Minimal Book",
        author="Test Author",
    )


@pytest.fixture
def created_book(db: Database, sample_book_data: BookCreate) -> Book:
    """Create and return a book in the database."""
    return db.create_book(sample_book_data)


@pytest.fixture
def multiple_books(db: Database) -> list[Book]:
    """Create multiple books in the database."""
    books_data = [
        BookCreate(title="Book One", author="Author A", status=ReadingStatus.READ),
        BookCreate(title="Book Two", author="Author B", status=ReadingStatus.READING),
        BookCreate(title="Book Three", author="Author A", status=ReadingStatus.TO_READ),
        BookCreate(title="Another Book", author="Author C", status=ReadingStatus.READ),
    ]
    return [db.create_book(data) for data in books_data]


# ============================================================================
# Dialog Fixtures
# ============================================================================


class FakeViewModel:
    """Records dialog calls. Search callbacks are held until released."""

    def __init__(self):
        self.queries: list[str] = []
        self.pending: list[tuple[str, Callable[[list[BookCreate]], None]]] = []
        self.added: list[BookCreate] = []

    def search_books(self, query: str, on_result) -> None:
        self.queries.append(query)
        self.pending.append((query, on_result))

    def add_book(self, book: BookCreate) -> BookCreate:
        self.added.append(book)
        return book

    def deliver(self, index: int, books: list[BookCreate]) -> None:
        """Fire the callback of the ``index``-th search."""
        _, callback = self.pending[index]
        callback(books)


@pytest.fixture
def fake_view_model() -> FakeViewModel:
    """A view-model stand-in for dialog tests."""
    return FakeViewModel()


@pytest.fixture
def search_results() -> list[BookCreate]:
    """Two books as the search service would return them."""
    return [
        BookCreate(
            title="Dune",
            author="Frank Herbert",
            page_count=688,
            source=BookSource.OPENLIBRARY,
            source_id="OL893415W",
        ),
        BookCreate(
            title="Dune Messiah",
            author="Frank Herbert",
            page_count=256,
            source=BookSource.OPENLIBRARY,
            source_id="OL893526W",
        ),
    ]


# ============================================================================
# CLI Testing Fixtures
# ============================================================================


@pytest.fixture
def cli_runner():
    """Create a Typer CLI test runner."""
    from typer.testing import CliRunner
    return CliRunner()


@pytest.fixture
def cli_app():
    """Get the CLI app for testing."""
    from bookshelf.cli import app
    return app
