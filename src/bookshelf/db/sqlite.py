"""SQLite database operations.

Handles database connection, session management, and CRUD operations.
"""

import logging
from contextlib import contextmanager
from pathlib import Path
from typing import Generator, Optional

from sqlalchemy import create_engine, func, select
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from .models import Base, Book
from .schemas import BookCreate, ReadingStatus

logger = logging.getLogger(__name__)


class Database:
    """Database connection and operations manager."""

    def __init__(self, db_path: Optional[str] = None):
        """Initialize database connection.

        Args:
            db_path: Path to SQLite database file. If None, uses the
                     configured BOOKSHELF_DB_PATH.
        """
        if db_path is None:
            from ..config import get_config

            db_path = str(get_config().db_path)

        self.db_path = Path(db_path)
        self._is_memory = str(db_path) == ":memory:"

        if not self._is_memory:
            self._ensure_directory()

        # For in-memory databases, use StaticPool to reuse the same connection
        # This ensures all sessions share the same in-memory database
        if self._is_memory:
            self.engine = create_engine(
                "sqlite:///:memory:",
                echo=False,
                connect_args={"check_same_thread": False},
                poolclass=StaticPool,
            )
        else:
            self.engine = create_engine(
                f"sqlite:///{self.db_path}",
                echo=False,
                connect_args={"check_same_thread": False},
            )
        self.SessionLocal = sessionmaker(bind=self.engine, autocommit=False, autoflush=False)

    def _ensure_directory(self) -> None:
        """Ensure the database directory exists."""
        self.db_path.parent.mkdir(parents=True, exist_ok=True)

    def create_tables(self) -> None:
        """Create all database tables."""
        Base.metadata.create_all(self.engine)

    def drop_tables(self) -> None:
        """Drop all database tables. Use with caution!"""
        Base.metadata.drop_all(self.engine)

    @contextmanager
    def get_session(self) -> Generator[Session, None, None]:
        """Get a database session context manager."""
        session = self.SessionLocal()
        try:
            yield session
            session.commit()
        except Exception:
            session.rollback()
            raise
        finally:
            session.close()

    # ========================================================================
    # Book Operations
    # ========================================================================

    def create_book(self, book: BookCreate, session: Optional[Session] = None) -> Book:
        """Store a new book. The placeholder id on the input is ignored."""

        def _create(s: Session) -> Book:
            db_book = Book(
                title=book.title,
                author=book.author,
                page_count=book.page_count,
                status=book.status.value,
                isbn=book.isbn,
                isbn13=book.isbn13,
                cover_url=book.cover_url,
                publication_year=book.publication_year,
                publisher=book.publisher,
                source=book.source.value,
                source_id=book.source_id,
            )
            s.add(db_book)
            s.flush()
            logger.debug("Stored book %s: %s", db_book.id, db_book.title)
            return db_book

        if session:
            return _create(session)
        else:
            with self.get_session() as s:
                book = _create(s)
                s.commit()
                s.refresh(book)
                s.expunge(book)
                return book

    def get_books_by_status(
        self, status: ReadingStatus, session: Optional[Session] = None
    ) -> list[Book]:
        """Get all books with a given status."""

        def _get(s: Session) -> list[Book]:
            stmt = select(Book).where(Book.status == status.value).order_by(Book.title)
            return list(s.execute(stmt).scalars().all())

        if session:
            return _get(session)
        else:
            with self.get_session() as s:
                books = _get(s)
                for book in books:
                    s.expunge(book)
                return books

    def get_all_books(self, session: Optional[Session] = None) -> list[Book]:
        """Get all books ordered by title."""

        def _get(s: Session) -> list[Book]:
            stmt = select(Book).order_by(Book.title)
            return list(s.execute(stmt).scalars().all())

        if session:
            return _get(session)
        else:
            with self.get_session() as s:
                books = _get(s)
                for book in books:
                    s.expunge(book)
                return books

    def count_books(self, session: Optional[Session] = None) -> int:
        """Count stored books."""

        def _count(s: Session) -> int:
            return s.execute(select(func.count()).select_from(Book)).scalar_one()

        if session:
            return _count(session)
        else:
            with self.get_session() as s:
                return _count(s)


# Global database instance
_db: Optional[Database] = None


def get_db(db_path: Optional[str] = None) -> Database:
    """Get or create the global database instance."""
    global _db
    if _db is None:
        _db = Database(db_path)
        _db.create_tables()
    return _db


def reset_db() -> None:
    """Reset the global database instance. Used for testing."""
    global _db
    _db = None
