"""SQLAlchemy ORM models for local SQLite database.

Tables:
- books: Book records added through search or manual entry
"""

from datetime import datetime, timezone
from typing import Optional

from sqlalchemy import Integer, String, Text
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column

from .schemas import BookSource, ReadingStatus


class Base(DeclarativeBase):
    """Base class for all ORM models."""

    pass


def utc_now() -> str:
    """Current UTC time as an ISO string."""
    return datetime.now(timezone.utc).isoformat()


class Book(Base):
    """Book model."""

    __tablename__ = "books"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)

    # Core fields
    title: Mapped[str] = mapped_column(String(500), nullable=False, index=True)
    author: Mapped[str] = mapped_column(String(500), nullable=False, index=True)
    page_count: Mapped[int] = mapped_column(Integer, default=0)
    status: Mapped[str] = mapped_column(
        String(20), default=ReadingStatus.TO_READ.value, index=True
    )

    # Identifiers
    isbn: Mapped[Optional[str]] = mapped_column(String(13), index=True)
    isbn13: Mapped[Optional[str]] = mapped_column(String(13), index=True)

    # Metadata
    cover_url: Mapped[Optional[str]] = mapped_column(Text)
    publication_year: Mapped[Optional[int]] = mapped_column(Integer)
    publisher: Mapped[Optional[str]] = mapped_column(String(500))

    # Source tracking
    source: Mapped[str] = mapped_column(String(20), default=BookSource.MANUAL.value)
    source_id: Mapped[Optional[str]] = mapped_column(String(50))

    # Timestamps
    created_at: Mapped[str] = mapped_column(String(32), default=utc_now)
    updated_at: Mapped[str] = mapped_column(String(32), default=utc_now, onupdate=utc_now)

    def __repr__(self) -> str:
        return f"<Book(id={self.id}, title='{self.title}', author='{self.author}')>"

    @property
    def status_label(self) -> str:
        """Display label for the stored status."""
        return ReadingStatus(self.status).label
