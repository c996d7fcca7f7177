"""Pydantic schemas for data validation.

These schemas define the structure of a book as it moves between the
search service, the add-book dialogs, and local storage.
"""

from datetime import datetime
from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field, field_validator

# Identifier carried by a book that has not been stored yet.
UNSAVED_ID = 0


class ReadingStatus(str, Enum):
    """How far along the reader is with a book."""

    TO_READ = "to_read"
    READING = "reading"
    READ = "read"

    @property
    def label(self) -> str:
        """Display label shown in the status selector."""
        return STATUS_LABELS[self]


STATUS_LABELS = {
    ReadingStatus.TO_READ: "To Read",
    ReadingStatus.READING: "Reading",
    ReadingStatus.READ: "Read",
}


class BookSource(str, Enum):
    """Where a book record came from."""

    MANUAL = "manual"
    OPENLIBRARY = "openlibrary"


# ============================================================================
# Book Schemas
# ============================================================================


class BookBase(BaseModel):
    """Base book fields common to create and response schemas."""

    title: str = Field(..., min_length=1, description="Book title")
    author: str = Field(..., min_length=1, description="Primary author")
    page_count: int = Field(default=0, ge=0)
    status: ReadingStatus = Field(default=ReadingStatus.TO_READ)

    # Metadata carried over from search results
    isbn: Optional[str] = Field(None, max_length=13)
    isbn13: Optional[str] = Field(None, max_length=13)
    cover_url: Optional[str] = None
    publication_year: Optional[int] = None
    publisher: Optional[str] = None

    @field_validator("page_count", mode="before")
    @classmethod
    def default_page_count(cls, v) -> int:
        """Treat a missing page count as zero."""
        if v is None:
            return 0
        return v


class BookCreate(BookBase):
    """A book about to be added. Not yet stored, so it has no real id."""

    id: int = Field(default=UNSAVED_ID, description="Placeholder until stored")
    source: BookSource = BookSource.MANUAL
    source_id: Optional[str] = None


class BookResponse(BookBase):
    """A stored book (includes DB-generated fields)."""

    id: int
    source: BookSource = BookSource.MANUAL
    source_id: Optional[str] = None
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}
