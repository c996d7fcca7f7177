"""Database module for local SQLite storage."""

from .models import Book
from .schemas import BookCreate, BookResponse, BookSource, ReadingStatus, UNSAVED_ID
from .sqlite import Database, get_db

__all__ = [
    "Book",
    "BookCreate",
    "BookResponse",
    "BookSource",
    "ReadingStatus",
    "UNSAVED_ID",
    "Database",
    "get_db",
]
