"""API module for the external book search service."""

from .openlibrary import (
    OpenLibraryClient,
    OpenLibraryError,
    OpenLibraryRateLimitError,
    BookResult,
)

__all__ = [
    "OpenLibraryClient",
    "OpenLibraryError",
    "OpenLibraryRateLimitError",
    "BookResult",
]
