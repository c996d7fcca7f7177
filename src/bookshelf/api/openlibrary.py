"""Open Library API client for book search.

Open Library (openlibrary.org) provides free book metadata. The add-book
dialog uses its search endpoint to look up books by title or author.

No API key required.
"""

import logging
import time
from dataclasses import dataclass, field
from typing import Optional

import requests

from ..db.schemas import BookCreate, BookSource, ReadingStatus

logger = logging.getLogger(__name__)

SEARCH_FIELDS = "key,title,author_name,first_publish_year,isbn,publisher,cover_i,number_of_pages_median"


class OpenLibraryError(Exception):
    """Base exception for Open Library API errors."""

    pass


class OpenLibraryRateLimitError(OpenLibraryError):
    """Raised when rate limited by Open Library."""

    pass


@dataclass
class BookResult:
    """A book result from Open Library search."""

    title: str
    author: str
    isbn: Optional[str] = None
    isbn13: Optional[str] = None
    olid: Optional[str] = None  # Open Library work ID (e.g., OL123456W)
    cover_url: Optional[str] = None
    first_publish_year: Optional[int] = None
    publishers: list[str] = field(default_factory=list)
    page_count: Optional[int] = None

    def to_book_create(self, status: ReadingStatus = ReadingStatus.TO_READ) -> BookCreate:
        """Convert to a BookCreate ready to be added."""
        return BookCreate(
            title=self.title,
            author=self.author,
            page_count=self.page_count or 0,
            status=status,
            isbn=self.isbn,
            isbn13=self.isbn13,
            cover_url=self.cover_url,
            publication_year=self.first_publish_year,
            publisher=self.publishers[0] if self.publishers else None,
            source=BookSource.OPENLIBRARY,
            source_id=self.olid,
        )


class OpenLibraryClient:
    """Client for the Open Library search API."""

    BASE_URL = "https://openlibrary.org"
    COVERS_URL = "https://covers.openlibrary.org"

    def __init__(self, base_url: Optional[str] = None, timeout: int = 10):
        """Initialize client.

        Args:
            base_url: Override for the API root (defaults to openlibrary.org)
            timeout: Request timeout in seconds
        """
        self.base_url = (base_url or self.BASE_URL).rstrip("/")
        self.timeout = timeout
        self._session = requests.Session()
        self._session.headers.update({
            "User-Agent": "bookshelf/0.1.0 (personal reading tracker)"
        })
        self._last_request_time = 0.0
        self._min_request_interval = 0.5  # Be nice to free API

    def _rate_limit(self) -> None:
        """Enforce rate limiting between requests."""
        elapsed = time.time() - self._last_request_time
        if elapsed < self._min_request_interval:
            time.sleep(self._min_request_interval - elapsed)
        self._last_request_time = time.time()

    def _get(self, url: str, params: Optional[dict] = None) -> dict:
        """Make GET request with error handling."""
        self._rate_limit()
        logger.debug("GET %s params=%s", url, params)
        try:
            response = self._session.get(url, params=params, timeout=self.timeout)
            response.raise_for_status()
            return response.json()
        except requests.exceptions.Timeout:
            raise OpenLibraryError("Request timed out")
        except requests.exceptions.HTTPError as e:
            if e.response.status_code == 429:
                raise OpenLibraryRateLimitError("Rate limited by Open Library")
            raise OpenLibraryError(f"HTTP error: {e.response.status_code}")
        except requests.exceptions.RequestException as e:
            raise OpenLibraryError(f"Request failed: {e}")
        except ValueError:
            raise OpenLibraryError("Invalid JSON in response")

    def search(
        self,
        query: str,
        limit: int = 10,
    ) -> list[BookResult]:
        """Search for books by title or author.

        Args:
            query: Search query (title or general search)
            limit: Maximum results to return

        Returns:
            List of BookResult objects
        """
        params = {
            "q": query,
            "limit": limit,
            "fields": SEARCH_FIELDS,
        }

        data = self._get(f"{self.base_url}/search.json", params)

        results = []
        for doc in data.get("docs", []):
            result = self._doc_to_result(doc)
            if result:
                results.append(result)

        logger.info("Search %r returned %d results", query, len(results))
        return results

    def _doc_to_result(self, doc: dict) -> Optional[BookResult]:
        """Convert search document to BookResult."""
        title = doc.get("title")
        if not title:
            return None

        # Some docs list blank author names
        authors = doc.get("author_name", [])
        author = next((a.strip() for a in authors if a and a.strip()), "Unknown Author")

        # First ISBN-10 and ISBN-13 found
        isbn = None
        isbn13 = None
        for i in doc.get("isbn", []):
            if len(i) == 10 and not isbn:
                isbn = i
            elif len(i) == 13 and not isbn13:
                isbn13 = i
            if isbn and isbn13:
                break

        # Work ID from key (e.g., "/works/OL123456W")
        key = doc.get("key", "")
        olid = key.split("/")[-1] if key else None

        cover_id = doc.get("cover_i")
        cover_url = f"{self.COVERS_URL}/b/id/{cover_id}-M.jpg" if cover_id else None

        return BookResult(
            title=title,
            author=author,
            isbn=isbn,
            isbn13=isbn13,
            olid=olid,
            cover_url=cover_url,
            first_publish_year=doc.get("first_publish_year"),
            publishers=doc.get("publisher", []),
            page_count=doc.get("number_of_pages_median"),
        )
