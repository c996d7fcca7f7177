"""Configuration management for bookshelf.

Loads configuration from environment variables and provides defaults.
"""

import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

# Load .env file if present
load_dotenv()


@dataclass
class Config:
    """Application configuration."""

    # Database
    db_path: Path

    # Search service
    search_base_url: str
    search_timeout: int  # seconds
    search_limit: int
    min_query_length: int

    # Logging
    log_level: str

    @classmethod
    def from_env(cls) -> "Config":
        """Load configuration from environment variables."""
        db_path_str = os.environ.get(
            "BOOKSHELF_DB_PATH",
            str(Path.home() / ".bookshelf" / "books.db"),
        )
        db_path = Path(db_path_str).expanduser()

        return cls(
            db_path=db_path,
            search_base_url=os.environ.get(
                "BOOKSHELF_SEARCH_URL", "https://openlibrary.org"
            ).rstrip("/"),
            search_timeout=int(os.environ.get("BOOKSHELF_SEARCH_TIMEOUT", "10")),
            search_limit=int(os.environ.get("BOOKSHELF_SEARCH_LIMIT", "10")),
            min_query_length=int(os.environ.get("BOOKSHELF_MIN_QUERY_LENGTH", "3")),
            log_level=os.environ.get("BOOKSHELF_LOG_LEVEL", "WARNING").upper(),
        )

    def validate(self) -> list[str]:
        """Validate configuration, return list of errors."""
        errors = []

        # Check database directory is writable
        if not self.db_path.parent.exists():
            try:
                self.db_path.parent.mkdir(parents=True, exist_ok=True)
            except PermissionError:
                errors.append(f"Cannot create database directory: {self.db_path.parent}")

        if self.search_timeout <= 0:
            errors.append("Search timeout must be positive")
        if self.search_limit <= 0:
            errors.append("Search limit must be positive")
        if self.min_query_length < 1:
            errors.append("Minimum query length must be at least 1")

        if not isinstance(logging.getLevelName(self.log_level), int):
            errors.append(f"Unknown log level: {self.log_level}")

        return errors


# Global config instance
_config: Optional[Config] = None


def get_config() -> Config:
    """Get or create the global config instance."""
    global _config
    if _config is None:
        _config = Config.from_env()
    return _config


def reset_config() -> None:
    """Reset the global config instance. Used for testing."""
    global _config
    _config = None
