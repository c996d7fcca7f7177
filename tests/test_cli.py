"""Tests for the CLI interface."""

import os
import tempfile
from pathlib import Path
from unittest.mock import MagicMock, patch

import pytest
from typer.testing import CliRunner

from bookshelf.api.openlibrary import BookResult, OpenLibraryError
from bookshelf.cli import app
from bookshelf.config import reset_config
from bookshelf.db.schemas import BookSource, ReadingStatus
from bookshelf.db.sqlite import get_db, reset_db


@pytest.fixture(autouse=True)
def setup_test_db():
    """Set up a test database for each test."""
    reset_db()
    reset_config()

    with tempfile.NamedTemporaryFile(suffix=".db", delete=False) as f:
        db_path = f.name

    os.environ["BOOKSHELF_DB_PATH"] = db_path

    yield

    # Cleanup
    reset_db()
    reset_config()
    if "BOOKSHELF_DB_PATH" in os.environ:
        del os.environ["BOOKSHELF_DB_PATH"]
    if Path(db_path).exists():
        Path(db_path).unlink()


@pytest.fixture
def runner():
    """Create a CLI test runner."""
    return CliRunner()


@pytest.fixture
def mock_client():
    """Replace the search client used by the CLI."""
    with patch("bookshelf.cli.OpenLibraryClient") as client_cls:
        client = MagicMock()
        client.search.return_value = [
            BookResult(title="Dune", author="Frank Herbert", olid="OL893415W",
                       page_count=688, first_publish_year=1965),
            BookResult(title="Dune Messiah", author="Frank Herbert"),
        ]
        client_cls.return_value = client
        yield client


class TestCLIBasics:
    """Tests for basic CLI functionality."""

    def test_help(self, runner: CliRunner):
        result = runner.invoke(app, ["--help"])
        assert result.exit_code == 0
        assert "Keep track of the books" in result.stdout

    def test_version(self, runner: CliRunner):
        result = runner.invoke(app, ["version"])
        assert result.exit_code == 0
        assert "0.1.0" in result.stdout

    def test_verbose_sets_debug_logging(self, runner: CliRunner):
        import logging

        result = runner.invoke(app, ["--verbose", "version"])
        assert result.exit_code == 0
        assert logging.getLogger().level == logging.DEBUG

    def test_unknown_log_level_reported(self, runner: CliRunner, monkeypatch):
        monkeypatch.setenv("BOOKSHELF_LOG_LEVEL", "LOUD")

        result = runner.invoke(app, ["version"])

        assert result.exit_code == 1
        assert "Unknown log level: LOUD" in result.stdout
        assert "0.1.0" not in result.stdout


class TestAddManualCommand:
    """Tests for add-manual command."""

    def test_add_manual_book(self, runner: CliRunner):
        result = runner.invoke(
            app,
            ["add-manual", "--title", "Test Book", "--author", "Test Author"],
        )
        assert result.exit_code == 0
        assert "Added:" in result.stdout
        assert "Test Book" in result.stdout

        books = get_db().get_all_books()
        assert len(books) == 1
        assert books[0].status == ReadingStatus.TO_READ.value
        assert books[0].source == BookSource.MANUAL.value

    def test_add_manual_with_all_options(self, runner: CliRunner):
        result = runner.invoke(
            app,
            [
                "add-manual",
                "--title", "Complete Book",
                "--author", "Full Author",
                "--pages", "350",
                "--status", "reading",
            ],
        )
        assert result.exit_code == 0

        book = get_db().get_all_books()[0]
        assert book.page_count == 350
        assert book.status == ReadingStatus.READING.value

    def test_add_manual_bad_pages_become_zero(self, runner: CliRunner):
        result = runner.invoke(
            app,
            ["add-manual", "-t", "Book", "-a", "Author", "-p", "a lot"],
        )
        assert result.exit_code == 0
        assert get_db().get_all_books()[0].page_count == 0

    def test_add_manual_blank_author_fails(self, runner: CliRunner):
        result = runner.invoke(app, ["add-manual", "--title", "Book", "--author", "   "])
        assert result.exit_code == 1
        assert "required" in result.stdout
        assert get_db().count_books() == 0

    def test_add_manual_interactive(self, runner: CliRunner):
        result = runner.invoke(
            app,
            ["add-manual"],
            input="Piranesi\nSusanna Clarke\n272\ns\n3\na\n",
        )
        assert result.exit_code == 0
        assert "Added: Piranesi" in result.stdout

        book = get_db().get_all_books()[0]
        assert book.page_count == 272
        assert book.status == ReadingStatus.READ.value

    def test_add_manual_interactive_cancel(self, runner: CliRunner):
        result = runner.invoke(app, ["add-manual"], input="\n\n\nc\n")
        assert result.exit_code == 0
        assert "Cancelled" in result.stdout
        assert get_db().count_books() == 0


class TestAddCommand:
    """Tests for the interactive search-and-add command."""

    def test_add_from_search(self, runner: CliRunner, mock_client):
        result = runner.invoke(app, ["add"], input="dune\n1\n")
        assert result.exit_code == 0
        assert "Added: Dune by Frank Herbert" in result.stdout

        book = get_db().get_all_books()[0]
        assert book.source == BookSource.OPENLIBRARY.value
        assert book.source_id == "OL893415W"
        assert book.page_count == 688

    def test_add_with_initial_query(self, runner: CliRunner, mock_client):
        result = runner.invoke(app, ["add", "dune"], input="2\n")
        assert result.exit_code == 0
        assert get_db().get_all_books()[0].title == "Dune Messiah"

    def test_short_query_does_not_search(self, runner: CliRunner, mock_client):
        result = runner.invoke(app, ["add"], input="du\nq\n")
        assert result.exit_code == 0
        mock_client.search.assert_not_called()
        assert "Cancelled" in result.stdout

    def test_search_error_shows_no_results(self, runner: CliRunner, mock_client):
        mock_client.search.side_effect = OpenLibraryError("Request timed out")
        result = runner.invoke(app, ["add"], input="dune\nq\n")
        assert result.exit_code == 0
        assert "No results." in result.stdout
        assert get_db().count_books() == 0

    def test_manual_from_search(self, runner: CliRunner, mock_client):
        result = runner.invoke(
            app,
            ["add"],
            input="m\nPiranesi\nSusanna Clarke\n\na\n",
        )
        assert result.exit_code == 0
        assert "Added: Piranesi" in result.stdout
        assert get_db().get_all_books()[0].source == BookSource.MANUAL.value


class TestSearchCommand:
    """Tests for the search command."""

    def test_search_prints_results(self, runner: CliRunner, mock_client):
        result = runner.invoke(app, ["search", "dune"])
        assert result.exit_code == 0
        assert "Dune Messiah" in result.stdout
        assert "1965" in result.stdout

    def test_search_short_query(self, runner: CliRunner, mock_client):
        result = runner.invoke(app, ["search", "du"])
        assert result.exit_code == 0
        assert "at least 3 characters" in result.stdout
        mock_client.search.assert_not_called()

    def test_search_error(self, runner: CliRunner, mock_client):
        mock_client.search.side_effect = OpenLibraryError("HTTP error: 503")
        result = runner.invoke(app, ["search", "dune"])
        assert result.exit_code == 1
        assert "503" in result.stdout

    def test_search_no_results(self, runner: CliRunner, mock_client):
        mock_client.search.return_value = []
        result = runner.invoke(app, ["search", "zzzzzz"])
        assert result.exit_code == 0
        assert "No books found" in result.stdout


class TestListCommand:
    """Tests for list command."""

    def test_list_empty(self, runner: CliRunner):
        result = runner.invoke(app, ["list"])
        assert result.exit_code == 0
        assert "No books found" in result.stdout

    def test_list_with_books(self, runner: CliRunner):
        runner.invoke(app, ["add-manual", "-t", "Book One", "-a", "Author"])
        runner.invoke(app, ["add-manual", "-t", "Book Two", "-a", "Author", "-s", "read"])

        result = runner.invoke(app, ["list"])
        assert result.exit_code == 0
        assert "Book One" in result.stdout
        assert "Book Two" in result.stdout

    def test_list_by_status(self, runner: CliRunner):
        runner.invoke(app, ["add-manual", "-t", "Book One", "-a", "Author"])
        runner.invoke(app, ["add-manual", "-t", "Book Two", "-a", "Author", "-s", "read"])

        result = runner.invoke(app, ["list", "--status", "read"])
        assert result.exit_code == 0
        assert "Book Two" in result.stdout
        assert "Book One" not in result.stdout

    def test_list_limit(self, runner: CliRunner):
        for i in range(3):
            runner.invoke(app, ["add-manual", "-t", f"Book {i}", "-a", "Author"])

        result = runner.invoke(app, ["list", "--limit", "2"])
        assert "Showing 2 of 3 books" in result.stdout
