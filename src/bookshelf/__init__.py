"""bookshelf: a personal reading tracker with search-and-add dialogs."""

__version__ = "0.1.0"
