"""Add-book dialogs: search-and-add and manual entry.

The dialog classes hold observable state only. Rendering lives in
``render`` and the terminal prompt loop in ``interactive``.
"""

from .manual_entry import ManualEntryDialog, parse_page_count
from .search import MIN_QUERY_LENGTH, SearchDialog
from .state import DialogState

__all__ = [
    "DialogState",
    "ManualEntryDialog",
    "SearchDialog",
    "MIN_QUERY_LENGTH",
    "parse_page_count",
]
