"""
Widget implementations.

Search box and record table that plug into ClientSideFilter.
"""

from .search_box import SearchBox
from .record_table_view import RecordTableView, ColumnDef

__all__ = [
    "SearchBox",
    "RecordTableView",
    "ColumnDef",
]
