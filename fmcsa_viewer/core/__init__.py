"""
Core domain layer: records, column layout, filter/sort/page state,
the filter -> sort -> paginate pipeline and view snapshots
"""

from .columns import DEFAULT_COLUMNS, ColumnDescriptor
from .filter_state import FilterState, PageState, SortState
from .records import Record, RecordStore
from .snapshot import ViewSnapshot
from .working_state import WorkingState

__all__ = [
    "DEFAULT_COLUMNS",
    "ColumnDescriptor",
    "FilterState",
    "PageState",
    "SortState",
    "Record",
    "RecordStore",
    "ViewSnapshot",
    "WorkingState",
]
