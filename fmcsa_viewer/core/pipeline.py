"""
The filter -> sort -> paginate pipeline.

Every stage takes a sequence of Records and returns a new list; inputs are
never mutated and relative order is preserved wherever a stage does not
explicitly reorder.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Sequence, Tuple

from fmcsa_viewer.core.columns import ColumnDescriptor
from fmcsa_viewer.core.filter_state import DESC, FilterState, PageState, SortState
from fmcsa_viewer.core.records import Record, stringify


# -------------------------------------------------------------------------
# Filter
# -------------------------------------------------------------------------

class RecordPredicate:
    """
    Compiled form of a FilterState: needles are lower-cased once per call.
    A record passes when the global text appears in any of its values AND
    every column filter appears in the matching field.
    """

    def __init__(self, filters: FilterState) -> None:
        self.global_needle = filters.global_text.lower()
        self.column_needles: Tuple[Tuple[str, str], ...] = tuple(
            (column_id, text.lower()) for column_id, text in filters.per_column.items() if text
        )

    def matches_global(self, record: Record) -> bool:
        if not self.global_needle:
            return True
        return any(self.global_needle in stringify(v).lower() for v in record.values())

    def matches_columns(self, record: Record) -> bool:
        for column_id, needle in self.column_needles:
            value = record.text(column_id)
            # missing/empty field fails an active column filter
            if not value or needle not in value.lower():
                return False
        return True

    def __call__(self, record: Record) -> bool:
        return self.matches_global(record) and self.matches_columns(record)


def filter_records(records: Sequence[Record], filters: FilterState) -> List[Record]:
    if filters.is_empty:
        return list(records)
    predicate = RecordPredicate(filters)
    return [r for r in records if predicate(r)]


# -------------------------------------------------------------------------
# Sort
# -------------------------------------------------------------------------

def sort_records(records: Sequence[Record], sort: SortState) -> List[Record]:
    """
    Stable single-key sort on the stringified field value.

    Descending flips the comparison (reverse=True keeps ties in input order)
    rather than reversing an ascending result.
    """
    if not sort.is_active:
        return list(records)
    key = sort.key
    return sorted(records, key=lambda r: r.text(key), reverse=sort.direction == DESC)


# -------------------------------------------------------------------------
# Pagination
# -------------------------------------------------------------------------

def paginate(records: Sequence[Record], page: PageState) -> List[Record]:
    start = page.index * page.size
    return list(records[start:start + page.size])


def page_count(total: int, size: int) -> int:
    return -(-total // size) if total > 0 else 0


@dataclass(frozen=True)
class PipelineResult:
    """
    Everything a renderer needs after one mutation cycle.

    - rows: records on the current page
    - total_count: records in the source before filtering
    - filtered_count: records surviving the filters
    """

    rows: Tuple[Record, ...]
    total_count: int
    filtered_count: int
    page_count: int
    columns: Tuple[ColumnDescriptor, ...]
    filters: FilterState
    sort: SortState
    page: PageState

    @property
    def first_row_number(self) -> int:
        if not self.rows:
            return 0
        return self.page.index * self.page.size + 1

    @property
    def last_row_number(self) -> int:
        if not self.rows:
            return 0
        return self.first_row_number + len(self.rows) - 1


def process(records: Sequence[Record], filters: FilterState, sort: SortState) -> List[Record]:
    """Filtered and sorted records, before pagination."""
    return sort_records(filter_records(records, filters), sort)
