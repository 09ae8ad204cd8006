"""
The live view state and the operations that change it.

WorkingState is an immutable value: every user action is a pure function
taking the current state and returning the next one. Callers hold the
single current value and re-run the pipeline after each transition.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import Any, Dict, Optional, Sequence, Tuple

from fmcsa_viewer.core.columns import (
    DEFAULT_COLUMNS,
    ColumnDescriptor,
    column_index,
    reorder,
    reset_columns,
    resolve_columns,
)
from fmcsa_viewer.core.filter_state import ASC, DEFAULT_PAGE_SIZE, DESC, FilterState, PageState, SortState
from fmcsa_viewer.core.pipeline import PipelineResult, page_count, paginate, process
from fmcsa_viewer.core.records import Record
from fmcsa_viewer.core.snapshot import ViewSnapshot


@dataclass(frozen=True)
class WorkingState:
    """
    - columns / filters / sort / page: what the user currently sees
    - frozen_records: rows captured by a share link; when set, the pipeline
      runs on these instead of the live dataset
    """

    columns: Tuple[ColumnDescriptor, ...] = DEFAULT_COLUMNS
    filters: FilterState = field(default_factory=FilterState)
    sort: SortState = field(default_factory=SortState)
    page: PageState = field(default_factory=PageState)
    frozen_records: Optional[Tuple[Record, ...]] = None

    def source(self, live_records: Sequence[Record]) -> Sequence[Record]:
        return self.frozen_records if self.frozen_records is not None else live_records

    def to_dict(self) -> Dict[str, Any]:
        out = {
            "columns": [c.id for c in self.columns],
            "filters": self.filters.to_dict(),
            "sort": self.sort.to_dict(),
            "page": self.page.to_dict(),
        }
        if self.frozen_records is not None:
            out["frozen_records"] = [r.to_dict() for r in self.frozen_records]
        return out

    @classmethod
    def from_dict(cls, data: Optional[Dict[str, Any]]) -> WorkingState:
        if not data:
            return cls()
        frozen = data.get("frozen_records")
        return cls(
            columns=resolve_columns(data.get("columns", [])),
            filters=FilterState.from_dict(data.get("filters") or {}),
            sort=SortState.from_dict(data.get("sort") or {}),
            page=PageState.from_dict(data.get("page") or {}),
            frozen_records=None if frozen is None else tuple(Record(r) for r in frozen),
        )


# -------------------------------------------------------------------------
# Mutations: every filter/sort/page-size change goes back to the first page
# -------------------------------------------------------------------------

def set_global_filter(state: WorkingState, text: str) -> WorkingState:
    return replace(
        state,
        filters=replace(state.filters, global_text=text or ""),
        page=state.page.first(),
    )


def set_column_filter(state: WorkingState, column_id: str, text: str) -> WorkingState:
    return replace(
        state,
        filters=state.filters.with_column(column_id, text or ""),
        page=state.page.first(),
    )


def set_filters(state: WorkingState, filters: FilterState) -> WorkingState:
    return replace(state, filters=filters, page=state.page.first())


def set_sort(state: WorkingState, sort: SortState) -> WorkingState:
    return replace(state, sort=sort, page=state.page.first())


def toggle_sort(sort: SortState, column_id: str) -> SortState:
    """Header click: ascending first, descending when the active ascending column is clicked again."""
    if sort.key == column_id and sort.direction == ASC:
        return SortState(key=column_id, direction=DESC)
    return SortState(key=column_id, direction=ASC)


def request_sort(state: WorkingState, column_id: str) -> WorkingState:
    return set_sort(state, toggle_sort(state.sort, column_id))


def set_page(state: WorkingState, index: int) -> WorkingState:
    return replace(state, page=PageState(index=index, size=state.page.size))


def set_page_size(state: WorkingState, size: int) -> WorkingState:
    return replace(state, page=PageState(index=0, size=size))


def reorder_columns(state: WorkingState, from_index: int, to_index: int) -> WorkingState:
    return replace(state, columns=reorder(state.columns, from_index, to_index))


def move_column(state: WorkingState, column_id: str, offset: int) -> WorkingState:
    """Shift a column left (negative) or right (positive); no-op at the edges."""
    src = column_index(state.columns, column_id)
    dst = min(max(src + offset, 0), len(state.columns) - 1)
    if dst == src:
        return state
    return reorder_columns(state, src, dst)


def apply_snapshot(state: WorkingState, snapshot: ViewSnapshot) -> WorkingState:
    """
    Replace the whole working state with a snapshot's values. Snapshots
    without data (named views) switch back to the live dataset.
    """
    return WorkingState(
        columns=snapshot.columns,
        filters=snapshot.filters,
        sort=snapshot.sort,
        page=snapshot.page,
        frozen_records=snapshot.data,
    )


def reset_state(page_size: int = DEFAULT_PAGE_SIZE) -> WorkingState:
    return WorkingState(columns=reset_columns(), page=PageState(size=page_size))


def to_snapshot(state: WorkingState, data: Optional[Sequence[Record]] = None) -> ViewSnapshot:
    snapshot = ViewSnapshot(
        columns=state.columns,
        filters=state.filters,
        sort=state.sort,
        page=state.page,
    )
    return snapshot if data is None else snapshot.with_data(data)


def materialize(state: WorkingState, live_records: Sequence[Record]) -> Tuple[Record, ...]:
    """Filtered and sorted rows for the current state, across all pages."""
    return tuple(process(state.source(live_records), state.filters, state.sort))


def run_pipeline(state: WorkingState, live_records: Sequence[Record]) -> PipelineResult:
    source = state.source(live_records)
    processed = process(source, state.filters, state.sort)
    return PipelineResult(
        rows=tuple(paginate(processed, state.page)),
        total_count=len(source),
        filtered_count=len(processed),
        page_count=page_count(len(processed), state.page.size),
        columns=state.columns,
        filters=state.filters,
        sort=state.sort,
        page=state.page,
    )


# -------------------------------------------------------------------------
# Values for input controls owned by the renderer
# -------------------------------------------------------------------------

@dataclass(frozen=True)
class ControlValues:
    global_text: str
    per_column: Dict[str, str]

    def for_column(self, column_id: str) -> str:
        return self.per_column.get(column_id, "")


def control_values(state: WorkingState) -> ControlValues:
    """
    Text a renderer should show in its filter inputs. Renderers re-derive
    these after a load or reset instead of being written to by the core.
    """
    return ControlValues(
        global_text=state.filters.global_text,
        per_column={c.id: state.filters.per_column.get(c.id, "") for c in state.columns},
    )
