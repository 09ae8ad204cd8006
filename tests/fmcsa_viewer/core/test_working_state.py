from __future__ import annotations

import pytest

from fmcsa_viewer.core.columns import DEFAULT_COLUMNS
from fmcsa_viewer.core.filter_state import FilterState, PageState, SortState
from fmcsa_viewer.core.records import Record
from fmcsa_viewer.core.snapshot import ViewSnapshot
from fmcsa_viewer.core.working_state import (
    WorkingState,
    apply_snapshot,
    control_values,
    materialize,
    move_column,
    reorder_columns,
    request_sort,
    reset_state,
    run_pipeline,
    set_column_filter,
    set_global_filter,
    set_page,
    set_page_size,
    to_snapshot,
)


def _records(n: int = 15):
    rows = []
    for i in range(n):
        rows.append(
            Record(
                legal_name=f"Carrier {i:02d}",
                entity_type="BROKER" if i % 5 == 0 else "CARRIER",
            )
        )
    return rows


def test_filter_change_resets_page_index():
    records = _records()
    state = set_page(WorkingState(), 1)
    assert run_pipeline(state, records).rows[0]["legal_name"] == "Carrier 10"

    state = set_global_filter(state, "broker")
    result = run_pipeline(state, records)

    assert state.page.index == 0
    assert result.filtered_count == 3
    assert [r["legal_name"] for r in result.rows] == ["Carrier 00", "Carrier 05", "Carrier 10"]


def test_column_filter_and_page_size_reset_page_index():
    state = set_page(WorkingState(), 2)
    assert set_column_filter(state, "legal_name", "1").page.index == 0
    assert set_page_size(state, 25).page == PageState(index=0, size=25)


def test_clearing_a_column_filter_removes_it():
    state = set_column_filter(WorkingState(), "legal_name", "acme")
    assert dict(state.filters.per_column) == {"legal_name": "acme"}
    state = set_column_filter(state, "legal_name", "")
    assert dict(state.filters.per_column) == {}


def test_request_sort_toggles_direction():
    state = set_page(WorkingState(), 1)
    state = request_sort(state, "legal_name")
    assert state.sort == SortState("legal_name", "asc")
    assert state.page.index == 0
    state = request_sort(state, "legal_name")
    assert state.sort == SortState("legal_name", "desc")
    state = request_sort(state, "legal_name")
    assert state.sort == SortState("legal_name", "asc")
    state = request_sort(state, "phone")
    assert state.sort == SortState("phone", "asc")


def test_page_state_invariants():
    with pytest.raises(ValueError):
        PageState(index=-1)
    with pytest.raises(ValueError):
        PageState(size=7)


def test_pipeline_counts():
    records = _records()
    state = set_page_size(set_column_filter(WorkingState(), "entity_type", "carrier"), 5)
    result = run_pipeline(state, records)
    assert result.total_count == 15
    assert result.filtered_count == 12
    assert result.page_count == 3
    assert len(result.rows) == 5
    assert (result.first_row_number, result.last_row_number) == (1, 5)


def test_move_column_and_reorder():
    state = reorder_columns(WorkingState(), 0, 2)
    assert [c.id for c in state.columns[:3]] == ["data_source_modified_dt", "entity_type", "created_dt"]

    first = WorkingState()
    assert move_column(first, DEFAULT_COLUMNS[0].id, -1) is first
    moved = move_column(first, DEFAULT_COLUMNS[0].id, 1)
    assert moved.columns[1] == DEFAULT_COLUMNS[0]


def test_apply_snapshot_replaces_everything_and_freezes_data():
    records = _records()
    state = set_global_filter(WorkingState(), "carrier 0")
    snapshot = to_snapshot(state, data=materialize(state, records))
    assert len(snapshot.data) == 10

    # later, on a different dataset
    other = [Record(legal_name="Unrelated")]
    restored = apply_snapshot(reset_state(), snapshot)
    result = run_pipeline(restored, other)
    assert result.filtered_count == 10
    assert result.rows[0]["legal_name"] == "Carrier 00"


def test_apply_named_snapshot_returns_to_live_data():
    frozen = apply_snapshot(WorkingState(), ViewSnapshot(data=(Record(a="1"),)))
    assert frozen.frozen_records is not None
    live = apply_snapshot(frozen, ViewSnapshot(filters=FilterState(global_text="x")))
    assert live.frozen_records is None
    assert live.filters.global_text == "x"


def test_reset_state_defaults():
    state = reset_state(page_size=25)
    assert state.columns == DEFAULT_COLUMNS
    assert state.filters.is_empty
    assert not state.sort.is_active
    assert state.page == PageState(index=0, size=25)


def test_control_values_follow_state():
    state = set_column_filter(set_global_filter(WorkingState(), "acme"), "phone", "214")
    values = control_values(state)
    assert values.global_text == "acme"
    assert values.for_column("phone") == "214"
    assert values.for_column("legal_name") == ""


def test_working_state_dict_roundtrip():
    state = set_page(
        request_sort(set_column_filter(reorder_columns(WorkingState(), 4, 0), "phone", "555"), "phone"),
        2,
    )
    state = apply_snapshot(state, to_snapshot(state, data=[Record(phone="555")]))
    assert WorkingState.from_dict(state.to_dict()) == state
