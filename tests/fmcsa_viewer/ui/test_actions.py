from __future__ import annotations

from itertools import count

import pytest

from fmcsa_viewer.config.model import GlobalConfig
from fmcsa_viewer.core.filter_state import FilterState, SortState
from fmcsa_viewer.core.records import Record
from fmcsa_viewer.core.working_state import WorkingState, reset_state, run_pipeline
from fmcsa_viewer.ui import actions
from fmcsa_viewer.ui.actions import Action, apply_action
from fmcsa_viewer.ui.callbacks.callbacks_state import action_for_trigger
from fmcsa_viewer.ui.ids import IDs, column_filter_id, sort_header_id, view_load_id

LIVE = [
    Record(legal_name=f"Carrier {i:02d}", entity_type="BROKER" if i % 4 == 0 else "CARRIER", phone=f"555-{i:04d}")
    for i in range(12)
]
CONFIG = GlobalConfig(default_page_size=5)


def _apply(action, state, storage=None, **kwargs):
    ticks = count(1_700_000_000_000)
    kwargs.setdefault("clock", lambda: next(ticks) / 1000)
    return apply_action(action, state, storage, live_records=LIVE, config=CONFIG, **kwargs)


@pytest.fixture
def state():
    return reset_state(CONFIG.default_page_size)


def test_global_filter_transition_and_unchanged_value(state):
    t = _apply(Action(actions.GLOBAL_FILTER, value="broker"), state)
    assert t.state.filters.global_text == "broker"
    assert run_pipeline(t.state, LIVE).filtered_count == 3
    assert _apply(Action(actions.GLOBAL_FILTER, value="broker"), t.state) is None
    assert _apply(Action(actions.GLOBAL_FILTER, value=None), state) is None


def test_column_filter_resets_page(state):
    on_page_2 = _apply(Action(actions.PAGE_NEXT), state).state
    assert on_page_2.page.index == 1
    t = _apply(Action(actions.COLUMN_FILTER, target="phone", value="0001"), on_page_2)
    assert t.state.page.index == 0
    assert [r["legal_name"] for r in run_pipeline(t.state, LIVE).rows] == ["Carrier 01"]


def test_paging_stops_at_edges(state):
    assert _apply(Action(actions.PAGE_PREV), state) is None
    s = state
    for _ in range(2):
        s = _apply(Action(actions.PAGE_NEXT), s).state
    assert s.page.index == 2
    assert _apply(Action(actions.PAGE_NEXT), s) is None
    assert _apply(Action(actions.PAGE_PREV), s).state.page.index == 1


def test_page_size_change(state):
    assert _apply(Action(actions.PAGE_SIZE, value=5), state) is None
    t = _apply(Action(actions.PAGE_SIZE, value="25"), state)
    assert t.state.page.size == 25
    assert t.state.page.index == 0


def test_sort_and_move_sync_header(state):
    t = _apply(Action(actions.SORT, target="legal_name"), state)
    assert t.state.sort == SortState("legal_name", "asc")
    assert t.sync_controls
    t = _apply(Action(actions.SORT, target="legal_name"), t.state)
    assert t.state.sort.direction == "desc"

    assert _apply(Action(actions.MOVE_LEFT, target="created_dt"), state) is None
    moved = _apply(Action(actions.MOVE_RIGHT, target="created_dt"), state)
    assert [c.id for c in moved.state.columns[:2]] == ["data_source_modified_dt", "created_dt"]


def test_save_load_delete_flow(state):
    filtered = WorkingState(filters=FilterState(global_text="broker"), page=state.page)

    refused = _apply(Action(actions.SAVE_VIEW), filtered, {}, view_name="  ")
    assert refused.storage is None
    assert refused.message == "Please enter a name to save the view."
    assert not refused.clear_view_name

    saved = _apply(Action(actions.SAVE_VIEW), filtered, {"theme": "dark"}, view_name="Brokers")
    assert saved.message == "View 'Brokers' saved."
    assert saved.clear_view_name
    assert "theme" in saved.storage

    loaded = _apply(Action(actions.LOAD_VIEW, target="Brokers"), state, saved.storage)
    assert loaded.state.filters.global_text == "broker"
    assert loaded.sync_controls
    assert loaded.message == "View 'Brokers' loaded."

    deleted = _apply(Action(actions.DELETE_VIEW, target="Brokers"), state, saved.storage)
    assert deleted.message == "View 'Brokers' deleted."
    missing = _apply(Action(actions.LOAD_VIEW, target="Brokers"), state, deleted.storage)
    assert missing.state == state
    assert missing.message == "No saved view found with the name 'Brokers'."


def test_reset_restores_defaults(state):
    busy = _apply(Action(actions.SORT, target="phone"), state).state
    busy = _apply(Action(actions.GLOBAL_FILTER, value="x"), busy).state
    t = _apply(Action(actions.RESET), busy)
    assert t.state == state
    assert t.message == "View reset to default."
    assert t.sync_controls


def test_share_then_open_link_on_page_load(state):
    sorted_desc = _apply(Action(actions.SORT, target="legal_name"), state).state
    sorted_desc = _apply(Action(actions.SORT, target="legal_name"), sorted_desc).state

    shared = _apply(Action(actions.SHARE), sorted_desc, {}, page_url="http://localhost:8050/")
    assert shared.message == "Share this link with others."
    assert shared.share_link.startswith("http://localhost:8050/?view=")

    query = "?" + shared.share_link.split("?", 1)[1]
    opened = _apply(Action(actions.PAGE_LOAD, value=query), reset_state(5), shared.storage)
    assert opened.message == "Shared view loaded."
    assert opened.state.frozen_records is not None
    assert run_pipeline(opened.state, []).rows == run_pipeline(sorted_desc, LIVE).rows


def test_page_load_without_or_with_unknown_view(state):
    plain = _apply(Action(actions.PAGE_LOAD, value=""), state)
    assert plain.state == state
    assert plain.message is None

    unknown = _apply(Action(actions.PAGE_LOAD, value="?view=zzz"), state, {})
    assert unknown.state == state
    assert unknown.message == "Shared view not found."


def test_unknown_action_kind_raises(state):
    with pytest.raises(ValueError):
        _apply(Action("explode"), state)


def test_action_for_trigger_mapping():
    assert action_for_trigger(None, None, "?view=a") == Action(actions.PAGE_LOAD, value="?view=a")
    assert action_for_trigger(IDs.Control.GLOBAL_SEARCH, "acme", "") == Action(actions.GLOBAL_FILTER, value="acme")
    assert action_for_trigger(column_filter_id("phone"), "214", "") == Action(
        actions.COLUMN_FILTER, target="phone", value="214"
    )
    assert action_for_trigger(sort_header_id("phone"), 1, "") == Action(actions.SORT, target="phone")
    assert action_for_trigger(view_load_id("Mine"), 2, "") == Action(actions.LOAD_VIEW, target="Mine")
    assert action_for_trigger(IDs.Control.SHARE_BTN, 1, "") == Action(actions.SHARE)
    assert action_for_trigger(IDs.Control.MODAL_RESET_BTN, 1, "") == Action(actions.RESET)


def test_rerendered_buttons_carry_no_intent():
    assert action_for_trigger(sort_header_id("phone"), None, "") is None
    assert action_for_trigger(IDs.Control.PAGE_NEXT, None, "") is None
    assert action_for_trigger(IDs.Control.PAGE_SIZE, None, "") is None
    assert action_for_trigger("something-else", 1, "") is None
