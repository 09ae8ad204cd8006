"""
Pure translation of UI events into working-state transitions.

The Dash dispatcher callback turns whatever fired into an Action and hands
it to apply_action together with the current state; nothing in here touches
Dash, so every user flow can be exercised directly in tests.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Callable, Dict, Optional, Sequence

from fmcsa_viewer.config.model import GlobalConfig
from fmcsa_viewer.core.pipeline import page_count
from fmcsa_viewer.core.records import Record
from fmcsa_viewer.core.working_state import (
    WorkingState,
    apply_snapshot,
    materialize,
    move_column,
    request_sort,
    set_column_filter,
    set_global_filter,
    set_page,
    set_page_size,
    to_snapshot,
)
from fmcsa_viewer.services.storage import DictKeyValueStore
from fmcsa_viewer.services.view_store import ViewStore, parse_view_param

logger = logging.getLogger(__name__)

PAGE_LOAD = "page_load"
GLOBAL_FILTER = "global_filter"
COLUMN_FILTER = "column_filter"
SORT = "sort"
MOVE_LEFT = "move_left"
MOVE_RIGHT = "move_right"
PAGE_PREV = "page_prev"
PAGE_NEXT = "page_next"
PAGE_SIZE = "page_size"
SAVE_VIEW = "save_view"
LOAD_VIEW = "load_view"
DELETE_VIEW = "delete_view"
RESET = "reset"
SHARE = "share"


@dataclass(frozen=True)
class Action:
    """
    - kind: one of the module-level action names
    - target: column id or view name, for actions aimed at one item
    - value: new input value (filter text, page size, query string)
    """
    kind: str
    target: Optional[str] = None
    value: Any = None


@dataclass(frozen=True)
class Transition:
    """
    Result of one action.

    - state: next working state
    - storage: full key-value data to write back to the browser store,
      or None when storage did not change
    - message: notification for the user, if any
    - sync_controls: renderer must re-derive its filter inputs from state
    - share_link: freshly generated share URL
    - clear_view_name: empty the "save as" input after a successful save
    """
    state: WorkingState
    storage: Optional[Dict[str, str]] = None
    message: Optional[str] = None
    sync_controls: bool = False
    share_link: Optional[str] = None
    clear_view_name: bool = False


def apply_action(
        action: Action,
        state: WorkingState,
        storage_data: Optional[Dict[str, str]],
        *,
        live_records: Sequence[Record],
        config: GlobalConfig,
        view_name: Optional[str] = None,
        page_url: str = "",
        clock: Optional[Callable[[], float]] = None,
) -> Optional[Transition]:
    """
    Apply a single UI action. Returns None when the action changes nothing
    (e.g. an input re-rendered with the value it already had).
    """
    storage = DictKeyValueStore(dict(storage_data or {}))
    store_kwargs = {"namespaced": config.namespaced_views}
    if clock is not None:
        store_kwargs["clock"] = clock
    store = ViewStore(storage, **store_kwargs)

    kind = action.kind

    if kind == PAGE_LOAD:
        if parse_view_param(action.value) is None:
            return Transition(state=state, sync_controls=True)
        snapshot = store.resolve_share_link(action.value)
        if snapshot is None:
            return Transition(state=state, message="Shared view not found.", sync_controls=True)
        return Transition(
            state=apply_snapshot(state, snapshot),
            message="Shared view loaded.",
            sync_controls=True,
        )

    if kind == GLOBAL_FILTER:
        text = action.value or ""
        if text == state.filters.global_text:
            return None
        return Transition(state=set_global_filter(state, text))

    if kind == COLUMN_FILTER:
        text = action.value or ""
        if text == state.filters.per_column.get(action.target, ""):
            return None
        return Transition(state=set_column_filter(state, action.target, text))

    if kind == SORT:
        return Transition(state=request_sort(state, action.target), sync_controls=True)

    if kind in (MOVE_LEFT, MOVE_RIGHT):
        offset = -1 if kind == MOVE_LEFT else 1
        moved = move_column(state, action.target, offset)
        if moved is state:
            return None
        return Transition(state=moved, sync_controls=True)

    if kind == PAGE_PREV:
        if state.page.index == 0:
            return None
        return Transition(state=set_page(state, state.page.index - 1))

    if kind == PAGE_NEXT:
        n_pages = page_count(len(materialize(state, live_records)), state.page.size)
        if state.page.index + 1 >= n_pages:
            return None
        return Transition(state=set_page(state, state.page.index + 1))

    if kind == PAGE_SIZE:
        size = int(action.value)
        if size == state.page.size:
            return None
        return Transition(state=set_page_size(state, size))

    if kind == SAVE_VIEW:
        result = store.save(view_name or "", to_snapshot(state))
        return Transition(
            state=state,
            storage=storage.to_dict() if result.ok else None,
            message=result.message,
            clear_view_name=result.ok,
        )

    if kind == LOAD_VIEW:
        result = store.load(action.target)
        if not result.ok:
            return Transition(state=state, message=result.message)
        return Transition(
            state=apply_snapshot(state, result.snapshot),
            message=result.message,
            sync_controls=True,
        )

    if kind == DELETE_VIEW:
        result = store.delete(action.target)
        return Transition(state=state, storage=storage.to_dict(), message=result.message)

    if kind == RESET:
        result = store.reset(page_size=config.default_page_size)
        return Transition(
            state=apply_snapshot(state, result.snapshot),
            message=result.message,
            sync_controls=True,
        )

    if kind == SHARE:
        snapshot = to_snapshot(state, data=materialize(state, live_records))
        link = store.generate_share_link(snapshot, page_url)
        return Transition(
            state=state,
            storage=storage.to_dict(),
            message="Share this link with others.",
            share_link=link,
        )

    raise ValueError(f"Unknown action {kind!r}")
