from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any, Optional

import dash
from dash import ALL, Input, Output, State, exceptions

from fmcsa_viewer.core.working_state import WorkingState, control_values
from fmcsa_viewer.ui import actions
from fmcsa_viewer.ui.actions import Action, apply_action
from fmcsa_viewer.ui.helpers import ensure_records_loaded, render_header
from fmcsa_viewer.ui.ids import IDs

if TYPE_CHECKING:
    from fmcsa_viewer.ui.config import AppConfig

logger = logging.getLogger(__name__)

# pattern "type" -> action kind, for inputs that are buttons (n_clicks)
_PATTERN_CLICKS = {
    IDs.Pattern.SORT_HEADER: actions.SORT,
    IDs.Pattern.MOVE_LEFT: actions.MOVE_LEFT,
    IDs.Pattern.MOVE_RIGHT: actions.MOVE_RIGHT,
    IDs.Pattern.VIEW_LOAD: actions.LOAD_VIEW,
    IDs.Pattern.VIEW_DELETE: actions.DELETE_VIEW,
}

_BUTTON_CLICKS = {
    IDs.Control.PAGE_PREV: actions.PAGE_PREV,
    IDs.Control.PAGE_NEXT: actions.PAGE_NEXT,
    IDs.Control.SAVE_VIEW_BTN: actions.SAVE_VIEW,
    IDs.Control.RESET_BTN: actions.RESET,
    IDs.Control.MODAL_RESET_BTN: actions.RESET,
    IDs.Control.SHARE_BTN: actions.SHARE,
}


def action_for_trigger(triggered_id: Any, value: Any, url_search: Optional[str]) -> Optional[Action]:
    """
    Map the component that fired to an Action. Returns None for triggers that
    carry no user intent (buttons rendered with n_clicks=None).
    """
    if triggered_id is None or triggered_id == IDs.Control.URL:
        return Action(actions.PAGE_LOAD, value=url_search)

    if isinstance(triggered_id, dict):
        kind = triggered_id.get("type")
        target = triggered_id.get("index")
        if kind == IDs.Pattern.COLUMN_FILTER:
            return Action(actions.COLUMN_FILTER, target=target, value=value)
        if kind in _PATTERN_CLICKS:
            return Action(_PATTERN_CLICKS[kind], target=target) if value else None
        return None

    if triggered_id == IDs.Control.GLOBAL_SEARCH:
        return Action(actions.GLOBAL_FILTER, value=value)
    if triggered_id == IDs.Control.PAGE_SIZE:
        return Action(actions.PAGE_SIZE, value=value) if value else None
    if triggered_id in _BUTTON_CLICKS:
        return Action(_BUTTON_CLICKS[triggered_id]) if value else None
    return None


def register_state_callbacks(app: dash.Dash, ctx: AppConfig) -> None:
    # ---------------------------------------------------------
    # Single dispatcher: every mutation of the working state
    # ---------------------------------------------------------
    @app.callback(
        Output(IDs.Store.WORKING_STATE, "data"),
        Output(IDs.Store.VIEW_STORAGE, "data"),
        Output(IDs.Control.NOTIFICATION, "children"),
        Output(IDs.Control.NOTIFICATION, "is_open"),
        Output(IDs.Control.TABLE_HEADER, "children"),
        Output(IDs.Control.GLOBAL_SEARCH, "value"),
        Output(IDs.Control.PAGE_SIZE, "value"),
        Output(IDs.Control.SHARE_LINK, "value"),
        Output(IDs.Control.VIEW_NAME_INPUT, "value"),
        Input(IDs.Control.URL, "search"),
        Input(IDs.Control.GLOBAL_SEARCH, "value"),
        Input({"type": IDs.Pattern.COLUMN_FILTER, "index": ALL}, "value"),
        Input({"type": IDs.Pattern.SORT_HEADER, "index": ALL}, "n_clicks"),
        Input({"type": IDs.Pattern.MOVE_LEFT, "index": ALL}, "n_clicks"),
        Input({"type": IDs.Pattern.MOVE_RIGHT, "index": ALL}, "n_clicks"),
        Input(IDs.Control.PAGE_PREV, "n_clicks"),
        Input(IDs.Control.PAGE_NEXT, "n_clicks"),
        Input(IDs.Control.PAGE_SIZE, "value"),
        Input(IDs.Control.SAVE_VIEW_BTN, "n_clicks"),
        Input({"type": IDs.Pattern.VIEW_LOAD, "index": ALL}, "n_clicks"),
        Input({"type": IDs.Pattern.VIEW_DELETE, "index": ALL}, "n_clicks"),
        Input(IDs.Control.RESET_BTN, "n_clicks"),
        Input(IDs.Control.MODAL_RESET_BTN, "n_clicks"),
        Input(IDs.Control.SHARE_BTN, "n_clicks"),
        State(IDs.Store.WORKING_STATE, "data"),
        State(IDs.Store.VIEW_STORAGE, "data"),
        State(IDs.Control.VIEW_NAME_INPUT, "value"),
        State(IDs.Control.URL, "href"),
    )
    def dispatch(url_search, *args):
        state_data, storage_data, view_name, href = args[-4:]

        triggered = dash.ctx.triggered[0] if dash.ctx.triggered else {}
        action = action_for_trigger(dash.ctx.triggered_id, triggered.get("value"), url_search)
        if action is None:
            raise exceptions.PreventUpdate

        state = WorkingState.from_dict(state_data)
        transition = apply_action(
            action,
            state,
            storage_data,
            live_records=ensure_records_loaded(ctx).records,
            config=ctx.global_config,
            view_name=view_name,
            page_url=href or "",
            clock=ctx.clock,
        )
        if transition is None:
            raise exceptions.PreventUpdate

        logger.debug("Applied action", extra={"action": action.kind, "target": action.target})

        new_state = transition.state
        no = dash.no_update
        if transition.sync_controls:
            header = render_header(new_state)
            global_text = control_values(new_state).global_text
            page_size = new_state.page.size
        else:
            header, global_text, page_size = no, no, no

        return (
            new_state.to_dict(),
            transition.storage if transition.storage is not None else no,
            transition.message if transition.message else no,
            True if transition.message else no,
            header,
            global_text,
            page_size,
            transition.share_link if transition.share_link else no,
            "" if transition.clear_view_name else no,
        )
