from __future__ import annotations

import logging
from typing import TYPE_CHECKING

import dash
from dash import Input, Output

from fmcsa_viewer.core.working_state import WorkingState, run_pipeline
from fmcsa_viewer.ui.helpers import ensure_records_loaded, page_info_text, render_body
from fmcsa_viewer.ui.ids import IDs

if TYPE_CHECKING:
    from fmcsa_viewer.ui.config import AppConfig

logger = logging.getLogger(__name__)


def register_table_callbacks(app: dash.Dash, ctx: AppConfig) -> None:
    # ---------------------------------------------------------
    # Re-run the pipeline whenever the working state changes
    # ---------------------------------------------------------
    @app.callback(
        Output(IDs.Control.TABLE_BODY, "children"),
        Output(IDs.Control.PAGE_INFO, "children"),
        Output(IDs.Control.PAGE_PREV, "disabled"),
        Output(IDs.Control.PAGE_NEXT, "disabled"),
        Input(IDs.Store.WORKING_STATE, "data"),
    )
    def render_table(state_data):
        store = ensure_records_loaded(ctx)
        state = WorkingState.from_dict(state_data)
        result = run_pipeline(state, store.records)

        return (
            render_body(result),
            page_info_text(result),
            state.page.index == 0,
            state.page.index + 1 >= result.page_count,
        )
