from __future__ import annotations

import logging
from typing import TYPE_CHECKING

import dash
from dash import Input, Output, State

from fmcsa_viewer.services.storage import DictKeyValueStore
from fmcsa_viewer.services.view_store import ViewStore
from fmcsa_viewer.ui.helpers import render_view_list
from fmcsa_viewer.ui.ids import IDs

if TYPE_CHECKING:
    from fmcsa_viewer.ui.config import AppConfig

logger = logging.getLogger(__name__)


def register_view_callbacks(app: dash.Dash, ctx: AppConfig) -> None:
    # ---------------------------------------------------------
    # Saved view list (derived from the browser key-value store)
    # ---------------------------------------------------------
    @app.callback(
        Output(IDs.Control.VIEW_LIST, "children"),
        Input(IDs.Store.VIEW_STORAGE, "data"),
    )
    def update_view_list(storage_data):
        store = ViewStore(
            DictKeyValueStore(dict(storage_data or {})),
            namespaced=ctx.global_config.namespaced_views,
        )
        return render_view_list(store.list())

    # ---------------------------------------------------------
    # Open / close the saved views dialog
    # ---------------------------------------------------------
    @app.callback(
        Output(IDs.Control.VIEWS_MODAL, "is_open"),
        Input(IDs.Control.OPEN_VIEWS_BTN, "n_clicks"),
        Input(IDs.Control.VIEWS_CLOSE_BTN, "n_clicks"),
        State(IDs.Control.VIEWS_MODAL, "is_open"),
        prevent_initial_call=True,
    )
    def toggle_views_modal(open_clicks, close_clicks, is_open):
        if dash.ctx.triggered_id == IDs.Control.VIEWS_CLOSE_BTN:
            return False
        return not is_open
