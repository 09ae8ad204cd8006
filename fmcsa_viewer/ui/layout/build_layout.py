from __future__ import annotations

from typing import TYPE_CHECKING

import dash_bootstrap_components as dbc
from dash import dcc

from fmcsa_viewer.core.working_state import reset_state
from fmcsa_viewer.ui.ids import IDs
from fmcsa_viewer.ui.layout.build_navbar import build_navbar
from fmcsa_viewer.ui.layout.build_table_panel import build_table_panel
from fmcsa_viewer.ui.layout.build_toolbar import build_toolbar
from fmcsa_viewer.ui.layout.build_views_modal import build_views_modal

if TYPE_CHECKING:
    from fmcsa_viewer.ui.config import AppConfig


def build_layout(ctx: AppConfig):
    initial_state = reset_state(ctx.global_config.default_page_size)

    return dbc.Container(
        fluid=True,
        className="fv-root",
        children=[
            build_navbar(ctx.global_config),

            dcc.Location(id=IDs.Control.URL, refresh=False),

            # App-level stores
            dcc.Store(id=IDs.Store.WORKING_STATE, storage_type="memory", data=initial_state.to_dict()),
            # Named views and share-link snapshots live in the browser's localStorage
            dcc.Store(id=IDs.Store.VIEW_STORAGE, storage_type="local"),

            build_toolbar(),
            build_views_modal(),
            build_table_panel(initial_state),
        ],
    )
