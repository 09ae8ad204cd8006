from __future__ import annotations

import dash_bootstrap_components as dbc
from dash import html

from fmcsa_viewer.ui.ids import IDs


def build_views_modal() -> dbc.Modal:
    return dbc.Modal(
        [
            dbc.ModalHeader(dbc.ModalTitle("Manage Saved Search/Filter Data")),
            dbc.ModalBody(
                [
                    dbc.Input(
                        id=IDs.Control.VIEW_NAME_INPUT,
                        placeholder="Name to save filter data",
                        type="text",
                        className="mb-3",
                    ),
                    html.Div(id=IDs.Control.VIEW_LIST),
                ]
            ),
            dbc.ModalFooter(
                [
                    dbc.Button("Save Filtered Data", id=IDs.Control.SAVE_VIEW_BTN, color="primary"),
                    dbc.Button("Reset All Search Fields", id=IDs.Control.MODAL_RESET_BTN, color="secondary"),
                    dbc.Button("Close", id=IDs.Control.VIEWS_CLOSE_BTN),
                ]
            ),
        ],
        id=IDs.Control.VIEWS_MODAL,
        is_open=False,
    )
