from __future__ import annotations

import dash_bootstrap_components as dbc
from dash import html

from fmcsa_viewer.ui.ids import IDs


def build_toolbar() -> html.Div:
    return html.Div(
        [
            html.Div(
                [
                    dbc.Button("Save Filtered Data", id=IDs.Control.OPEN_VIEWS_BTN, color="primary"),
                    dbc.Button("Reset All Search Fields", id=IDs.Control.RESET_BTN,
                               color="secondary", className="ms-3"),
                    dbc.Button("Generate Share Link", id=IDs.Control.SHARE_BTN,
                               color="primary", className="ms-3"),
                ],
                className="d-flex mb-2",
            ),
            dbc.Input(
                id=IDs.Control.SHARE_LINK,
                readonly=True,
                placeholder="Share link appears here",
                className="mb-2",
            ),
            dbc.Alert(
                id=IDs.Control.NOTIFICATION,
                is_open=False,
                dismissable=True,
                duration=4000,
                color="info",
            ),
        ]
    )
