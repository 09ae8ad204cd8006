from __future__ import annotations

import dash_bootstrap_components as dbc
from dash import dcc, html

from fmcsa_viewer.core.filter_state import PAGE_SIZE_OPTIONS
from fmcsa_viewer.core.working_state import WorkingState
from fmcsa_viewer.ui.helpers import render_header
from fmcsa_viewer.ui.ids import IDs


def build_table_panel(initial_state: WorkingState) -> dbc.Card:
    return dbc.Card(
        dbc.CardBody(
            [
                dbc.Input(
                    id=IDs.Control.GLOBAL_SEARCH,
                    placeholder="Search",
                    type="text",
                    value=initial_state.filters.global_text,
                    className="mb-3",
                ),
                dcc.Loading(
                    html.Div(
                        dbc.Table(
                            [
                                html.Thead(render_header(initial_state), id=IDs.Control.TABLE_HEADER),
                                html.Tbody(id=IDs.Control.TABLE_BODY),
                            ],
                            hover=True,
                            size="sm",
                            className="fv-table",
                        ),
                        className="fv-table-container",
                    ),
                    type="circle",
                ),
                html.Div(
                    [
                        html.Span("Rows per page:", className="me-2"),
                        dcc.Dropdown(
                            id=IDs.Control.PAGE_SIZE,
                            options=[{"label": str(n), "value": n} for n in PAGE_SIZE_OPTIONS],
                            value=initial_state.page.size,
                            clearable=False,
                            style={"width": "90px"},
                            className="me-3",
                        ),
                        html.Span(id=IDs.Control.PAGE_INFO, className="me-3"),
                        dbc.Button("‹", id=IDs.Control.PAGE_PREV, size="sm", color="light", className="me-1"),
                        dbc.Button("›", id=IDs.Control.PAGE_NEXT, size="sm", color="light"),
                    ],
                    className="d-flex align-items-center justify-content-end mt-2",
                ),
            ]
        ),
    )
