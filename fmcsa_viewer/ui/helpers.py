from __future__ import annotations

import asyncio
import logging
from typing import TYPE_CHECKING, List, Sequence

import dash_bootstrap_components as dbc
from dash import html

from fmcsa_viewer.core.filter_state import ASC
from fmcsa_viewer.core.pipeline import PipelineResult
from fmcsa_viewer.core.records import RecordStore
from fmcsa_viewer.core.working_state import WorkingState, control_values
from fmcsa_viewer.ui.ids import (
    column_filter_id,
    move_left_id,
    move_right_id,
    sort_header_id,
    view_delete_id,
    view_load_id,
)

if TYPE_CHECKING:
    from fmcsa_viewer.ui.config import AppConfig

logger = logging.getLogger(__name__)


def ensure_records_loaded(ctx: AppConfig) -> RecordStore:
    """
    Run the one-off dataset fetch the first time a callback needs records.
    Concurrent first callbacks wait on ctx.load_lock, so the provider is
    awaited once. A failed fetch leaves an empty, non-loading store
    (already logged).
    """
    with ctx.load_lock:
        if ctx.record_store.loading:
            ctx.record_store = asyncio.run(RecordStore.load(ctx.record_provider))
        return ctx.record_store


def _sort_arrow(state: WorkingState, column_id: str) -> str:
    if state.sort.key != column_id:
        return ""
    return " ▲" if state.sort.direction == ASC else " ▼"


def render_header(state: WorkingState) -> html.Tr:
    """Header row: sort toggle, move buttons and a filter input per column."""
    controls = control_values(state)
    n = len(state.columns)
    cells = []
    for i, col in enumerate(state.columns):
        cells.append(
            html.Th(
                [
                    html.Div(
                        [
                            dbc.Button("‹", id=move_left_id(col.id), size="sm", color="link",
                                       disabled=i == 0, className="fv-move"),
                            dbc.Button(
                                col.label + _sort_arrow(state, col.id),
                                id=sort_header_id(col.id),
                                size="sm",
                                color="link",
                                className="fv-sort fw-semibold",
                            ),
                            dbc.Button("›", id=move_right_id(col.id), size="sm", color="link",
                                       disabled=i == n - 1, className="fv-move"),
                        ],
                        className="d-flex align-items-center",
                    ),
                    dbc.Input(
                        id=column_filter_id(col.id),
                        value=controls.for_column(col.id),
                        placeholder=f"Filter {col.label}",
                        size="sm",
                        type="text",
                    ),
                ],
                className="fv-header-cell",
            )
        )
    return html.Tr(cells)


def render_body(result: PipelineResult) -> List[html.Tr]:
    # records are loaded before this runs; dcc.Loading covers the wait
    n_cols = len(result.columns)
    if not result.rows:
        return [html.Tr(html.Td("No matching records.", colSpan=n_cols, className="text-center text-muted"))]
    return [
        html.Tr([html.Td(col.render(row.value(col.id))) for col in result.columns])
        for row in result.rows
    ]


def page_info_text(result: PipelineResult) -> str:
    text = f"{result.first_row_number}–{result.last_row_number} of {result.filtered_count}"
    if result.filtered_count != result.total_count:
        text += f" (filtered from {result.total_count})"
    return text


def render_view_list(names: Sequence[str]) -> List[html.Div]:
    if not names:
        return [html.P("No saved views yet.", className="text-muted")]
    return [
        html.Div(
            [
                html.Span(name),
                html.Div(
                    [
                        dbc.Button("Load", id=view_load_id(name), size="sm", outline=True,
                                   color="primary", className="me-2"),
                        dbc.Button("Delete", id=view_delete_id(name), size="sm", outline=True,
                                   color="secondary"),
                    ]
                ),
            ],
            className="d-flex justify-content-between mb-2",
        )
        for name in names
    ]
