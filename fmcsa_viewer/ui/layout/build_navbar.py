from __future__ import annotations

import dash_bootstrap_components as dbc

from fmcsa_viewer.config.model import GlobalConfig


def build_navbar(global_config: GlobalConfig) -> dbc.Navbar:
    return dbc.Navbar(
        dbc.Container(
            dbc.NavbarBrand(global_config.ui_title, className="fw-semibold"),
            fluid=True,
        ),
        color="primary",
        dark=True,
        className="mb-3",
    )
