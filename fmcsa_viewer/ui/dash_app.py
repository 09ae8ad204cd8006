from __future__ import annotations

import logging
from pathlib import Path

import dash_bootstrap_components as dbc
from dash import Dash

from .config import AppConfig
from fmcsa_viewer.config.loader import load_global_config
from fmcsa_viewer.core.exceptions import ConfigError
from fmcsa_viewer.services.record_provider import FileRecordProvider
from fmcsa_viewer.ui.layout.build_layout import build_layout
from fmcsa_viewer.ui.callbacks.callbacks_state import register_state_callbacks
from fmcsa_viewer.ui.callbacks.callbacks_table import register_table_callbacks
from fmcsa_viewer.ui.callbacks.callbacks_views import register_view_callbacks

logger = logging.getLogger(__name__)


def create_dash_app(config_root: Path | str = Path("config")) -> Dash:
    config_root = Path(config_root)

    # 1) Load Config
    global_config = load_global_config(config_root)
    if not global_config.data_source:
        raise ConfigError(f"No data_source configured in {config_root / 'global.json'}")

    # 2) App Context; the dataset itself is fetched on first render
    ctx = AppConfig(
        global_config=global_config,
        record_provider=FileRecordProvider(global_config.data_source),
    )
    ctx.validate()

    assets_path = Path(__file__).parent / "assets"

    app = Dash(
        __name__,
        external_stylesheets=[dbc.themes.FLATLY],
        assets_folder=str(assets_path),
        suppress_callback_exceptions=True,
    )

    app.title = global_config.ui_title

    app.layout = build_layout(ctx)

    # Register callbacks
    register_state_callbacks(app, ctx)
    register_table_callbacks(app, ctx)
    register_view_callbacks(app, ctx)

    logger.info(
        "Dash app created",
        extra={"config_root": str(config_root), "data_source": global_config.data_source},
    )
    return app
