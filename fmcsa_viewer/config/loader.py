from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Dict, Optional

from fmcsa_viewer.config.model import GlobalConfig
from fmcsa_viewer.core.exceptions import ConfigError
from fmcsa_viewer.core.filter_state import DEFAULT_PAGE_SIZE, PAGE_SIZE_OPTIONS

logger = logging.getLogger(__name__)


def _resolve_data_source(root: Path, raw: Optional[str]) -> Optional[str]:
    """
    - URLs are used as-is.
    - Absolute paths are used as-is.
    - Relative paths are resolved relative to the config root directory.
    """
    if not raw:
        return None
    if "://" in raw:
        return raw
    path = Path(raw)
    if path.is_absolute():
        return str(path)
    return str((root / path).resolve())


def parse_global_config(raw: Dict[str, Any], root: Path) -> GlobalConfig:
    if not isinstance(raw, dict):
        raise ConfigError("global.json must contain a JSON object")

    page_size = raw.get("default_page_size", DEFAULT_PAGE_SIZE)
    if page_size not in PAGE_SIZE_OPTIONS:
        raise ConfigError(
            f"default_page_size must be one of {PAGE_SIZE_OPTIONS}, got {page_size!r}"
        )

    return GlobalConfig(
        ui_title=raw.get("ui_title", "FMCSA Viewer"),
        data_source=_resolve_data_source(root, raw.get("data_source")),
        default_page_size=page_size,
        namespaced_views=bool(raw.get("namespaced_views", True)),
        config_root=root,
    )


def load_global_config(root: Path) -> GlobalConfig:
    """
    Load configuration from a directory.

    Expected structure:

        root/
            global.json

    :param root: Directory containing 'global.json'.
    :return: A GlobalConfig instance.
    :raises FileNotFoundError: if global.json does not exist.
    :raises ConfigError: if global.json is not valid JSON or has invalid values.
    """
    root = Path(root)
    logger.info(
        "Loading global config",
        extra={"config_root": str(root)},
    )

    global_path = root / "global.json"
    if not global_path.is_file():
        raise FileNotFoundError(f"File not found at {global_path}")

    try:
        with global_path.open() as f:
            raw = json.load(f)
    except json.JSONDecodeError as e:
        raise ConfigError(f"Invalid JSON in {global_path}: {e}") from e

    return parse_global_config(raw, root)
