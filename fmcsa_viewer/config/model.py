from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from fmcsa_viewer.core.filter_state import DEFAULT_PAGE_SIZE


@dataclass
class GlobalConfig:
    """
    Parsed global.json.

    - ui_title: title shown in the navbar and browser tab
    - data_source: dataset path (resolved against the config root) or URL
    - default_page_size: initial rows per page, one of 5/10/25
    - namespaced_views: keep named views under their own key prefix instead
      of sharing the flat key space with share links and foreign keys
    """

    ui_title: str = "FMCSA Viewer"
    data_source: Optional[str] = None
    default_page_size: int = DEFAULT_PAGE_SIZE
    namespaced_views: bool = True
    config_root: Optional[Path] = None
