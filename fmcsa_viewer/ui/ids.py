from __future__ import annotations

__all__ = [
    "IDs",
    "column_filter_id",
    "sort_header_id",
    "move_left_id",
    "move_right_id",
    "view_load_id",
    "view_delete_id",
]


class IDs:
    class Store:
        WORKING_STATE = "working-state"
        VIEW_STORAGE = "view-storage"

    class Control:
        URL = "url"

        # Toolbar
        OPEN_VIEWS_BTN = "open-views-btn"
        RESET_BTN = "reset-btn"
        SHARE_BTN = "share-btn"
        SHARE_LINK = "share-link"
        NOTIFICATION = "notification"

        # Filters + table
        GLOBAL_SEARCH = "global-search-input"
        TABLE_HEADER = "table-header"
        TABLE_BODY = "table-body"

        # Pagination
        PAGE_PREV = "page-prev"
        PAGE_NEXT = "page-next"
        PAGE_SIZE = "page-size-select"
        PAGE_INFO = "page-info"

        # Saved views dialog
        VIEWS_MODAL = "views-modal"
        VIEWS_CLOSE_BTN = "views-close-btn"
        VIEW_NAME_INPUT = "view-name-input"
        SAVE_VIEW_BTN = "save-view-btn"
        MODAL_RESET_BTN = "modal-reset-btn"
        VIEW_LIST = "view-list"

    class Pattern:
        # pattern-matching "type" strings
        COLUMN_FILTER = "column-filter"
        SORT_HEADER = "sort-header"
        MOVE_LEFT = "move-column-left"
        MOVE_RIGHT = "move-column-right"
        VIEW_LOAD = "view-load"
        VIEW_DELETE = "view-delete"


def column_filter_id(column_id: str) -> dict:
    return {"type": IDs.Pattern.COLUMN_FILTER, "index": column_id}


def sort_header_id(column_id: str) -> dict:
    return {"type": IDs.Pattern.SORT_HEADER, "index": column_id}


def move_left_id(column_id: str) -> dict:
    return {"type": IDs.Pattern.MOVE_LEFT, "index": column_id}


def move_right_id(column_id: str) -> dict:
    return {"type": IDs.Pattern.MOVE_RIGHT, "index": column_id}


def view_load_id(name: str) -> dict:
    return {"type": IDs.Pattern.VIEW_LOAD, "index": name}


def view_delete_id(name: str) -> dict:
    return {"type": IDs.Pattern.VIEW_DELETE, "index": name}
