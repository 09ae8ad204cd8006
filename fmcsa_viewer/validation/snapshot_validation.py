from __future__ import annotations

from typing import Any

from fmcsa_viewer.core.filter_state import PAGE_SIZE_OPTIONS, SORT_DIRECTIONS
from fmcsa_viewer.validation.errors import ValidationIssue, ValidationError


def validate_view_name(name: Any) -> str:
    """Return the stripped view name, or raise if there is nothing to save under."""
    cleaned = str(name).strip() if name is not None else ""
    if not cleaned:
        raise ValidationError([ValidationIssue("VIEW_NAME_EMPTY", "Please enter a name to save the view.")])
    return cleaned


def validate_snapshot_dict(obj: Any) -> None:
    """
    Validate a decoded snapshot BEFORE building a ViewSnapshot from it.
    A stored value that fails here is treated as missing, so a bad entry
    in storage never leaves the working state half-applied.
    """
    if not isinstance(obj, dict):
        raise ValidationError([ValidationIssue("SNAPSHOT_TYPE", "Stored view must be a JSON object.")])

    issues: list[ValidationIssue] = []

    columns = obj.get("columnsConfig", [])
    if not isinstance(columns, list):
        issues.append(ValidationIssue("SNAPSHOT_COLUMNS", "columnsConfig must be a list."))
    else:
        for i, col in enumerate(columns):
            col_id = col.get("id") if isinstance(col, dict) else col
            if not isinstance(col_id, str) or not col_id:
                issues.append(ValidationIssue("SNAPSHOT_COLUMNS", f"columnsConfig[{i}] has no id."))

    if not isinstance(obj.get("filterText", ""), str):
        issues.append(ValidationIssue("SNAPSHOT_FILTER_TEXT", "filterText must be a string."))

    column_filters = obj.get("columnFilters", {})
    if not isinstance(column_filters, dict):
        issues.append(ValidationIssue("SNAPSHOT_COLUMN_FILTERS", "columnFilters must be an object."))
    elif not all(isinstance(v, str) for v in column_filters.values()):
        issues.append(ValidationIssue("SNAPSHOT_COLUMN_FILTERS", "columnFilters values must be strings."))

    if obj.get("order", "asc") not in SORT_DIRECTIONS:
        issues.append(ValidationIssue("SNAPSHOT_ORDER", "order must be 'asc' or 'desc'."))

    if not isinstance(obj.get("orderBy", ""), str):
        issues.append(ValidationIssue("SNAPSHOT_ORDER_BY", "orderBy must be a string."))

    page = obj.get("page", 0)
    if isinstance(page, bool) or not isinstance(page, int) or page < 0:
        issues.append(ValidationIssue("SNAPSHOT_PAGE", "page must be a non-negative integer."))

    if obj.get("rowsPerPage", PAGE_SIZE_OPTIONS[1]) not in PAGE_SIZE_OPTIONS:
        issues.append(ValidationIssue("SNAPSHOT_ROWS_PER_PAGE", f"rowsPerPage must be one of {PAGE_SIZE_OPTIONS}."))

    data = obj.get("filteredData")
    if data is not None:
        if not isinstance(data, list) or not all(isinstance(r, dict) for r in data):
            issues.append(ValidationIssue("SNAPSHOT_DATA", "filteredData must be a list of objects."))

    if issues:
        raise ValidationError(issues)
