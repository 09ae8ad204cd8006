from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Callable, Dict, Iterable, List, Mapping, Optional, Sequence, Tuple

import pandas as pd

logger = logging.getLogger(__name__)

Formatter = Callable[[str], str]


def format_datetime(value: str) -> str:
    """Render an ISO-ish timestamp as 'MM/DD/YYYY, HH:MM:SS'; raw text if unparseable."""
    ts = pd.to_datetime(value, errors="coerce")
    if ts is None or pd.isna(ts):
        return value
    return ts.strftime("%m/%d/%Y, %I:%M:%S %p")


@dataclass(frozen=True)
class ColumnDescriptor:
    """
    A single table column.

    - id: stable field key read from each Record (unique within a layout)
    - label: header text
    - format: optional display formatter applied to string values
    """

    id: str
    label: str
    format: Optional[Formatter] = None

    def render(self, value: Any) -> str:
        if self.format is not None and isinstance(value, str) and value:
            return self.format(value)
        if value is None or value == "":
            return "N/A"
        return str(value)

    def to_dict(self) -> Dict[str, str]:
        return {"id": self.id, "label": self.label}


DEFAULT_COLUMNS: Tuple[ColumnDescriptor, ...] = (
    ColumnDescriptor("created_dt", "Created_DT", format_datetime),
    ColumnDescriptor("data_source_modified_dt", "Modified_DT", format_datetime),
    ColumnDescriptor("entity_type", "Entity"),
    ColumnDescriptor("operating_status", "Operating status"),
    ColumnDescriptor("legal_name", "Legal name"),
    ColumnDescriptor("dba_name", "DBA name"),
    ColumnDescriptor("physical_address", "Physical address"),
    ColumnDescriptor("phone", "Phone"),
    ColumnDescriptor("usdot_number", "DOT"),
    ColumnDescriptor("mc_mx_ff_number", "MC/MX/FF"),
    ColumnDescriptor("power_units", "Power units"),
    ColumnDescriptor("out_of_service_date", "Out of service date"),
)

COLUMNS_BY_ID: Mapping[str, ColumnDescriptor] = {c.id: c for c in DEFAULT_COLUMNS}


def reorder(
    columns: Sequence[ColumnDescriptor],
    from_index: int,
    to_index: int,
) -> Tuple[ColumnDescriptor, ...]:
    """
    Move the column at from_index so that it ends up at to_index.
    Other columns shift to fill the gap. Indices must be in range.
    """
    n = len(columns)
    if not 0 <= from_index < n or not 0 <= to_index < n:
        raise IndexError(f"reorder indices out of range: {from_index} -> {to_index} (n={n})")

    reordered: List[ColumnDescriptor] = list(columns)
    moved = reordered.pop(from_index)
    reordered.insert(to_index, moved)
    return tuple(reordered)


def reset_columns() -> Tuple[ColumnDescriptor, ...]:
    return DEFAULT_COLUMNS


def column_index(columns: Sequence[ColumnDescriptor], column_id: str) -> int:
    for i, col in enumerate(columns):
        if col.id == column_id:
            return i
    raise KeyError(column_id)


def resolve_columns(ids: Iterable[str]) -> Tuple[ColumnDescriptor, ...]:
    """
    Rebuild a layout from stored column ids.

    Unknown and repeated ids are dropped; canonical columns the stored order
    does not mention are appended in canonical order, so the result is always
    a permutation of DEFAULT_COLUMNS.
    """
    seen: Dict[str, ColumnDescriptor] = {}
    for column_id in ids:
        col = COLUMNS_BY_ID.get(column_id)
        if col is None:
            logger.debug("Dropping unknown column id %r from stored layout", column_id)
            continue
        seen.setdefault(column_id, col)

    missing = [c for c in DEFAULT_COLUMNS if c.id not in seen]
    return tuple(seen.values()) + tuple(missing)
