from __future__ import annotations

import json
from dataclasses import dataclass, field, replace
from typing import Any, Dict, Optional, Sequence, Tuple

from fmcsa_viewer.core.columns import DEFAULT_COLUMNS, ColumnDescriptor, resolve_columns
from fmcsa_viewer.core.filter_state import (
    ASC,
    DEFAULT_PAGE_SIZE,
    FilterState,
    PageState,
    SortState,
)
from fmcsa_viewer.core.records import Record, as_record


@dataclass(frozen=True)
class ViewSnapshot:
    """
    Serializable bundle of a view.

    - columns: column order (always a permutation of DEFAULT_COLUMNS)
    - filters / sort / page: the state driving the pipeline
    - data: materialized filtered+sorted records; only share links carry it,
      so the recipient sees the same rows without re-fetching the dataset

    The wire format uses the camelCase keys of views already stored in
    browsers (columnsConfig, filterText, columnFilters, order, orderBy, page,
    rowsPerPage, filteredData) so stored views stay readable.
    """

    columns: Tuple[ColumnDescriptor, ...] = DEFAULT_COLUMNS
    filters: FilterState = field(default_factory=FilterState)
    sort: SortState = field(default_factory=SortState)
    page: PageState = field(default_factory=PageState)
    data: Optional[Tuple[Record, ...]] = None

    @classmethod
    def default(cls, page_size: int = DEFAULT_PAGE_SIZE) -> ViewSnapshot:
        return cls(page=PageState(size=page_size))

    @property
    def has_data(self) -> bool:
        return self.data is not None

    def with_data(self, records: Sequence[Record]) -> ViewSnapshot:
        return replace(self, data=tuple(as_record(r) for r in records))

    def without_data(self) -> ViewSnapshot:
        return replace(self, data=None)

    def to_dict(self) -> Dict[str, Any]:
        out: Dict[str, Any] = {
            "columnsConfig": [c.to_dict() for c in self.columns],
            "filterText": self.filters.global_text,
            "columnFilters": dict(self.filters.per_column),
            "order": self.sort.direction,
            "orderBy": self.sort.key,
            "page": self.page.index,
            "rowsPerPage": self.page.size,
        }
        if self.data is not None:
            out["filteredData"] = [r.to_dict() for r in self.data]
        return out

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> ViewSnapshot:
        """
        Rebuild a snapshot from a dict produced by to_dict. Column formatters
        are restored from the canonical column registry by id.
        """
        column_ids = [
            c.get("id") if isinstance(c, dict) else c
            for c in data.get("columnsConfig", [])
        ]
        raw_data = data.get("filteredData")

        return cls(
            columns=resolve_columns(column_ids),
            filters=FilterState(
                global_text=data.get("filterText") or "",
                per_column=dict(data.get("columnFilters") or {}),
            ),
            sort=SortState(key=data.get("orderBy") or "", direction=data.get("order") or ASC),
            page=PageState(
                index=int(data.get("page", 0)),
                size=int(data.get("rowsPerPage", DEFAULT_PAGE_SIZE)),
            ),
            data=None if raw_data is None else tuple(Record(r) for r in raw_data),
        )


def snapshot_to_json(snapshot: ViewSnapshot) -> str:
    return json.dumps(snapshot.to_dict(), default=str)


def snapshot_from_json(text: str) -> Dict[str, Any]:
    """Decode stored text; validation happens in the caller before from_dict."""
    return json.loads(text)
