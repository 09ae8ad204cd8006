from __future__ import annotations

from dataclasses import dataclass, field, replace
from types import MappingProxyType
from typing import Any, Dict, Mapping

ASC = "asc"
DESC = "desc"
SORT_DIRECTIONS = (ASC, DESC)

PAGE_SIZE_OPTIONS = (5, 10, 25)
DEFAULT_PAGE_SIZE = 10


@dataclass(frozen=True)
class FilterState:
    """
    Represents the current text filters.

    Fields:

    - global_text: free text matched against every field of a record
    - per_column: column id -> text matched against that column only

    Absent columns are unfiltered. Empty strings are never stored in
    per_column; clearing a column filter removes its entry.
    """

    global_text: str = ""
    per_column: Mapping[str, str] = field(default_factory=dict)

    def __post_init__(self) -> None:
        cleaned = {k: v for k, v in dict(self.per_column).items() if v}
        object.__setattr__(self, "per_column", MappingProxyType(cleaned))

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, FilterState):
            return NotImplemented
        return self.global_text == other.global_text and dict(self.per_column) == dict(other.per_column)

    def __hash__(self) -> int:
        return hash((self.global_text, tuple(sorted(self.per_column.items()))))

    @property
    def is_empty(self) -> bool:
        return not self.global_text and not self.per_column

    def with_column(self, column_id: str, text: str) -> FilterState:
        per_column = dict(self.per_column)
        if text:
            per_column[column_id] = text
        else:
            per_column.pop(column_id, None)
        return replace(self, per_column=per_column)

    def to_dict(self) -> Dict[str, Any]:
        return {"global_text": self.global_text, "per_column": dict(self.per_column)}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> FilterState:
        return cls(
            global_text=str(data.get("global_text") or ""),
            per_column={str(k): str(v) for k, v in (data.get("per_column") or {}).items()},
        )


@dataclass(frozen=True)
class SortState:
    """
    Single-key sort.

    - key: column id, "" means no sort (load order is kept)
    - direction: "asc" or "desc"
    """

    key: str = ""
    direction: str = ASC

    def __post_init__(self) -> None:
        if self.direction not in SORT_DIRECTIONS:
            raise ValueError(f"Unknown sort direction {self.direction!r}")

    @property
    def is_active(self) -> bool:
        return bool(self.key)

    def to_dict(self) -> Dict[str, Any]:
        return {"key": self.key, "direction": self.direction}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> SortState:
        return cls(key=str(data.get("key") or ""), direction=data.get("direction", ASC))


@dataclass(frozen=True)
class PageState:
    """
    Current page: zero-based index and a page size from PAGE_SIZE_OPTIONS.
    """

    index: int = 0
    size: int = DEFAULT_PAGE_SIZE

    def __post_init__(self) -> None:
        if isinstance(self.index, bool) or not isinstance(self.index, int) or self.index < 0:
            raise ValueError(f"Page index must be a non-negative integer, got {self.index!r}")
        if self.size not in PAGE_SIZE_OPTIONS:
            raise ValueError(f"Page size must be one of {PAGE_SIZE_OPTIONS}, got {self.size!r}")

    def first(self) -> PageState:
        return replace(self, index=0)

    def to_dict(self) -> Dict[str, Any]:
        return {"index": self.index, "size": self.size}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> PageState:
        return cls(index=int(data.get("index", 0)), size=int(data.get("size", DEFAULT_PAGE_SIZE)))
