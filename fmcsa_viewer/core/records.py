from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from types import MappingProxyType
from typing import Any, Awaitable, Callable, Dict, Iterator, Mapping, Optional, Sequence, Tuple, Union

logger = logging.getLogger(__name__)

Scalar = Union[str, int, float, None]


def stringify(value: Any) -> str:
    """
    Text form of a field value used for matching and sorting.
    None and NaN become "", integral floats drop their ".0".
    """
    if value is None:
        return ""
    if isinstance(value, float):
        if math.isnan(value):
            return ""
        if value.is_integer():
            return str(int(value))
    return str(value)


class Record(Mapping[str, Scalar]):
    """
    One immutable row of the dataset.

    Fields are read dynamically by column id. A key that is not present
    on the row reads as absent (None) rather than raising, so callers never
    rely on lookups failing.
    """

    __slots__ = ("_fields",)

    def __init__(self, fields: Optional[Mapping[str, Scalar]] = None, **kwargs: Scalar) -> None:
        data: Dict[str, Scalar] = dict(fields or {})
        data.update(kwargs)
        self._fields = MappingProxyType(data)

    def __getitem__(self, key: str) -> Scalar:
        return self._fields[key]

    def __iter__(self) -> Iterator[str]:
        return iter(self._fields)

    def __len__(self) -> int:
        return len(self._fields)

    def __hash__(self) -> int:
        return hash(tuple(sorted((k, stringify(v)) for k, v in self._fields.items())))

    def __repr__(self) -> str:
        return f"Record({dict(self._fields)!r})"

    def value(self, column_id: str) -> Scalar:
        """Raw value for a column, None when the field is missing."""
        return self._fields.get(column_id)

    def text(self, column_id: str) -> str:
        """Stringified value for a column, "" when missing or null."""
        return stringify(self._fields.get(column_id))

    def to_dict(self) -> Dict[str, Scalar]:
        return dict(self._fields)


def as_record(row: Union[Record, Mapping[str, Scalar]]) -> Record:
    return row if isinstance(row, Record) else Record(row)


RecordFetch = Callable[[], Awaitable[Sequence[Mapping[str, Scalar]]]]


@dataclass(frozen=True)
class RecordStore:
    """
    The raw dataset for a session.

    - records: rows in load order; never mutated after load
    - loading: True until the provider has resolved (successfully or not)
    - error: message of the failed load, if any
    """

    records: Tuple[Record, ...] = ()
    loading: bool = True
    error: Optional[str] = None

    @classmethod
    def loading_state(cls) -> RecordStore:
        return cls()

    @classmethod
    def from_rows(cls, rows: Sequence[Mapping[str, Scalar]]) -> RecordStore:
        return cls(records=tuple(as_record(r) for r in rows), loading=False)

    @classmethod
    async def load(cls, fetch: RecordFetch) -> RecordStore:
        """
        Await the provider once. A failed fetch is logged and yields an
        empty store that is no longer loading.
        """
        try:
            rows = await fetch()
        except Exception as e:
            logger.exception("Error fetching records")
            return cls(records=(), loading=False, error=str(e))

        store = cls.from_rows(rows)
        logger.info("Records loaded", extra={"n_records": len(store.records)})
        return store

    def __len__(self) -> int:
        return len(self.records)
