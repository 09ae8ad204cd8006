from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from pathlib import Path
from typing import List, Mapping, Sequence, Union

import pandas as pd

from fmcsa_viewer.core.exceptions import RecordLoadError
from fmcsa_viewer.core.records import Record, Scalar, as_record

logger = logging.getLogger(__name__)


def frame_to_records(df: pd.DataFrame) -> List[Record]:
    """Convert a DataFrame to Records in row order; NaN cells become absent (None)."""
    clean = df.astype(object).where(pd.notna(df), None)
    return [Record(row) for row in clean.to_dict("records")]


class RecordProvider(ABC):
    """
    Zero-argument async source of the full, ordered dataset.
    Instances are awaitable callables so they plug into RecordStore.load.
    """

    @abstractmethod
    async def fetch(self) -> List[Record]:
        pass

    async def __call__(self) -> List[Record]:
        return await self.fetch()


class StaticRecordProvider(RecordProvider):
    """Serves rows that are already in memory."""

    def __init__(self, rows: Sequence[Mapping[str, Scalar]]):
        self._rows = [as_record(r) for r in rows]

    async def fetch(self) -> List[Record]:
        return list(self._rows)


class FileRecordProvider(RecordProvider):
    """
    Reads a CSV or JSON dataset from a local path or URL with pandas.

    Every column is read as text so identifiers such as DOT numbers keep
    their leading zeros; blank cells become None.
    """

    READERS = {
        ".csv": "csv",
        ".json": "json",
    }

    def __init__(self, source: Union[str, Path]):
        self.source = str(source)

    def _format(self) -> str:
        suffix = Path(self.source.split("?", 1)[0]).suffix.lower()
        fmt = self.READERS.get(suffix)
        if fmt is None:
            raise RecordLoadError(f"Unsupported dataset format {suffix!r} for {self.source}")
        return fmt

    def read_frame(self) -> pd.DataFrame:
        fmt = self._format()
        try:
            if fmt == "csv":
                return pd.read_csv(self.source, dtype=str, keep_default_na=False, na_values=[""])
            return pd.read_json(self.source, orient="records", dtype=False)
        except (OSError, ValueError) as e:
            raise RecordLoadError(f"Could not read dataset from {self.source}: {e}") from e

    async def fetch(self) -> List[Record]:
        logger.info("Fetching records", extra={"source": self.source})
        df = self.read_frame()
        records = frame_to_records(df)
        logger.info("Fetched records", extra={"source": self.source, "n_records": len(records)})
        return records
