from __future__ import annotations

from abc import ABC, abstractmethod
from pathlib import Path
from typing import Dict, List, MutableMapping, Optional
from urllib.parse import quote, unquote


class KeyValueStore(ABC):
    """
    Abstract interface for the client-local string store views live in
    (browser localStorage, a dict, a directory on disk).
    """

    @abstractmethod
    def set_item(self, key: str, value: str) -> None:
        pass

    @abstractmethod
    def get_item(self, key: str) -> Optional[str]:
        """Stored value, or None when the key is absent."""
        pass

    @abstractmethod
    def remove_item(self, key: str) -> None:
        """Remove a key; removing an absent key is a no-op."""
        pass

    @abstractmethod
    def keys(self) -> List[str]:
        """All keys currently in the store, including ones this app did not write."""
        pass


class DictKeyValueStore(KeyValueStore):
    """
    Store backed by a plain dict.

    Passing an existing dict makes the store operate on it in place, which is
    how the Dash UI works on the data of a localStorage-backed dcc.Store.
    """

    def __init__(self, data: Optional[MutableMapping[str, str]] = None):
        self.data: MutableMapping[str, str] = data if data is not None else {}

    def set_item(self, key: str, value: str) -> None:
        self.data[key] = value

    def get_item(self, key: str) -> Optional[str]:
        return self.data.get(key)

    def remove_item(self, key: str) -> None:
        self.data.pop(key, None)

    def keys(self) -> List[str]:
        return list(self.data.keys())

    def to_dict(self) -> Dict[str, str]:
        return dict(self.data)


class LocalFileKeyValueStore(KeyValueStore):
    """
    One file per key under a root directory. Keys are percent-encoded into
    file names so arbitrary view names map to a single flat file.
    """

    SUFFIX = ".json"

    def __init__(self, root: Path):
        self.root = Path(root).resolve()
        self.root.mkdir(parents=True, exist_ok=True)

    def _resolve(self, key: str) -> Path:
        full_path = (self.root / f"{quote(key, safe='')}{self.SUFFIX}").resolve()
        # Prevent path traversal attacks
        if full_path.parent != self.root:
            raise ValueError(f"Access denied: {key}")
        return full_path

    def set_item(self, key: str, value: str) -> None:
        self._resolve(key).write_text(value, encoding="utf-8")

    def get_item(self, key: str) -> Optional[str]:
        p = self._resolve(key)
        if not p.is_file():
            return None
        return p.read_text(encoding="utf-8")

    def remove_item(self, key: str) -> None:
        self._resolve(key).unlink(missing_ok=True)

    def keys(self) -> List[str]:
        return sorted(
            unquote(f.name[: -len(self.SUFFIX)])
            for f in self.root.glob(f"*{self.SUFFIX}")
            if f.is_file()
        )
