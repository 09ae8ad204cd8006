"""
Service layer: key-value storage adapters, the view store (named views and
share links) and record providers.
"""

from .storage import DictKeyValueStore, KeyValueStore, LocalFileKeyValueStore
from .view_store import ViewResult, ViewStore

__all__ = ["DictKeyValueStore", "KeyValueStore", "LocalFileKeyValueStore", "ViewResult", "ViewStore"]
