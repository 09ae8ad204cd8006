from __future__ import annotations

import logging
import time
from dataclasses import dataclass
from typing import Callable, List, Optional
from urllib.parse import parse_qs, urlencode, urlsplit, urlunsplit

from fmcsa_viewer.core.filter_state import DEFAULT_PAGE_SIZE
from fmcsa_viewer.core.snapshot import ViewSnapshot, snapshot_from_json, snapshot_to_json
from fmcsa_viewer.services.storage import KeyValueStore
from fmcsa_viewer.validation.errors import ValidationError
from fmcsa_viewer.validation.snapshot_validation import validate_snapshot_dict, validate_view_name

logger = logging.getLogger(__name__)

VIEW_QUERY_PARAM = "view"
SHARE_KEY_PREFIX = "view_"
NAMED_KEY_PREFIX = "saved_view:"

_BASE36 = "0123456789abcdefghijklmnopqrstuvwxyz"


def to_base36(n: int) -> str:
    if n < 0:
        raise ValueError("to_base36 expects a non-negative integer")
    if n == 0:
        return "0"
    digits = []
    while n:
        n, rem = divmod(n, 36)
        digits.append(_BASE36[rem])
    return "".join(reversed(digits))


def generate_share_id(clock: Callable[[], float] = time.time) -> str:
    """
    Time-derived share identifier (epoch milliseconds in base 36).
    Two links minted in the same millisecond collide; that risk is accepted.
    """
    return to_base36(int(clock() * 1000))


def share_key(share_id: str) -> str:
    return f"{SHARE_KEY_PREFIX}{share_id}"


@dataclass(frozen=True)
class ViewResult:
    """
    Outcome of a view-store operation.

    - ok: False for not-found and validation failures
    - message: user-facing notification text
    - snapshot: the loaded/default snapshot, when there is one
    """

    ok: bool
    message: str
    snapshot: Optional[ViewSnapshot] = None


class ViewStore:
    """
    Saves, loads, lists and deletes named views, and mints/resolves share
    links, on top of a KeyValueStore.

    Key layout:
    - share links: "view_<id>" (full snapshot including materialized rows)
    - named views: "saved_view:<name>" when namespaced (default); the raw
      name otherwise

    With namespaced=False the flat localStorage layout of legacy stored views
    is used, and list() returns every key in the store, share-link keys
    and keys written by unrelated code included. This is a known limitation
    of the flat mode.
    """

    def __init__(
            self,
            storage: KeyValueStore,
            *,
            namespaced: bool = True,
            clock: Callable[[], float] = time.time,
    ):
        self.storage = storage
        self.namespaced = namespaced
        self.clock = clock

    def _named_key(self, name: str) -> str:
        return f"{NAMED_KEY_PREFIX}{name}" if self.namespaced else name

    @staticmethod
    def _normalize(name: Optional[str]) -> str:
        # matches validate_view_name
        return str(name).strip() if name is not None else ""

    def _read(self, key: str) -> Optional[ViewSnapshot]:
        """Stored snapshot, or None when the key is absent or its value is malformed."""
        raw = self.storage.get_item(key)
        if raw is None:
            return None
        try:
            data = snapshot_from_json(raw)
            validate_snapshot_dict(data)
            return ViewSnapshot.from_dict(data)
        except ValidationError as e:
            logger.warning("Stored view %r failed validation: %s", key, ", ".join(e.codes))
            return None
        except (ValueError, TypeError, RecursionError) as e:
            logger.warning("Stored view %r is not a valid snapshot: %s", key, e)
            return None

    # ---------------------------------------------------------------------
    # Named views
    # ---------------------------------------------------------------------
    def save(self, name: str, snapshot: ViewSnapshot) -> ViewResult:
        """
        Store a snapshot under name, replacing any existing view of that
        name. Materialized rows are not kept for named views.
        """
        try:
            name = validate_view_name(name)
        except ValidationError as e:
            logger.info("Refusing to save view with empty name")
            return ViewResult(ok=False, message=e.user_message)

        self.storage.set_item(self._named_key(name), snapshot_to_json(snapshot.without_data()))
        logger.info("Saved view", extra={"view_name": name})
        return ViewResult(ok=True, message=f"View '{name}' saved.")

    def list(self) -> List[str]:
        keys = self.storage.keys()
        if not self.namespaced:
            return keys
        return [k[len(NAMED_KEY_PREFIX):] for k in keys if k.startswith(NAMED_KEY_PREFIX)]

    def load(self, name: str) -> ViewResult:
        name = self._normalize(name)
        snapshot = self._read(self._named_key(name))
        if snapshot is None:
            logger.info("View not found", extra={"view_name": name})
            return ViewResult(ok=False, message=f"No saved view found with the name '{name}'.")

        logger.info("Loaded view", extra={"view_name": name})
        return ViewResult(ok=True, message=f"View '{name}' loaded.", snapshot=snapshot)

    def delete(self, name: str) -> ViewResult:
        name = self._normalize(name)
        self.storage.remove_item(self._named_key(name))
        logger.info("Deleted view", extra={"view_name": name})
        return ViewResult(ok=True, message=f"View '{name}' deleted.")

    def reset(self, page_size: int = DEFAULT_PAGE_SIZE) -> ViewResult:
        return ViewResult(ok=True, message="View reset to default.", snapshot=ViewSnapshot.default(page_size))

    # ---------------------------------------------------------------------
    # Share links
    # ---------------------------------------------------------------------
    def generate_share_link(self, snapshot: ViewSnapshot, page_url: str) -> str:
        """
        Store the snapshot (with its materialized rows) under a fresh share
        id and return page_url with its query replaced by view=<id>.
        """
        share_id = generate_share_id(self.clock)
        self.storage.set_item(share_key(share_id), snapshot_to_json(snapshot))

        parts = urlsplit(page_url)
        link = urlunsplit(
            (parts.scheme, parts.netloc, parts.path, urlencode({VIEW_QUERY_PARAM: share_id}), "")
        )
        logger.info(
            "Generated share link",
            extra={"share_id": share_id, "n_rows": len(snapshot.data or ())},
        )
        return link

    def resolve_share_link(self, url_query: Optional[str]) -> Optional[ViewSnapshot]:
        """
        Look up the snapshot named by the view parameter of a query string
        ("?view=abc" or "view=abc"). None when there is no parameter or no
        stored snapshot for it.
        """
        share_id = parse_view_param(url_query)
        if share_id is None:
            return None

        snapshot = self._read(share_key(share_id))
        if snapshot is None:
            logger.info("Share link not found", extra={"share_id": share_id})
            return None

        logger.info("Resolved share link", extra={"share_id": share_id})
        return snapshot


def parse_view_param(url_query: Optional[str]) -> Optional[str]:
    if not url_query:
        return None
    values = parse_qs(url_query.lstrip("?")).get(VIEW_QUERY_PARAM)
    if not values or not values[0]:
        return None
    return values[0]
