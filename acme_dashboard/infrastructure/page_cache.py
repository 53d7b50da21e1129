"""Page Cache — process-local cache of page data keyed by route path.

Invariants:
    - Keys are (path, query) pairs; invalidate(path) drops every query variant
    - invalidate(path) also drops nested routes ("/a" clears "/a/b/edit")
      unless nested=False, which drops only "/a" itself
    - invalidate("/a") never touches "/ab" (segment boundary, not string prefix)
    - Never holds more than max_entries pages; the least recently used goes first
    - Only called after a mutation has committed

Design Decisions:
    - One instance per app (app.state.page_cache): deliberate exception to no-global-state rule
      (ADR: single-process uvicorn; a multi-worker deploy would need a shared store)
    - No TTL: entries live until a mutation invalidates them or they are evicted
    - Bounded because the query string is client-controlled: every ?query= or
      ?page= variant is its own entry
"""

import logging
from collections import OrderedDict
from typing import Any

logger = logging.getLogger(__name__)


def _normalize(path: str) -> str:
    if len(path) > 1:
        return path.rstrip("/")
    return path


class PageCache:
    """Cached page data per route, invalidated by path."""

    DEFAULT_MAX_ENTRIES = 256

    def __init__(self, max_entries: int = DEFAULT_MAX_ENTRIES):
        if max_entries <= 0:
            raise ValueError("max_entries must be positive")
        self.max_entries = max_entries
        self._entries: OrderedDict[tuple[str, str], Any] = OrderedDict()

    def get(self, path: str, query: str = "") -> Any | None:
        key = (_normalize(path), query)
        if key not in self._entries:
            return None
        self._entries.move_to_end(key)
        return self._entries[key]

    def put(self, path: str, query: str, data: Any) -> None:
        key = (_normalize(path), query)
        self._entries[key] = data
        self._entries.move_to_end(key)
        while len(self._entries) > self.max_entries:
            self._entries.popitem(last=False)

    def invalidate(self, path: str, nested: bool = True) -> None:
        """Mark `path` (and, by default, every route nested under it) as stale."""
        root = _normalize(path)
        prefix = root if root.endswith("/") else root + "/"
        stale = [
            key for key in self._entries
            if key[0] == root or (nested and key[0].startswith(prefix))
        ]
        for key in stale:
            del self._entries[key]
        logger.info(
            f"Invalidated {len(stale)} cached page(s)", extra={"path": root},
        )

    def clear(self) -> None:
        self._entries.clear()

    def __len__(self) -> int:
        return len(self._entries)
