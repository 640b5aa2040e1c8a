"""Snapshot cache for record-store collections.

One ``QueryCache`` is created per browser session and passed to the tabs.
Snapshots are keyed by ``(path, params)``. A failed read is logged and not
cached, so callers get an empty collection and the aggregates fall back to
zeroed values. A successful mutation drops every snapshot under the path
prefixes it touches; a failed one re-raises and leaves the snapshots alone.
"""

from __future__ import annotations

import logging
import threading
import time
from concurrent.futures import ThreadPoolExecutor
from typing import Any, Callable

from dashboard.data import api_client

logger = logging.getLogger(__name__)

Fetcher = Callable[..., Any]


def _freeze(params: dict | None) -> tuple:
    return tuple(sorted((params or {}).items()))


class QueryCache:
    def __init__(self, fetcher: Fetcher | None = None, ttl_seconds: float | None = 60, max_workers: int = 6):
        self._fetcher = fetcher or api_client.request
        self._ttl = ttl_seconds
        self._max_workers = max_workers
        self._snapshots: dict[tuple, tuple[float, Any]] = {}
        self._lock = threading.Lock()

    def key(self, path: str, params: dict | None = None) -> tuple:
        return (path, _freeze(params))

    def peek(self, path: str, params: dict | None = None, default=None):
        with self._lock:
            stored = self._snapshots.get(self.key(path, params))
        return default if stored is None else stored[1]

    def _fresh(self, key):
        with self._lock:
            stored = self._snapshots.get(key)
        if stored is None:
            return False, None
        stored_at, payload = stored
        if self._ttl is not None and time.monotonic() - stored_at > self._ttl:
            return False, None
        return True, payload

    def fetch(self, path: str, params: dict | None = None, force: bool = False):
        key = self.key(path, params)
        if not force:
            hit, payload = self._fresh(key)
            if hit:
                return payload
        try:
            payload = self._fetcher("GET", path, params=params)
        except Exception:
            logger.exception("Fetch failed for %s %s", path, params or {})
            return None
        with self._lock:
            self._snapshots[key] = (time.monotonic(), payload)
        return payload

    def items(self, path: str, params: dict | None = None, force: bool = False) -> list:
        payload = self.fetch(path, params, force=force)
        if isinstance(payload, dict):
            return list(payload.get("items") or [])
        return []

    def prefetch(self, requests: list[tuple[str, dict | None]]) -> dict:
        """Fetch independent collections in parallel; returns {key: payload}."""
        results = {}
        if not requests:
            return results
        workers = max(1, min(self._max_workers, len(requests)))
        with ThreadPoolExecutor(max_workers=workers) as pool:
            futures = {
                self.key(path, params): pool.submit(self.fetch, path, params)
                for path, params in requests
            }
            for key, future in futures.items():
                results[key] = future.result()
        return results

    def invalidate(self, *prefixes: str) -> int:
        with self._lock:
            stale = [key for key in self._snapshots if any(key[0].startswith(prefix) for prefix in prefixes)]
            for key in stale:
                del self._snapshots[key]
        if stale:
            logger.debug("Invalidated %s cached queries under %s", len(stale), prefixes)
        return len(stale)

    def clear(self):
        with self._lock:
            self._snapshots.clear()

    def mutate(self, method: str, path: str, json: dict | None = None, invalidates: tuple[str, ...] = ()):
        result = self._fetcher(method, path, json=json)
        self.invalidate(*(invalidates or (path,)))
        return result
