"""
ReportCache -- Optional memoization of computed reports.

Reports are keyed by (report name, user id, parameters).  A cached report
is only valid until the user's journals or documents change; the writer
calls ``invalidate(user_id)`` after every such change.  The service works
the same with or without a cache.
"""

from __future__ import annotations

import threading
from collections.abc import Callable, Hashable
from typing import Any, TypeVar

from ledger_kernel.logging_config import get_logger

logger = get_logger("reports.cache")

T = TypeVar("T")

CacheKey = tuple[str, str, Hashable]


class ReportCache:
    """In-process report cache with per-user invalidation."""

    def __init__(self) -> None:
        self._entries: dict[CacheKey, Any] = {}
        self._lock = threading.Lock()
        self.hits = 0
        self.misses = 0

    def __len__(self) -> int:
        return len(self._entries)

    def get_or_compute(
        self,
        report: str,
        user_id: str,
        params: Hashable,
        compute: Callable[[], T],
    ) -> T:
        """Return the cached report or compute and store it."""
        key: CacheKey = (report, user_id, params)
        with self._lock:
            if key in self._entries:
                self.hits += 1
                logger.debug("report_cache_hit", extra={"report": report, "user_id": user_id})
                return self._entries[key]
            self.misses += 1

        value = compute()

        with self._lock:
            self._entries[key] = value
        logger.debug("report_cache_stored", extra={"report": report, "user_id": user_id})
        return value

    def invalidate(self, user_id: str) -> int:
        """Drop every cached report of ``user_id``. Returns the number dropped."""
        with self._lock:
            stale = [k for k in self._entries if k[1] == user_id]
            for key in stale:
                del self._entries[key]
        logger.info("report_cache_invalidated", extra={"user_id": user_id, "dropped": len(stale)})
        return len(stale)

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()
