"""
mediascan.db.scan_cache – in-memory store of recent quick-scan verdicts.

Keyed by the exact URL string.  Entries expire after CACHE_TTL_SECONDS and
the oldest entry is dropped once the store exceeds MAX_CACHE_ENTRIES.
Nothing is written to disk.
"""
from __future__ import annotations

import asyncio
import time
from collections import OrderedDict
from typing import Callable

from mediascan.trust.fusion import ScanVerdict

CACHE_TTL_SECONDS = 5 * 60
MAX_CACHE_ENTRIES = 10_000  # cap to prevent unbounded growth


class ScanCache:
    """
    Async-safe TTL cache for verdicts.

    Usage::

        cache = ScanCache()
        verdict = await cache.get(url)
        if verdict is None:
            verdict = await scanner.scan(url)
            await cache.put(url, verdict)
    """

    def __init__(
        self,
        ttl_seconds: float = CACHE_TTL_SECONDS,
        max_entries: int = MAX_CACHE_ENTRIES,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self.ttl_seconds = ttl_seconds
        self.max_entries = max_entries
        self._clock = clock
        self._entries: OrderedDict[str, tuple[float, ScanVerdict]] = OrderedDict()
        self._lock = asyncio.Lock()

    async def get(self, url: str) -> ScanVerdict | None:
        """Return the cached verdict for *url*, or None if absent or expired."""
        async with self._lock:
            entry = self._entries.get(url)
            if entry is None:
                return None
            stored_at, verdict = entry
            if self._clock() - stored_at >= self.ttl_seconds:
                del self._entries[url]
                return None
            return verdict

    async def put(self, url: str, verdict: ScanVerdict) -> bool:
        """
        Store *verdict* for *url*.

        Error-fallback verdicts are not cached.  Returns True if stored.
        """
        if verdict.is_error_fallback:
            return False

        async with self._lock:
            self._entries[url] = (self._clock(), verdict)
            self._entries.move_to_end(url)
            while len(self._entries) > self.max_entries:
                self._entries.popitem(last=False)
        return True

    async def clear(self) -> None:
        async with self._lock:
            self._entries.clear()

    def __len__(self) -> int:
        return len(self._entries)
