"""Shared HTTP helpers: error type and in-process response cache."""

import asyncio
import fnmatch
import time
from typing import Any, Dict, Optional, Tuple

from loguru import logger

from machina_mcp.config import get_settings


class FetchError(Exception):
    """Raised when an upstream HTTP request does not succeed."""

    def __init__(self, message: str, status: Optional[int] = None, url: Optional[str] = None):
        super().__init__(message)
        self.status = status
        self.url = url


class ResponseCache:
    """TTL cache for upstream responses, keyed by endpoint path or URL."""

    def __init__(self, ttl_seconds: int = 300):
        self.ttl_seconds = ttl_seconds
        self._entries: Dict[str, Tuple[float, Any]] = {}
        self._lock = asyncio.Lock()
        self.hits = 0
        self.misses = 0

    async def get(self, key: str) -> Optional[Any]:
        async with self._lock:
            entry = self._entries.get(key)
            if entry is None:
                self.misses += 1
                return None
            expires_at, value = entry
            if time.monotonic() >= expires_at:
                del self._entries[key]
                self.misses += 1
                return None
            self.hits += 1
            return value

    async def set(self, key: str, value: Any) -> None:
        async with self._lock:
            self._entries[key] = (time.monotonic() + self.ttl_seconds, value)

    async def clear(self, pattern: Optional[str] = None) -> int:
        """Remove cached entries.

        Args:
            pattern: Optional glob pattern (fnmatch syntax); clears everything when omitted

        Returns:
            Number of entries removed
        """
        async with self._lock:
            if pattern is None:
                removed = len(self._entries)
                self._entries.clear()
            else:
                keys = [key for key in self._entries if fnmatch.fnmatch(key, pattern)]
                for key in keys:
                    del self._entries[key]
                removed = len(keys)
        logger.debug(f"Cleared {removed} cache entries (pattern={pattern!r})")
        return removed

    def get_stats(self) -> Dict[str, Any]:
        total = self.hits + self.misses
        return {
            "size": len(self._entries),
            "hits": self.hits,
            "misses": self.misses,
            "hit_rate": round(self.hits / total, 3) if total else 0.0,
            "ttl_seconds": self.ttl_seconds,
        }


response_cache = ResponseCache(ttl_seconds=get_settings().cache_ttl_seconds)
