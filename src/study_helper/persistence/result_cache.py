"""
In-process result cache with a fixed time-to-live.

Entries are never deleted: a stale entry simply reads as absent and is
overwritten on the next successful store.
"""

import time
from dataclasses import dataclass
from typing import Callable, Dict, Optional

import structlog

logger = structlog.get_logger(__name__)

Clock = Callable[[], float]


@dataclass(frozen=True)
class CacheEntry:
    """A stored payload and the wall-clock time (seconds) it was stored at."""

    fingerprint: str
    payload: str
    stored_at: float


class ResultCache:
    """
    Fingerprint -> payload map with TTL-on-read.
    
    No capacity bound; the fingerprint space (subject/topic pairs) is small.
    """
    
    def __init__(self, ttl_seconds: float = 1800, clock: Clock = time.time):
        """
        Args:
            ttl_seconds: How long an entry stays servable
            clock: Returns current time in seconds (injectable for tests)
        """
        if ttl_seconds <= 0:
            raise ValueError("ttl_seconds must be > 0")
        self.ttl_seconds = ttl_seconds
        self._clock = clock
        self._entries: Dict[str, CacheEntry] = {}
    
    def get(self, fingerprint: str) -> Optional[str]:
        """Return the payload if stored less than TTL ago, else None (no eviction)."""
        entry = self._entries.get(fingerprint)
        if entry is None:
            return None
        if self._clock() - entry.stored_at < self.ttl_seconds:
            return entry.payload
        return None
    
    def put(self, fingerprint: str, payload: str) -> None:
        """Store or overwrite, resetting the stored-at time."""
        self._entries[fingerprint] = CacheEntry(
            fingerprint=fingerprint,
            payload=payload,
            stored_at=self._clock(),
        )
        logger.debug("Cached result", fingerprint=fingerprint, ttl_seconds=self.ttl_seconds)
    
    def __len__(self) -> int:
        return len(self._entries)
