"""
Per-fingerprint backoff deadlines.

A deadline becomes inert once it passes; there is no sweep. Staleness is
judged lazily on read.
"""

import math
import time
from typing import Callable, Dict

import structlog

logger = structlog.get_logger(__name__)

Clock = Callable[[], float]


class BackoffTracker:
    """Fingerprint -> "do not call upstream before" timestamp (seconds)."""
    
    def __init__(self, clock: Clock = time.time):
        self._clock = clock
        self._until: Dict[str, float] = {}
    
    def is_blocked(self, fingerprint: str) -> bool:
        """True iff a deadline exists and has not passed."""
        until = self._until.get(fingerprint)
        return until is not None and self._clock() < until
    
    def seconds_remaining(self, fingerprint: str) -> int:
        """
        Whole seconds until the deadline, at least 1.
        
        Only meaningful while is_blocked(fingerprint) is True.
        """
        until = self._until.get(fingerprint, self._clock())
        return max(1, math.ceil(until - self._clock()))
    
    def block(self, fingerprint: str, seconds: int) -> None:
        """Set or overwrite the deadline to now + seconds."""
        self._until[fingerprint] = self._clock() + seconds
        logger.info("Backoff set", fingerprint=fingerprint, retry_after_seconds=seconds)
