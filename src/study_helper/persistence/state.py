"""Shared mutable state owned by the orchestrator."""

import time
from dataclasses import dataclass

from study_helper.persistence.backoff_tracker import BackoffTracker, Clock
from study_helper.persistence.result_cache import ResultCache


@dataclass
class OrchestratorState:
    """
    Result cache and backoff tracker for the lifetime of the process.
    
    Created once at startup and injected into the orchestrator. Nothing is
    persisted across restarts. All access happens on the event loop thread,
    so the maps need no locking.
    """

    cache: ResultCache
    backoff: BackoffTracker

    @classmethod
    def create(cls, cache_ttl_seconds: float = 1800, clock: Clock = time.time) -> "OrchestratorState":
        """Build both stores on a shared clock."""
        return cls(
            cache=ResultCache(ttl_seconds=cache_ttl_seconds, clock=clock),
            backoff=BackoffTracker(clock=clock),
        )
