"""
In-process state for the orchestrator.

- result_cache.py: ResultCache (TTL-on-read)
- backoff_tracker.py: BackoffTracker (lazy deadlines)
- state.py: OrchestratorState container

State lives only in memory; a restart starts with an empty cache and no backoff.
"""

from study_helper.persistence.backoff_tracker import BackoffTracker
from study_helper.persistence.result_cache import CacheEntry, ResultCache
from study_helper.persistence.state import OrchestratorState

__all__ = [
    "BackoffTracker",
    "CacheEntry",
    "ResultCache",
    "OrchestratorState",
]
