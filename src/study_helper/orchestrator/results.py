"""Typed results returned by the orchestrator to the route layer."""

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class ExplainResult:
    """
    Outcome of the explain flow.
    
    rate_limited/retry_after_seconds are set only for degraded responses
    (heuristic text served instead of AI output).
    """

    explanation: str
    cached: bool = False
    rate_limited: Optional[bool] = None
    retry_after_seconds: Optional[int] = None
    source: Optional[str] = None


@dataclass(frozen=True)
class SolveResult:
    """Outcome of the solve flow; source is local, placeholder or a provider name."""

    solution: str
    source: str
