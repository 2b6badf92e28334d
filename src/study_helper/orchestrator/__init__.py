"""
Explain/solve request orchestration.

Main Components:
    - RequestOrchestrator: backoff/cache/provider-fallback state machine
    - ExplainResult, SolveResult: typed results for the route layer
    - ProviderUnavailableError, UpstreamProviderError, MissingPromptError:
      terminal failures mapped to HTTP statuses by the API layer

Usage:
    >>> orchestrator = RequestOrchestrator([gemini, openai], state, prompt_builder)
    >>> result = await orchestrator.explain("mathematics", "Real Numbers")
"""

from study_helper.orchestrator.engine import RequestOrchestrator, explain_fingerprint
from study_helper.orchestrator.exceptions import (
    MissingPromptError,
    OrchestratorError,
    ProviderUnavailableError,
    UpstreamProviderError,
)
from study_helper.orchestrator.results import ExplainResult, SolveResult

__all__ = [
    "RequestOrchestrator",
    "explain_fingerprint",
    "ExplainResult",
    "SolveResult",
    "OrchestratorError",
    "MissingPromptError",
    "ProviderUnavailableError",
    "UpstreamProviderError",
]
