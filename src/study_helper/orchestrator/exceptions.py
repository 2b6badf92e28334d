"""
Orchestrator exceptions.

Provider failures travel as ProviderOutcome values; only the terminal
failures that must become non-200 HTTP responses are raised, and each one is
mapped to a status code by the API exception handlers.
"""

from typing import Any, Optional

from study_helper.models.enums import FailureKind


class OrchestratorError(Exception):
    """Base exception for terminal request failures."""

    def __init__(self, message: str, details: Optional[dict[str, Any]] = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}


class ProviderUnavailableError(OrchestratorError):
    """
    The provider is rate-limited or overloaded and no degraded answer is allowed.
    
    Maps to HTTP 429 (RATE_LIMIT) or 503 (OVERLOADED).
    """

    def __init__(
        self,
        kind: FailureKind,
        retry_after_seconds: int,
        detail: Optional[str] = None,
        message: str = "Model is temporarily unavailable. Please try again later.",
    ):
        if not kind.is_transient:
            raise ValueError(f"ProviderUnavailableError requires a transient kind, got {kind.value}")
        super().__init__(message, details={"kind": kind.value})
        self.kind = kind
        self.retry_after_seconds = retry_after_seconds
        self.detail = detail

    @property
    def status_code(self) -> int:
        return 503 if self.kind is FailureKind.OVERLOADED else 429

    @property
    def error_code(self) -> str:
        return "OVERLOADED" if self.kind is FailureKind.OVERLOADED else "RATE_LIMIT"


class UpstreamProviderError(OrchestratorError):
    """
    Generic upstream failure (empty response, HTTP error, network error).
    
    Maps to HTTP 500.
    """

    def __init__(self, error: str, message: str, detail: Optional[str] = None):
        super().__init__(message)
        self.error = error
        self.detail = detail


class MissingPromptError(OrchestratorError):
    """Solve request without a prompt. Maps to HTTP 400."""

    def __init__(self):
        super().__init__("Missing prompt")
