"""
Provider-facing data models for the request/outcome cycle.

GenerationRequest is what the orchestrator hands to any provider client.
ProviderOutcome is what comes back: a success carrying text, or a classified
failure. Failures are values rather than exceptions so the orchestrator can
dispatch on FailureKind exhaustively.
"""

from dataclasses import dataclass
from typing import Optional, Union

from pydantic import BaseModel, ConfigDict, Field

from study_helper.models.enums import FailureKind


class GenerationRequest(BaseModel):
    """
    Provider-agnostic generation request.
    
    Chat-style providers send system_prompt as a separate system message;
    completion-style providers may attach it as a system instruction.
    """
    model_config = ConfigDict(frozen=True)
    
    prompt: str = Field(..., min_length=1, description="User prompt text")
    system_prompt: Optional[str] = Field(default=None, description="Optional tutor persona/instructions")
    temperature: Optional[float] = Field(default=None, ge=0.0, le=2.0, description="Sampling temperature override")


@dataclass(frozen=True)
class ProviderSuccess:
    """Generated text returned by a provider (already trimmed)."""

    provider: str
    text: str
    latency_ms: int = 0

    def __post_init__(self) -> None:
        if not self.text:
            raise ValueError("ProviderSuccess.text must not be empty")


@dataclass(frozen=True)
class ProviderFailure:
    """
    A classified provider failure.
    
    Attributes:
        provider: Provider name (e.g. "gemini")
        kind: Failure classification
        detail: Raw upstream body or error text, for diagnostics
        retry_after_seconds: Wait hint, present for RATE_LIMITED/OVERLOADED
        status_code: Upstream HTTP status, when a response was received
    """

    provider: str
    kind: FailureKind
    detail: Optional[str] = None
    retry_after_seconds: Optional[int] = None
    status_code: Optional[int] = None

    def __post_init__(self) -> None:
        """Validate per-kind invariants."""
        if self.kind.is_transient and (self.retry_after_seconds is None or self.retry_after_seconds < 1):
            raise ValueError(f"{self.kind.value} failure requires a positive retry_after_seconds")
        
        if self.kind is FailureKind.HTTP_ERROR and self.status_code is None:
            raise ValueError("http_error failure requires a status_code")

    @property
    def is_transient(self) -> bool:
        return self.kind.is_transient

    def describe(self) -> str:
        """Short human-readable summary used in logs and error messages."""
        if self.kind is FailureKind.HTTP_ERROR:
            return f"{self.provider} HTTP {self.status_code}"
        return f"{self.provider} {self.kind.value}"


ProviderOutcome = Union[ProviderSuccess, ProviderFailure]
