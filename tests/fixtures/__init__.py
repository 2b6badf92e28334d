"""Scripted provider outcomes shared by unit and integration tests."""

from study_helper.models.enums import FailureKind
from study_helper.models.llm_models import ProviderFailure, ProviderSuccess


def success(provider: str, text: str) -> ProviderSuccess:
    return ProviderSuccess(provider=provider, text=text, latency_ms=120)


def rate_limited(provider: str, seconds: int = 60, detail: str = '{"error": "quota"}') -> ProviderFailure:
    return ProviderFailure(
        provider=provider,
        kind=FailureKind.RATE_LIMITED,
        detail=detail,
        retry_after_seconds=seconds,
        status_code=429,
    )


def overloaded(provider: str, seconds: int = 45) -> ProviderFailure:
    return ProviderFailure(
        provider=provider,
        kind=FailureKind.OVERLOADED,
        detail="overloaded",
        retry_after_seconds=seconds,
        status_code=503,
    )


def http_error(provider: str, status_code: int = 400) -> ProviderFailure:
    return ProviderFailure(
        provider=provider,
        kind=FailureKind.HTTP_ERROR,
        detail="bad request",
        status_code=status_code,
    )
