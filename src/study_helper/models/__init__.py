"""
Data models for the Study Helper backend.

- enums.py: FailureKind, ResponseSource
- llm_models.py: GenerationRequest and the ProviderOutcome union
"""

from study_helper.models.enums import FailureKind, ResponseSource
from study_helper.models.llm_models import (
    GenerationRequest,
    ProviderFailure,
    ProviderOutcome,
    ProviderSuccess,
)

__all__ = [
    "FailureKind",
    "ResponseSource",
    "GenerationRequest",
    "ProviderFailure",
    "ProviderOutcome",
    "ProviderSuccess",
]
