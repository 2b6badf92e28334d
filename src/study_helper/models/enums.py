"""
Enumerations for Study Helper data models.

All enums are closed taxonomies - no values outside these sets are permitted.
"""

from enum import Enum


class FailureKind(str, Enum):
    """
    Classification of a failed provider call.
    
    RATE_LIMITED and OVERLOADED are transient and drive backoff plus graceful
    degradation; MISSING_CREDENTIAL is a configuration error; the remaining
    kinds are generic upstream failures.
    """
    
    MISSING_CREDENTIAL = "missing_credential"
    RATE_LIMITED = "rate_limited"
    OVERLOADED = "overloaded"
    EMPTY_RESPONSE = "empty_response"
    HTTP_ERROR = "http_error"
    NETWORK_ERROR = "network_error"
    
    @property
    def is_transient(self) -> bool:
        """True for the kinds that carry a retry-after hint."""
        return self in (FailureKind.RATE_LIMITED, FailureKind.OVERLOADED)


class ResponseSource(str, Enum):
    """Non-provider origins of a response text (provider names are used verbatim otherwise)."""
    
    LOCAL = "local"
    PLACEHOLDER = "placeholder"
