"""
API request and response models for the FastAPI endpoints.

Field names are snake_case in Python and camelCase on the wire
(rateLimited, retryAfterSeconds) to match what the browser UI reads.
"""

from datetime import datetime, timezone
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Base model serialized with camelCase aliases."""
    
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class ExplainResponse(CamelModel):
    """Response for GET /api/explain/{subject}/{topic}."""
    
    explanation: str = Field(description="AI, cached, heuristic or placeholder explanation")
    cached: bool = Field(description="True when served from the result cache")
    rate_limited: Optional[bool] = Field(
        default=None,
        description="Present (true) when heuristic text was served because the provider is rate-limited",
    )
    retry_after_seconds: Optional[int] = Field(
        default=None,
        description="Seconds until an AI explanation may be available again",
    )


class SolveRequest(BaseModel):
    """Body for POST /api/solve."""
    
    prompt: Optional[str] = Field(default=None, description="Problem statement")


class SolveResponse(BaseModel):
    """Response for POST /api/solve."""
    
    solution: str = Field(description="Step-by-step solution text")


class ProviderUnavailableResponse(CamelModel):
    """Body of a 429/503 response."""
    
    error: str = Field(examples=["RATE_LIMIT", "OVERLOADED"])
    message: str
    retry_after_seconds: int
    detail: Optional[str] = Field(default=None, description="Raw upstream error body")


class ErrorResponse(BaseModel):
    """Standard error response format."""
    
    error: str = Field(
        description="Error summary",
        examples=["Failed to fetch explanation", "Failed to get solution", "Missing prompt"],
    )
    message: Optional[str] = None
    detail: Optional[str] = None


class HealthResponse(BaseModel):
    """Response for the liveness probe."""
    
    status: str = Field(examples=["ok"])
    timestamp: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    providers: dict[str, str] = Field(
        default_factory=dict,
        examples=[{"gemini": "configured", "openai": "not_configured"}],
    )
