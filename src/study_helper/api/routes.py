"""
HTTP routes consumed by the browser UI.

- GET  /api/explain/{subject}/{topic}?force=gemini
- POST /api/solve?force=gemini
- GET  /api/health
"""

from typing import Optional

import structlog
from fastapi import APIRouter, Depends, Query, status

from study_helper.api.dependencies import get_orchestrator, get_settings
from study_helper.api.models import (
    ErrorResponse,
    ExplainResponse,
    HealthResponse,
    ProviderUnavailableResponse,
    SolveRequest,
    SolveResponse,
)
from study_helper.config import Settings
from study_helper.orchestrator.engine import RequestOrchestrator

logger = structlog.get_logger(__name__)

router = APIRouter(prefix="/api")


def _is_forced(force: Optional[str], orchestrator: RequestOrchestrator) -> bool:
    """True when ?force= names the primary provider (case-insensitive)."""
    return (force or "").strip().lower() == orchestrator.primary.name


@router.get(
    "/explain/{subject}/{topic}",
    response_model=ExplainResponse,
    response_model_exclude_none=True,
    summary="Explain a topic",
    description="""
    Short AI explanation of a topic, served from cache when fresh.
    
    While the provider is rate-limited a heuristic explanation is returned
    with rateLimited=true and retryAfterSeconds.
    """,
    responses={
        429: {"model": ProviderUnavailableResponse, "description": "Forced provider rate-limited"},
        503: {"model": ProviderUnavailableResponse, "description": "Forced provider overloaded"},
        500: {"model": ErrorResponse, "description": "Upstream failure"},
    },
)
async def explain_topic(
    subject: str,
    topic: str,
    force: Optional[str] = Query(default=None, description="Set to 'gemini' to bypass backoff"),
    orchestrator: RequestOrchestrator = Depends(get_orchestrator),
) -> ExplainResponse:
    result = await orchestrator.explain(subject, topic, force_primary=_is_forced(force, orchestrator))
    return ExplainResponse(
        explanation=result.explanation,
        cached=result.cached,
        rate_limited=result.rate_limited,
        retry_after_seconds=result.retry_after_seconds,
    )


@router.post(
    "/solve",
    response_model=SolveResponse,
    summary="Solve a math problem",
    description="""
    Canonical number-theory questions (terminating decimals, rational vs
    irrational) are answered locally; everything else goes to the primary
    provider.
    """,
    responses={
        400: {"model": ErrorResponse, "description": "Missing prompt"},
        429: {"model": ProviderUnavailableResponse, "description": "Provider rate-limited"},
        503: {"model": ProviderUnavailableResponse, "description": "Provider overloaded"},
        500: {"model": ErrorResponse, "description": "Upstream failure"},
    },
)
async def solve_problem(
    payload: Optional[SolveRequest] = None,
    force: Optional[str] = Query(default=None, description="Set to 'gemini' to skip the local solver"),
    orchestrator: RequestOrchestrator = Depends(get_orchestrator),
    settings: Settings = Depends(get_settings),
) -> SolveResponse:
    force_primary = settings.SOLVER_FORCE_GEMINI or _is_forced(force, orchestrator)
    result = await orchestrator.solve(payload.prompt if payload else None, force_primary=force_primary)
    logger.info("Solve completed", source=result.source)
    return SolveResponse(solution=result.solution)


@router.get(
    "/health",
    response_model=HealthResponse,
    status_code=status.HTTP_200_OK,
    summary="Liveness probe",
)
async def health_check(
    orchestrator: RequestOrchestrator = Depends(get_orchestrator),
) -> HealthResponse:
    return HealthResponse(
        status="ok",
        providers={
            provider.name: "configured" if provider.is_configured else "not_configured"
            for provider in orchestrator.providers
        },
    )
