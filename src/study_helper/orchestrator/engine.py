"""
Request orchestrator for the explain and solve flows.

Per request the orchestrator walks a small state machine:

    CheckBackoff -> CheckCache -> (DeterministicSolve | AIAttempt) -> Respond

Explain flow (fingerprint = subject + topic):
    1. Primary unconfigured          -> labeled placeholder
    2. Backoff active (not forced)   -> heuristic text, rateLimited
    3. Cache hit                     -> cached text
    4. Primary call; on RATE_LIMITED/OVERLOADED set backoff and try the
       configured secondaries in order
    5. Transient failure -> heuristic text (or 429/503 when the caller forced
       the primary and no secondary exists); other failures -> 500

Solve flow (no cache, no backoff):
    1. Deterministic solver (not forced) -> exact answer
    2. Primary unconfigured              -> labeled placeholder
    3. Primary call only; transient failures -> 429/503, others -> 500

Concurrent identical cache misses are not coalesced: each one runs the
provider chain on its own.
"""

from typing import Callable, Optional, Sequence

import structlog

from study_helper.llm.base_client import BaseLLMClient
from study_helper.llm.prompt_builder import PromptBuilder
from study_helper.models.enums import ResponseSource
from study_helper.models.llm_models import (
    GenerationRequest,
    ProviderOutcome,
    ProviderSuccess,
)
from study_helper.monitoring.metrics import (
    backoff_short_circuits_total,
    cache_lookups_total,
    degraded_responses_total,
)
from study_helper.orchestrator.exceptions import (
    MissingPromptError,
    ProviderUnavailableError,
    UpstreamProviderError,
)
from study_helper.orchestrator.results import ExplainResult, SolveResult
from study_helper.persistence.state import OrchestratorState
from study_helper.solver.local_solver import LocalSolution, try_local_solve

logger = structlog.get_logger(__name__)

LocalSolver = Callable[[str], Optional[LocalSolution]]


def explain_fingerprint(subject: str, topic: str) -> str:
    """Cache/backoff key for an explain request (path segments cannot contain '/')."""
    return f"explain/{subject}/{topic}"


class RequestOrchestrator:
    """
    Coordinates providers, cache, backoff and the local solver.
    
    Attributes:
        primary: First provider in priority order
        secondaries: Remaining providers, tried in order when the primary is
            rate-limited or overloaded
        state: Process-wide cache and backoff stores
        prompt_builder: Prompt and fallback-text renderer
    """

    def __init__(
        self,
        providers: Sequence[BaseLLMClient],
        state: OrchestratorState,
        prompt_builder: PromptBuilder,
        local_solver: LocalSolver = try_local_solve,
    ):
        """
        Initialize orchestrator.
        
        Args:
            providers: Provider clients in priority order (at least one)
            state: Cache and backoff container
            prompt_builder: Prompt builder
            local_solver: Deterministic solver used by the solve flow
        """
        if not providers:
            raise ValueError("at least one provider is required")
        self.primary = providers[0]
        self.secondaries = list(providers[1:])
        self.state = state
        self.prompt_builder = prompt_builder
        self.local_solver = local_solver

        logger.info(
            "RequestOrchestrator initialized",
            primary=self.primary.name,
            primary_configured=self.primary.is_configured,
            secondaries=[p.name for p in self.secondaries if p.is_configured],
        )

    @property
    def providers(self) -> list[BaseLLMClient]:
        return [self.primary, *self.secondaries]

    def has_secondary(self) -> bool:
        """True when at least one secondary provider has a credential."""
        return any(p.is_configured for p in self.secondaries)

    async def explain(self, subject: str, topic: str, force_primary: bool = False) -> ExplainResult:
        """
        Produce an explanation for a topic.
        
        Args:
            subject: Subject name (e.g. "mathematics")
            topic: Topic name within the subject
            force_primary: Ignore an active backoff and insist on the primary
                provider (?force=gemini)
            
        Returns:
            ExplainResult (AI text, cached text, heuristic text or placeholder)
            
        Raises:
            ProviderUnavailableError: forced primary is rate-limited/overloaded
                and no secondary is configured
            UpstreamProviderError: any other provider failure
        """
        fingerprint = explain_fingerprint(subject, topic)
        log = logger.bind(fingerprint=fingerprint, force_primary=force_primary)

        if not self.primary.is_configured:
            log.info("Primary provider not configured, serving placeholder")
            return ExplainResult(
                explanation=self.prompt_builder.render_placeholder_explanation(subject, topic),
                cached=False,
                source=ResponseSource.PLACEHOLDER.value,
            )

        backoff = self.state.backoff
        if not force_primary and backoff.is_blocked(fingerprint):
            seconds = backoff.seconds_remaining(fingerprint)
            log.warning("Backoff active, serving local explanation", retry_after_seconds=seconds)
            backoff_short_circuits_total.inc()
            degraded_responses_total.labels(reason="backoff").inc()
            return self._degraded_explanation(subject, topic, seconds)

        cached = self.state.cache.get(fingerprint)
        if cached is not None:
            cache_lookups_total.labels(result="hit").inc()
            log.debug("Cache hit")
            return ExplainResult(explanation=cached, cached=True)
        cache_lookups_total.labels(result="miss").inc()

        request = self.prompt_builder.build_explain_request(subject, topic)
        outcome = await self.primary.generate(request)
        if isinstance(outcome, ProviderSuccess):
            self.state.cache.put(fingerprint, outcome.text)
            return ExplainResult(explanation=outcome.text, cached=False, source=outcome.provider)

        if outcome.is_transient:
            seconds = outcome.retry_after_seconds
            backoff.block(fingerprint, seconds)
            log.warning(
                "Explain provider temporarily unavailable",
                provider=outcome.provider,
                kind=outcome.kind.value,
                retry_after_seconds=seconds,
            )

            fallback = await self._try_secondaries(request)
            if isinstance(fallback, ProviderSuccess):
                self.state.cache.put(fingerprint, fallback.text)
                return ExplainResult(explanation=fallback.text, cached=False, source=fallback.provider)

            if force_primary and not self.has_secondary():
                raise ProviderUnavailableError(
                    kind=outcome.kind,
                    retry_after_seconds=seconds,
                    detail=outcome.detail,
                )

            degraded_responses_total.labels(reason=outcome.kind.value).inc()
            return self._degraded_explanation(subject, topic, seconds)

        log.error("Error fetching explanation", failure=outcome.describe())
        raise UpstreamProviderError(
            error="Failed to fetch explanation",
            message=outcome.describe(),
            detail=outcome.detail,
        )

    async def solve(self, prompt: Optional[str], force_primary: bool = False) -> SolveResult:
        """
        Solve a free-text math problem.
        
        Args:
            prompt: Problem statement
            force_primary: Skip the local solver and ask the primary provider
            
        Raises:
            MissingPromptError: prompt is empty
            ProviderUnavailableError: primary is rate-limited/overloaded
            UpstreamProviderError: any other provider failure
        """
        if not prompt or not prompt.strip():
            raise MissingPromptError()

        if not force_primary:
            local = self.local_solver(prompt)
            if local is not None:
                return SolveResult(solution=local.solution, source=ResponseSource.LOCAL.value)

        if not self.primary.is_configured:
            return SolveResult(
                solution=self.prompt_builder.render_placeholder_solution(prompt),
                source=ResponseSource.PLACEHOLDER.value,
            )

        outcome = await self.primary.generate(self.prompt_builder.build_solve_request(prompt))
        if isinstance(outcome, ProviderSuccess):
            return SolveResult(solution=outcome.text, source=outcome.provider)

        if outcome.is_transient:
            logger.warning(
                "Solve provider temporarily unavailable",
                provider=outcome.provider,
                kind=outcome.kind.value,
                retry_after_seconds=outcome.retry_after_seconds,
            )
            raise ProviderUnavailableError(
                kind=outcome.kind,
                retry_after_seconds=outcome.retry_after_seconds,
                detail=outcome.detail,
                message="Model is temporarily unavailable. Please wait and try again.",
            )

        logger.error("Solve provider error", failure=outcome.describe())
        raise UpstreamProviderError(
            error="Failed to get solution",
            message=outcome.describe(),
            detail=outcome.detail,
        )

    async def _try_secondaries(self, request: GenerationRequest) -> Optional[ProviderOutcome]:
        """
        Try configured secondaries in order until one succeeds.
        
        Secondary failures of any kind (including rate limits) are only
        logged; no backoff is recorded for them.
        
        Returns:
            The first success, the last failure, or None when no secondary is configured
        """
        last: Optional[ProviderOutcome] = None
        for provider in self.secondaries:
            if not provider.is_configured:
                continue
            last = await provider.generate(request)
            if isinstance(last, ProviderSuccess):
                logger.info("Secondary provider answered", provider=provider.name)
                return last
            logger.warning("Secondary provider failed", failure=last.describe())
        return last

    def _degraded_explanation(self, subject: str, topic: str, seconds: int) -> ExplainResult:
        return ExplainResult(
            explanation=self.prompt_builder.render_local_explanation(subject, topic),
            cached=False,
            rate_limited=True,
            retry_after_seconds=seconds,
            source=ResponseSource.LOCAL.value,
        )

    async def close(self) -> None:
        """Close every provider's HTTP client."""
        for provider in self.providers:
            await provider.close()
