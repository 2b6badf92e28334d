"""Shared test fixtures and configuration for all tests.

This conftest.py provides common fixtures used across unit and integration tests.
"""

from unittest.mock import AsyncMock

import pytest

from study_helper.config import Settings
from study_helper.llm.prompt_builder import PromptBuilder
from study_helper.orchestrator.engine import RequestOrchestrator
from study_helper.persistence.state import OrchestratorState


class FakeClock:
    """Manually advanced wall clock (seconds)."""
    
    def __init__(self, start: float = 1_700_000_000.0):
        self.now = start
    
    def __call__(self) -> float:
        return self.now
    
    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture
def test_settings() -> Settings:
    """Test settings with safe defaults (no real credentials).
    
    Override specific settings in individual tests as needed:
        def test_something(test_settings):
            test_settings.CACHE_TTL_SECONDS = 5
    """
    return Settings(
        APP_NAME="Study Helper Backend (Test)",
        ENVIRONMENT="development",
        LOG_LEVEL="DEBUG",
        GEMINI_API_KEY=None,
        OPENAI_API_KEY=None,
        CACHE_TTL_SECONDS=1800,
        RATE_LIMIT_DEFAULT_SECONDS=60,
        OVERLOAD_DEFAULT_SECONDS=45,
        SOLVER_FORCE_GEMINI=False,
        PROMETHEUS_ENABLED=False,
    )


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def state(clock: FakeClock) -> OrchestratorState:
    """Cache (30 min TTL) and backoff stores on the fake clock."""
    return OrchestratorState.create(cache_ttl_seconds=1800, clock=clock)


@pytest.fixture
def prompt_builder() -> PromptBuilder:
    """PromptBuilder over the bundled templates."""
    return PromptBuilder(grade_level="10")


@pytest.fixture
def make_provider():
    """Factory fixture for mock providers with scripted outcomes.
    
    Usage:
        def test_something(make_provider):
            primary = make_provider("gemini", outcomes=[success("gemini", "text")])
    """
    def _create(name: str, configured: bool = True, outcomes=None) -> AsyncMock:
        mock = AsyncMock()
        mock.name = name
        mock.is_configured = configured
        mock.generate = AsyncMock(side_effect=list(outcomes or []))
        mock.close = AsyncMock()
        return mock
    
    return _create


@pytest.fixture
def make_orchestrator(state: OrchestratorState, prompt_builder: PromptBuilder):
    """Factory fixture building an orchestrator over the shared fake-clock state."""
    def _create(*providers, **kwargs) -> RequestOrchestrator:
        return RequestOrchestrator(
            providers=list(providers),
            state=state,
            prompt_builder=prompt_builder,
            **kwargs,
        )
    
    return _create
