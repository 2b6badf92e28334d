"""Unit tests for FastAPI dependency singletons."""

from study_helper.api.dependencies import (
    get_orchestrator,
    get_orchestrator_state,
    get_primary_client,
    get_prompt_builder,
    get_secondary_client,
    get_settings,
)
from study_helper.config import settings
from study_helper.llm.gemini_client import GeminiClient
from study_helper.llm.openai_client import OpenAIChatClient


def test_settings_singleton():
    assert get_settings() is settings


def test_provider_clients():
    primary = get_primary_client()
    secondary = get_secondary_client()
    
    assert isinstance(primary, GeminiClient)
    assert isinstance(secondary, OpenAIChatClient)
    assert primary is get_primary_client()
    assert secondary is get_secondary_client()


def test_orchestrator_wiring():
    orchestrator = get_orchestrator()
    
    assert orchestrator is get_orchestrator()
    assert [p.name for p in orchestrator.providers] == ["gemini", "openai"]
    assert orchestrator.state is get_orchestrator_state()
    assert orchestrator.prompt_builder is get_prompt_builder()
    assert orchestrator.state.cache.ttl_seconds == settings.CACHE_TTL_SECONDS
