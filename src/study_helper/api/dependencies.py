"""
FastAPI dependency injection for the Study Helper backend.

Provides process-wide singletons: settings, provider clients, prompt builder
and the orchestrator (which owns the cache/backoff state for the lifetime of
the process).
"""

from functools import lru_cache
from pathlib import Path

from study_helper.config import Settings, settings
from study_helper.llm.base_client import BaseLLMClient
from study_helper.llm.gemini_client import GeminiClient
from study_helper.llm.openai_client import OpenAIChatClient
from study_helper.llm.prompt_builder import PromptBuilder
from study_helper.orchestrator.engine import RequestOrchestrator
from study_helper.persistence.state import OrchestratorState


@lru_cache()
def get_settings() -> Settings:
    """Get settings singleton."""
    return settings


@lru_cache()
def get_primary_client() -> BaseLLMClient:
    """Gemini client singleton (connection-pooled)."""
    config = get_settings()
    return GeminiClient(
        api_key=config.GEMINI_API_KEY,
        endpoint_url=config.GEMINI_API_URL,
        timeout=config.PROVIDER_TIMEOUT,
        rate_limit_default_seconds=config.RATE_LIMIT_DEFAULT_SECONDS,
        overload_default_seconds=config.OVERLOAD_DEFAULT_SECONDS,
    )


@lru_cache()
def get_secondary_client() -> BaseLLMClient:
    """OpenAI-compatible chat client singleton."""
    config = get_settings()
    return OpenAIChatClient(
        api_key=config.OPENAI_API_KEY,
        endpoint_url=config.OPENAI_CHAT_URL,
        model=config.OPENAI_MODEL,
        temperature=config.OPENAI_TEMPERATURE,
        timeout=config.PROVIDER_TIMEOUT,
        rate_limit_default_seconds=config.RATE_LIMIT_DEFAULT_SECONDS,
        overload_default_seconds=config.OVERLOAD_DEFAULT_SECONDS,
    )


@lru_cache()
def get_prompt_builder() -> PromptBuilder:
    """
    Prompt builder singleton.
    
    Loads Jinja2 templates once and reuses them across requests.
    """
    config = get_settings()
    templates_dir = Path(config.PROMPT_TEMPLATES_DIR) if config.PROMPT_TEMPLATES_DIR else None
    return PromptBuilder(templates_dir=templates_dir, grade_level=config.GRADE_LEVEL)


@lru_cache()
def get_orchestrator_state() -> OrchestratorState:
    """Cache and backoff stores, created once per process."""
    return OrchestratorState.create(cache_ttl_seconds=get_settings().CACHE_TTL_SECONDS)


@lru_cache()
def get_orchestrator() -> RequestOrchestrator:
    """
    Orchestrator singleton.
    
    Cached so every request shares the same cache/backoff state.
    """
    return RequestOrchestrator(
        providers=[get_primary_client(), get_secondary_client()],
        state=get_orchestrator_state(),
        prompt_builder=get_prompt_builder(),
    )
