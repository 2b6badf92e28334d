"""
Provider clients and prompt construction.

Components:
- BaseLLMClient: Shared call/classification logic for providers
- GeminiClient: Primary provider (generateContent)
- OpenAIChatClient: Secondary provider (chat completions)
- PromptBuilder: Renders prompts and fallback texts from templates
- retry_hint: Retry-after extraction from failed responses
"""

from study_helper.llm.base_client import BaseLLMClient
from study_helper.llm.gemini_client import GeminiClient
from study_helper.llm.openai_client import OpenAIChatClient
from study_helper.llm.prompt_builder import PromptBuilder
from study_helper.llm.retry_hint import extract_retry_after_seconds

__all__ = [
    "BaseLLMClient",
    "GeminiClient",
    "OpenAIChatClient",
    "PromptBuilder",
    "extract_retry_after_seconds",
]
