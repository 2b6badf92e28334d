"""
OpenAI-compatible chat client (secondary provider).

POST {OPENAI_CHAT_URL} with bearer auth and payload:
{
    "model": "gpt-4o-mini",
    "messages": [{"role": "system", ...}, {"role": "user", ...}],
    "temperature": 0.2
}

Response:
{
    "choices": [{"message": {"content": "..."}}]
}
"""

from typing import Any, Dict, Optional

import structlog

from study_helper.llm.base_client import BaseLLMClient
from study_helper.models.llm_models import GenerationRequest


logger = structlog.get_logger(__name__)


class OpenAIChatClient(BaseLLMClient):
    """Chat-completions client for OpenAI or any compatible endpoint."""
    
    name = "openai"
    
    def __init__(
        self,
        api_key: Optional[str],
        endpoint_url: str = "https://api.openai.com/v1/chat/completions",
        model: str = "gpt-4o-mini",
        temperature: float = 0.2,
        **kwargs,
    ):
        """
        Initialize chat client.
        
        Args:
            api_key: Bearer token; None or empty means unconfigured
            endpoint_url: Chat-completions URL
            model: Model identifier sent with every request
            temperature: Default sampling temperature
            **kwargs: Passed to BaseLLMClient (timeout, defaults, transport)
        """
        self.model = model
        self.temperature = temperature
        super().__init__(api_key, endpoint_url, **kwargs)
    
    def request_headers(self) -> Dict[str, str]:
        headers = super().request_headers()
        headers["Authorization"] = f"Bearer {self.api_key}"
        return headers
    
    def build_payload(self, request: GenerationRequest) -> Dict[str, Any]:
        messages = []
        if request.system_prompt:
            messages.append({"role": "system", "content": request.system_prompt})
        messages.append({"role": "user", "content": request.prompt})
        return {
            "model": self.model,
            "messages": messages,
            "temperature": request.temperature if request.temperature is not None else self.temperature,
        }
    
    def extract_text(self, data: Any) -> Optional[str]:
        try:
            return data["choices"][0]["message"]["content"]
        except (KeyError, IndexError, TypeError):
            logger.debug("Chat response has no message content")
            return None
