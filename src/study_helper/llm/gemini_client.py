"""
Gemini client (primary provider).

POST {GEMINI_API_URL}?key=... with payload:
{
    "contents": [{"parts": [{"text": "..."}]}],
    "systemInstruction": {"parts": [{"text": "..."}]}    # optional
}

Response:
{
    "candidates": [{"content": {"parts": [{"text": "..."}]}}]
}
"""

from typing import Any, Dict, Optional

import structlog

from study_helper.llm.base_client import BaseLLMClient
from study_helper.models.llm_models import GenerationRequest


logger = structlog.get_logger(__name__)


class GeminiClient(BaseLLMClient):
    """Google Generative Language API client (generateContent)."""
    
    name = "gemini"
    
    def request_params(self) -> Dict[str, str]:
        # The key travels in the query string, never in logs
        return {"key": self.api_key or ""}
    
    def build_payload(self, request: GenerationRequest) -> Dict[str, Any]:
        payload: Dict[str, Any] = {
            "contents": [{"parts": [{"text": request.prompt}]}],
        }
        if request.system_prompt:
            payload["systemInstruction"] = {"parts": [{"text": request.system_prompt}]}
        if request.temperature is not None:
            payload["generationConfig"] = {"temperature": request.temperature}
        return payload
    
    def extract_text(self, data: Any) -> Optional[str]:
        try:
            return data["candidates"][0]["content"]["parts"][0]["text"]
        except (KeyError, IndexError, TypeError):
            logger.debug("Gemini response has no candidate text")
            return None
