"""
Abstract base client for remote text-generation providers.

Every provider (Gemini, OpenAI-compatible chat, ...) shares the same call
shape: check the credential, POST a JSON payload, read the raw body whatever
the status, and classify the result into a ProviderOutcome. Subclasses only
describe how to build the payload and where the text lives in the response.
The client never touches the result cache or backoff state.
"""

import json
import time
from abc import ABC, abstractmethod
from typing import Any, Dict, Optional

import httpx
import structlog

from study_helper.llm.retry_hint import extract_retry_after_seconds
from study_helper.models.enums import FailureKind
from study_helper.models.llm_models import (
    GenerationRequest,
    ProviderFailure,
    ProviderOutcome,
    ProviderSuccess,
)
from study_helper.monitoring.metrics import provider_latency_seconds, provider_requests_total


logger = structlog.get_logger(__name__)


class BaseLLMClient(ABC):
    """
    Base class for provider clients.
    
    Responsibilities:
    - Hold a pooled httpx.AsyncClient
    - Report MISSING_CREDENTIAL without touching the network
    - Map HTTP 429/503 to RATE_LIMITED/OVERLOADED with a retry hint
    - Map other non-2xx statuses to HTTP_ERROR and transport errors to NETWORK_ERROR
    - Map a 2xx without usable text to EMPTY_RESPONSE
    
    Does NOT handle:
    - Prompt construction (that's PromptBuilder's job)
    - Fallback between providers, caching or backoff (that's the orchestrator's job)
    """
    
    name: str = "provider"
    
    def __init__(
        self,
        api_key: Optional[str],
        endpoint_url: str,
        timeout: int = 60,
        rate_limit_default_seconds: int = 60,
        overload_default_seconds: int = 45,
        connection_limits: Optional[httpx.Limits] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        """
        Initialize base client.
        
        Args:
            api_key: Provider credential; None or empty means unconfigured
            endpoint_url: Full URL of the generation endpoint
            timeout: Request timeout in seconds
            rate_limit_default_seconds: Wait applied to a 429 without a hint
            overload_default_seconds: Wait applied to a 503 without a hint
            connection_limits: httpx connection pool limits
            transport: Optional httpx transport (tests use httpx.MockTransport)
        """
        self.api_key = api_key or None
        self.endpoint_url = endpoint_url
        self.timeout = timeout
        self.rate_limit_default_seconds = rate_limit_default_seconds
        self.overload_default_seconds = overload_default_seconds
        self._connection_limits = connection_limits or httpx.Limits(
            max_keepalive_connections=5,
            max_connections=10,
            keepalive_expiry=30.0,
        )
        self._transport = transport
        self._client: Optional[httpx.AsyncClient] = None
        
        logger.info(
            "Initialized provider client",
            provider=self.name,
            endpoint_url=self.endpoint_url,
            configured=self.is_configured,
            timeout=timeout,
        )
    
    @property
    def is_configured(self) -> bool:
        """True when a credential is available."""
        return self.api_key is not None
    
    async def _get_client(self) -> httpx.AsyncClient:
        """Get or create the async HTTP client."""
        if self._client is None or self._client.is_closed:
            self._client = httpx.AsyncClient(
                timeout=httpx.Timeout(self.timeout),
                limits=self._connection_limits,
                transport=self._transport,
            )
            logger.debug("Created new httpx AsyncClient", provider=self.name)
        return self._client
    
    @abstractmethod
    def build_payload(self, request: GenerationRequest) -> Dict[str, Any]:
        """Build the provider-specific JSON body."""
    
    @abstractmethod
    def extract_text(self, data: Any) -> Optional[str]:
        """Pull the generated text out of a parsed 2xx body, or None."""
    
    def request_params(self) -> Dict[str, str]:
        """Query parameters for the call (credentials for key-in-URL providers)."""
        return {}
    
    def request_headers(self) -> Dict[str, str]:
        """HTTP headers for the call."""
        return {"Content-Type": "application/json"}
    
    async def generate(self, request: GenerationRequest) -> ProviderOutcome:
        """
        Send a prompt and classify the result.
        
        Never raises for upstream problems: every failure mode is returned as
        a ProviderFailure.
        
        Args:
            request: Provider-agnostic generation request
            
        Returns:
            ProviderSuccess with trimmed text, or ProviderFailure
        """
        if not self.is_configured:
            outcome: ProviderOutcome = ProviderFailure(
                provider=self.name,
                kind=FailureKind.MISSING_CREDENTIAL,
                detail=f"No API key configured for {self.name}",
            )
            self._record(outcome, elapsed=None)
            return outcome
        
        logger.info(
            "Sending generation request",
            provider=self.name,
            prompt_length=len(request.prompt),
            has_system_prompt=request.system_prompt is not None,
        )
        
        start_time = time.perf_counter()
        try:
            client = await self._get_client()
            response = await client.post(
                self.endpoint_url,
                params=self.request_params(),
                headers=self.request_headers(),
                json=self.build_payload(request),
            )
        except httpx.TimeoutException as e:
            outcome = ProviderFailure(
                provider=self.name,
                kind=FailureKind.NETWORK_ERROR,
                detail=f"Request timeout after {self.timeout}s: {e}",
            )
        except httpx.HTTPError as e:
            outcome = ProviderFailure(
                provider=self.name,
                kind=FailureKind.NETWORK_ERROR,
                detail=f"{type(e).__name__}: {e}",
            )
        else:
            elapsed = time.perf_counter() - start_time
            outcome = self.classify_response(
                response.status_code,
                response.headers,
                response.text,
                latency_ms=int(elapsed * 1000),
            )
        
        self._record(outcome, elapsed=time.perf_counter() - start_time)
        return outcome
    
    def classify_response(
        self,
        status_code: int,
        headers: Any,
        body: str,
        latency_ms: int = 0,
    ) -> ProviderOutcome:
        """
        Classify a raw HTTP response into a ProviderOutcome.
        
        Args:
            status_code: HTTP status
            headers: Response headers
            body: Raw response body text
            latency_ms: Time spent on the call
        """
        if status_code == 429:
            seconds = extract_retry_after_seconds(status_code, headers, body)
            return ProviderFailure(
                provider=self.name,
                kind=FailureKind.RATE_LIMITED,
                detail=body,
                retry_after_seconds=seconds or self.rate_limit_default_seconds,
                status_code=status_code,
            )
        if status_code == 503:
            seconds = extract_retry_after_seconds(status_code, headers, body)
            return ProviderFailure(
                provider=self.name,
                kind=FailureKind.OVERLOADED,
                detail=body,
                retry_after_seconds=seconds or self.overload_default_seconds,
                status_code=status_code,
            )
        if not 200 <= status_code < 300:
            return ProviderFailure(
                provider=self.name,
                kind=FailureKind.HTTP_ERROR,
                detail=body,
                status_code=status_code,
            )
        
        try:
            data = json.loads(body)
        except ValueError:
            return ProviderFailure(
                provider=self.name,
                kind=FailureKind.EMPTY_RESPONSE,
                detail="Response body is not valid JSON",
                status_code=status_code,
            )
        
        text = self.extract_text(data)
        text = text.strip() if isinstance(text, str) else ""
        if not text:
            return ProviderFailure(
                provider=self.name,
                kind=FailureKind.EMPTY_RESPONSE,
                detail=body,
                status_code=status_code,
            )
        return ProviderSuccess(provider=self.name, text=text, latency_ms=latency_ms)
    
    def _record(self, outcome: ProviderOutcome, elapsed: Optional[float]) -> None:
        """Log and count a finished call."""
        if isinstance(outcome, ProviderSuccess):
            label = "success"
            logger.info("Provider call succeeded", provider=self.name, latency_ms=outcome.latency_ms)
        else:
            label = outcome.kind.value
            log = logger.warning if outcome.is_transient else logger.error
            log(
                "Provider call failed",
                provider=self.name,
                kind=outcome.kind.value,
                status_code=outcome.status_code,
                retry_after_seconds=outcome.retry_after_seconds,
            )
        
        provider_requests_total.labels(provider=self.name, outcome=label).inc()
        if elapsed is not None:
            provider_latency_seconds.labels(
                provider=self.name, success=str(label == "success").lower()
            ).observe(elapsed)
    
    async def close(self) -> None:
        """Close the HTTP client connection."""
        if self._client and not self._client.is_closed:
            await self._client.aclose()
            logger.debug("Closed provider client connection", provider=self.name)
    
    async def __aenter__(self):
        return self
    
    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.close()
    
    def __repr__(self) -> str:
        return (
            f"{self.__class__.__name__}("
            f"endpoint_url={self.endpoint_url}, "
            f"configured={self.is_configured}, "
            f"timeout={self.timeout}s)"
        )
