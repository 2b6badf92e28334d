"""Request tracing: one request_id per HTTP request, visible in every log line."""

import re
import time
import uuid
from typing import Awaitable, Callable, Optional

import structlog
from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware

logger = structlog.get_logger(__name__)

REQUEST_ID_HEADER = "X-Request-ID"

# Accept caller-supplied ids only if they are short and header/log safe
_VALID_REQUEST_ID = re.compile(r"[A-Za-z0-9._-]{1,64}")


def resolve_request_id(incoming: Optional[str]) -> str:
    """Reuse a well-formed incoming id, otherwise mint a UUID4."""
    if incoming and _VALID_REQUEST_ID.fullmatch(incoming):
        return incoming
    return str(uuid.uuid4())


class RequestTracingMiddleware(BaseHTTPMiddleware):
    """
    Bind request_id, method and path into structlog contextvars.

    Explain/solve logs emitted deeper in the stack (orchestrator, provider
    clients) inherit the binding. The id is echoed back in X-Request-ID so the
    browser UI can quote it in bug reports.
    """

    async def dispatch(
        self, request: Request, call_next: Callable[[Request], Awaitable[Response]]
    ) -> Response:
        request_id = resolve_request_id(request.headers.get(REQUEST_ID_HEADER))
        structlog.contextvars.clear_contextvars()
        structlog.contextvars.bind_contextvars(
            request_id=request_id,
            method=request.method,
            path=request.url.path,
        )

        started = time.perf_counter()
        try:
            response = await call_next(request)
        except Exception:
            logger.exception("Request crashed", duration_ms=_elapsed_ms(started))
            raise
        else:
            response.headers[REQUEST_ID_HEADER] = request_id
            log = logger.warning if response.status_code >= 400 else logger.info
            log(
                "Request handled",
                status_code=response.status_code,
                force=request.query_params.get("force"),
                duration_ms=_elapsed_ms(started),
            )
            return response
        finally:
            structlog.contextvars.clear_contextvars()


def _elapsed_ms(started: float) -> float:
    return round((time.perf_counter() - started) * 1000, 2)
