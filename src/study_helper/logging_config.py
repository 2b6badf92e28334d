"""structlog setup shared by the app, uvicorn and httpx loggers.

Production renders one JSON object per line; every other environment gets
the colored console renderer. Provider credentials never reach the output:
the Gemini key travels in the query string, so anything that looks like
``key=...`` is masked before rendering.
"""

import logging
import re
import sys

import structlog
from structlog.types import EventDict, Processor, WrappedLogger

SERVICE_NAME = "study-helper-backend"

# Loggers that are chatty at INFO and carry nothing the request logs don't
NOISY_LOGGERS = ("httpx", "httpcore", "asyncio", "uvicorn.access")

_SECRET_QUERY_RE = re.compile(r"([?&]key=)[^&\s\"']+")
_BEARER_RE = re.compile(r"(Bearer\s+)\S+")


def add_service_name(logger: WrappedLogger, method_name: str, event_dict: EventDict) -> EventDict:
    event_dict.setdefault("app", SERVICE_NAME)
    return event_dict


def mask_credentials(logger: WrappedLogger, method_name: str, event_dict: EventDict) -> EventDict:
    """Mask ``?key=`` query values and bearer tokens in string fields."""
    for field, value in event_dict.items():
        if isinstance(value, str):
            value = _SECRET_QUERY_RE.sub(r"\1***", value)
            event_dict[field] = _BEARER_RE.sub(r"\1***", value)
    return event_dict


def _shared_processors(is_production: bool) -> list[Processor]:
    processors: list[Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso", utc=True),
        add_service_name,
        mask_credentials,
    ]
    if is_production:
        processors.append(structlog.processors.format_exc_info)
    return processors


def configure_logging(log_level: str = "INFO", environment: str = "development") -> None:
    """
    Route structlog and stdlib logging through one handler on stdout.

    Args:
        log_level: Level name; unknown names fall back to INFO
        environment: "production" selects the JSON renderer
    """
    level = logging.getLevelName(log_level.upper())
    if not isinstance(level, int):
        level = logging.INFO
    is_production = environment.lower() == "production"
    shared = _shared_processors(is_production)

    structlog.configure(
        processors=[*shared, structlog.stdlib.ProcessorFormatter.wrap_for_formatter],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    renderer: Processor = (
        structlog.processors.JSONRenderer()
        if is_production
        else structlog.dev.ConsoleRenderer(colors=sys.stdout.isatty())
    )
    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(
            processors=[structlog.stdlib.ProcessorFormatter.remove_processors_meta, renderer],
            foreign_pre_chain=shared,
        )
    )

    root = logging.getLogger()
    root.handlers[:] = [handler]
    root.setLevel(level)
    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)

    structlog.get_logger(__name__).info(
        "Logging configured",
        log_level=logging.getLevelName(level),
        renderer="json" if is_production else "console",
    )
