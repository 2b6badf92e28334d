"""
FastAPI API routes and endpoints.

- routes.py: /api/explain, /api/solve, /api/health
- dependencies.py: Singletons for settings, providers and the orchestrator
- models.py: Request/response models (camelCase on the wire)
- error_handlers.py: Exception handlers for structured error responses
- middleware.py: Request ID tracing
"""

from study_helper.api import dependencies, error_handlers, models
from study_helper.api.routes import router

__all__ = [
    "router",
    "dependencies",
    "error_handlers",
    "models",
]
