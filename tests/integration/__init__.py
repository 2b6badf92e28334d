"""
Integration tests for the Study Helper backend.

Exercise the full FastAPI application (routing, serialization, exception
handlers, middleware) with the orchestrator's providers mocked out.
"""
