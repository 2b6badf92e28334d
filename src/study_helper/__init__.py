"""
Study Helper backend.

Turns "explain topic X" and "solve problem P" requests from the learning UI
into text responses by coordinating:
- A primary AI provider (Gemini) and an optional secondary (OpenAI-compatible chat)
- A time-boxed result cache and a per-topic backoff tracker
- A deterministic number-theory solver for a few canonical problem phrasings

Architecture: FastAPI routes + orchestrator state machine + httpx provider clients
"""

__version__ = "0.1.0"
