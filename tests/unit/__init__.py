"""
Unit tests for the Study Helper backend.

Test individual components in isolation:
- Retry hint extraction and provider response classification
- Result cache TTL and backoff deadlines (fake clock)
- Deterministic solver rules
- Orchestrator state machine (mocked providers)
"""
