"""Monitoring and metrics instrumentation for the Study Helper backend.

Exports custom Prometheus metrics for operational monitoring and alerting.
"""

from study_helper.monitoring.metrics import (
    backoff_short_circuits_total,
    cache_lookups_total,
    degraded_responses_total,
    local_solver_total,
    provider_latency_seconds,
    provider_requests_total,
)

__all__ = [
    "provider_requests_total",
    "provider_latency_seconds",
    "cache_lookups_total",
    "backoff_short_circuits_total",
    "degraded_responses_total",
    "local_solver_total",
]
