"""Custom Prometheus metrics for the Study Helper backend.

These metrics are exposed at /metrics endpoint alongside the HTTP metrics
collected by prometheus-fastapi-instrumentator. Alert rules worth configuring:
- provider_requests_total{outcome="rate_limited"} (quota exhaustion)
- degraded_responses_total (users receiving heuristic text)
"""

from prometheus_client import Counter, Histogram

# === Provider Metrics ===

provider_requests_total = Counter(
    "provider_requests_total",
    "Total upstream provider calls by provider and outcome",
    ["provider", "outcome"],
)
"""
Provider call counter.

Labels:
- provider: gemini, openai
- outcome: success, or a FailureKind value (rate_limited, overloaded, http_error, ...)
"""

provider_latency_seconds = Histogram(
    "provider_latency_seconds",
    "Upstream provider latency in seconds",
    ["provider", "success"],
    buckets=[0.25, 0.5, 1.0, 2.0, 5.0, 10.0, 30.0, 60.0],
)

# === Cache & Backoff Metrics ===

cache_lookups_total = Counter(
    "cache_lookups_total",
    "Result cache lookups by result",
    ["result"],
)
"""
Labels:
- result: hit, miss
"""

backoff_short_circuits_total = Counter(
    "backoff_short_circuits_total",
    "Requests answered locally because the topic is in backoff",
)

degraded_responses_total = Counter(
    "degraded_responses_total",
    "Responses served with heuristic text instead of AI output",
    ["reason"],
)
"""
Labels:
- reason: backoff (blocked before calling upstream), rate_limited, overloaded
"""

# === Local Solver Metrics ===

local_solver_total = Counter(
    "local_solver_total",
    "Deterministic solver attempts by matched rule",
    ["rule"],
)
"""
Labels:
- rule: terminating_decimal, sqrt_fraction, sqrt_integer, named_constant,
  fraction, finite_number, no_match
"""
