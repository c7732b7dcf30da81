"""Prometheus metrics declarations.

All metrics are declared statically at module level.
Labels use ONLY static enumerations, never repository names or SHAs.
"""

from prometheus_client import Counter, Gauge, Histogram

# ── Pipeline run metrics ──────────────────────────────────────────

ANALYSIS_RUNS_TOTAL = Counter(
    "merge_analysis_runs_total",
    "Completed merge analysis runs",
    ["outcome"],
)

ANALYSIS_RUN_DURATION_SECONDS = Histogram(
    "merge_analysis_run_duration_seconds",
    "End-to-end merge analysis duration in seconds",
    buckets=(5, 15, 30, 60, 120, 300, 600, 1200, 1800, 3600),
)

ANALYSIS_RUNS_INFLIGHT = Gauge(
    "merge_analysis_runs_inflight",
    "Currently running merge analyses",
)

# ── Collaborator metrics ──────────────────────────────────────────

WEBHOOK_EVENTS_TOTAL = Counter(
    "merge_analysis_webhook_events_total",
    "GitHub webhook deliveries received",
    ["event", "outcome"],
)

HTTP_CALLS_TOTAL = Counter(
    "merge_analysis_http_calls_total",
    "Outbound HTTP calls to collaborator services",
    ["provider", "outcome"],
)

SUBPROCESS_CALLS_TOTAL = Counter(
    "merge_analysis_subprocess_calls_total",
    "Subprocess invocations",
    ["program", "outcome"],
)
