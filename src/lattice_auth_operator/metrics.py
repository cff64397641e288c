"""Prometheus metrics for the Lattice Auth Operator."""

from prometheus_client import Counter, Histogram

# Reconciliation metrics
reconcile_total = Counter(
    "lattice_auth_operator_reconcile_total",
    "Total number of reconciliations",
    ["kind", "result"],
)

reconcile_duration_seconds = Histogram(
    "lattice_auth_operator_reconcile_duration_seconds",
    "Duration of reconciliations in seconds",
    ["kind"],
    buckets=[0.1, 0.5, 1.0, 2.5, 5.0, 10.0],
)

error_total = Counter(
    "lattice_auth_operator_error_total",
    "Total number of reconciliation errors",
    ["kind", "error_type"],
)

requeue_total = Counter(
    "lattice_auth_operator_requeue_total",
    "Total number of delayed requeues",
    ["kind", "reason"],
)

# Lattice auth operations
auth_policy_operations_total = Counter(
    "lattice_auth_operator_auth_policy_operations_total",
    "Total number of auth state operations against Lattice",
    ["operation", "result"],
)

# API call metrics
api_call_total = Counter(
    "lattice_auth_operator_api_call_total",
    "Total number of API calls",
    ["api_type", "operation", "result"],
)

api_call_duration_seconds = Histogram(
    "lattice_auth_operator_api_call_duration_seconds",
    "Duration of API calls in seconds",
    ["api_type", "operation"],
    buckets=[0.01, 0.05, 0.1, 0.5, 1.0, 2.5, 5.0],
)

rate_limit_hits_total = Counter(
    "lattice_auth_operator_rate_limit_hits_total",
    "Total number of rate limit hits",
    ["api_type"],
)
