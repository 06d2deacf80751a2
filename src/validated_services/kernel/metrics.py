"""
Prometheus metrics for validated services.

Counts how services are constructed and executed so that validation-heavy
failure rates show up on dashboards without parsing logs.
"""

from prometheus_client import Counter, Histogram

# ============================================================================
# Construction Metrics
# ============================================================================

services_initialized_total = Counter(
    "vs_services_initialized_total",
    "Total number of services constructed, by status after input validation",
    ["service_type", "status"],  # status: PENDING, FAILED
)

# ============================================================================
# Execution Metrics
# ============================================================================

service_executions_total = Counter(
    "vs_service_executions_total",
    "Total number of execute() calls",
    ["service_type", "outcome"],  # outcome: success, failure, ignored, error
)

service_execution_duration_seconds = Histogram(
    "vs_service_execution_duration_seconds",
    "Duration of business logic execution in seconds",
    ["service_type"],
    buckets=(0.001, 0.005, 0.01, 0.025, 0.05, 0.1, 0.25, 0.5, 1.0, 2.5),
)

# ============================================================================
# Error Accumulation Metrics
# ============================================================================

error_contributions_total = Counter(
    "vs_error_contributions_total",
    "Total number of error contributions merged into service error trees",
    ["service_type", "source"],  # source: validation, logic
)
