"""Prometheus metrics for the OCI Service Operator."""

from prometheus_client import Counter, Histogram

# Reconciliation metrics
reconcile_total = Counter(
    "oci_service_operator_reconcile_total",
    "Total number of reconciliations",
    ["kind", "result"],
)

reconcile_duration_seconds = Histogram(
    "oci_service_operator_reconcile_duration_seconds",
    "Duration of reconciliations in seconds",
    ["kind"],
    buckets=[0.1, 0.5, 1.0, 2.5, 5.0, 10.0, 30.0],
)

delete_total = Counter(
    "oci_service_operator_delete_total",
    "Total number of deletion passes",
    ["kind", "result"],
)

# Resource status metrics
resource_status_total = Counter(
    "oci_service_operator_resource_status_total",
    "Resource status observations",
    ["kind", "status"],
)

error_total = Counter(
    "oci_service_operator_error_total",
    "Total number of reconciliation errors",
    ["kind", "error_type"],
)

# Configuration drift detection metrics
drift_detected_total = Counter(
    "oci_service_operator_drift_detected_total",
    "Total number of configuration drift detections",
    ["kind"],
)

# API call metrics
api_call_total = Counter(
    "oci_service_operator_api_call_total",
    "Total number of OCI API calls",
    ["service", "operation", "result"],
)

api_call_duration_seconds = Histogram(
    "oci_service_operator_api_call_duration_seconds",
    "Duration of OCI API calls in seconds",
    ["service", "operation"],
    buckets=[0.01, 0.05, 0.1, 0.5, 1.0, 2.5, 5.0],
)

rate_limit_hits_total = Counter(
    "oci_service_operator_rate_limit_hits_total",
    "Total number of calls delayed by the client-side rate limiter",
    ["service"],
)
