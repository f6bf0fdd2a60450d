"""Prometheus metrics for risk tier distribution, screenings and request latency"""

from prometheus_client import Counter, Histogram

# Assessment metrics
assessment_counter = Counter(
    "tenant_risk_assessments_total",
    "Tenant behavior assessments computed",
    ["risk_level"],  # LOW | MEDIUM | HIGH
)

report_counter = Counter(
    "behavior_reports_total",
    "Behavior reports generated",
    ["report_type"],
)

# Screening metrics
screening_counter = Counter(
    "tenant_screenings_total",
    "Tenant screenings completed",
    ["risk_level"],
)

screening_latency_histogram = Histogram(
    "screening_latency_seconds",
    "Screening provider response time",
    buckets=[0.05, 0.1, 0.25, 0.5, 1.0, 2.5, 5.0],
)

screening_failure_counter = Counter(
    "screening_provider_failures_total",
    "Failed screening provider calls",
)

# Service health
request_duration_histogram = Histogram(
    "http_request_duration_seconds",
    "HTTP request latency",
    ["method", "endpoint", "status"],
)


def record_assessment(risk_level: str) -> None:
    assessment_counter.labels(risk_level=risk_level).inc()


def record_screening(risk_level: str) -> None:
    screening_counter.labels(risk_level=risk_level).inc()
