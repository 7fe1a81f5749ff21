"""Prometheus metrics for monitoring scan outcomes, risk distribution and webhook performance"""

from prometheus_client import Counter, Histogram

from redflag.domain.models import QoEReport

# Scan metrics
scan_counter = Counter(
    "redflag_scans_total",
    "Total scans processed",
    ["status"],  # completed | failed
)

risk_level_counter = Counter(
    "redflag_risk_level_total",
    "Completed scans by risk level",
    ["level"],  # low | medium | high
)

personal_expense_flag_counter = Counter(
    "redflag_personal_expense_flags_total",
    "Personal expenses flagged by severity",
    ["severity"],
)

analysis_duration_histogram = Histogram(
    "redflag_analysis_duration_seconds",
    "Time spent running the analysis engine",
    buckets=[0.005, 0.01, 0.05, 0.1, 0.25, 0.5, 1.0, 2.5],
)

# Webhook metrics
webhook_latency_histogram = Histogram(
    "webhook_latency_seconds",
    "Scan completion webhook response time",
    buckets=[0.1, 0.25, 0.5, 1.0, 2.5, 5.0, 10.0],
)

webhook_failure_counter = Counter(
    "webhook_failures_total",
    "Failed webhook deliveries",
)

# Service health
request_duration_histogram = Histogram(
    "http_request_duration_seconds",
    "HTTP request latency",
    ["method", "endpoint", "status"],
)


def record_analysis(report: QoEReport) -> None:
    """Record completed-scan metrics for risk distribution analysis"""
    scan_counter.labels(status="completed").inc()
    risk_level_counter.labels(level=report.risk_level).inc()

    for expense in report.personal_expenses:
        personal_expense_flag_counter.labels(severity=expense.severity).inc()


def record_failure() -> None:
    scan_counter.labels(status="failed").inc()
