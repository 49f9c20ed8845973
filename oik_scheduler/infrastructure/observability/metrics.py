"""Prometheus metrics for projections, installment schedules and cache behaviour"""

from typing import Iterable

from prometheus_client import Counter, Histogram

# Projection metrics
projection_counter = Counter(
    "oik_projection_total",
    "Projections built",
    ["kind"],  # upcoming | card_closings | future_installments | actuals
)

upcoming_status_counter = Counter(
    "oik_upcoming_due_total",
    "Upcoming due items emitted by urgency status",
    ["status"],  # overdue | urgent | attention | ok
)

skipped_record_counter = Counter(
    "oik_skipped_records_total",
    "Records left out of a projection for incomplete configuration",
    ["reason"],  # invalid_day_of_month | invalid_due_day | invalid_card_days
)

# Installment metrics
installment_schedule_counter = Counter(
    "oik_installment_schedules_total",
    "Installment schedules requested",
    ["outcome"],  # generated | rejected
)

installment_count_histogram = Histogram(
    "oik_installment_count",
    "Number of installments per generated schedule",
    buckets=[2, 3, 6, 10, 12, 18, 24, 36, 48],
)

# Cache metrics
cache_lookup_counter = Counter(
    "oik_cache_lookups_total",
    "Projection cache lookups",
    ["result"],  # hit | miss | expired
)

# Service health
request_duration_histogram = Histogram(
    "http_request_duration_seconds",
    "HTTP request latency",
    ["method", "endpoint", "status"],
)


def record_upcoming(statuses: Iterable[str]) -> None:
    """Record one upcoming projection and the status mix it produced"""
    projection_counter.labels(kind="upcoming").inc()
    for status in statuses:
        upcoming_status_counter.labels(status=status).inc()


def record_installment_schedule(generated: bool, installments_total: int = 0) -> None:
    if generated:
        installment_schedule_counter.labels(outcome="generated").inc()
        installment_count_histogram.observe(installments_total)
    else:
        installment_schedule_counter.labels(outcome="rejected").inc()
