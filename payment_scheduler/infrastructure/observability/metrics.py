"""Prometheus metrics for monitoring budget pressure and priority distribution"""

from prometheus_client import Counter, Histogram

from payment_scheduler.domain.models import SmartScheduleResult

# Schedule metrics
schedule_run_counter = Counter(
    "payment_schedule_runs_total",
    "Total smart schedule runs",
    ["outcome"],  # within_budget | over_budget
)

schedule_item_counter = Counter(
    "payment_schedule_items_total",
    "Payment items placed by the greedy allocator",
    ["bucket"],  # scheduled | deferred
)

priority_level_counter = Counter(
    "payment_priority_level_total",
    "Scored payment items by priority level",
    ["level"],  # critical | high | medium | low
)

schedule_duration_histogram = Histogram(
    "payment_schedule_duration_seconds",
    "Smart schedule computation time",
    buckets=[0.001, 0.005, 0.01, 0.05, 0.1, 0.5, 1.0],
)

invalid_budget_counter = Counter(
    "payment_schedule_invalid_budget_total",
    "Schedule requests rejected for an invalid budget",
)


def record_schedule(result: SmartScheduleResult) -> None:
    """Record one schedule run: budget outcome, bucket sizes and level mix"""
    outcome = "over_budget" if result.is_over_budget else "within_budget"
    schedule_run_counter.labels(outcome=outcome).inc()

    schedule_item_counter.labels(bucket="scheduled").inc(len(result.scheduled_items))
    schedule_item_counter.labels(bucket="deferred").inc(len(result.deferred_items))

    for item in result.scheduled_items + result.deferred_items:
        priority_level_counter.labels(level=item.priority_level).inc()
