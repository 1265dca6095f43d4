"""Prometheus metrics for calculator usage, health score distribution and tax data ingestion"""

from prometheus_client import Counter, Histogram

# Calculation metrics
calculation_counter = Counter(
    "budgetkollen_calculation_total",
    "Total calculations served",
    ["calculator"],  # tax | scenarios | health_score | compound_interest | forecast
)

health_score_histogram = Histogram(
    "budgetkollen_health_score",
    "Financial health scores issued",
    buckets=[20, 40, 60, 80, 100],
)

scenario_count_histogram = Histogram(
    "budgetkollen_loan_scenarios",
    "Loan scenarios generated per request",
    buckets=[1, 2, 4, 9, 16, 25],
)

# Skatteverket API metrics
skatteverket_fetch_failures_counter = Counter(
    "skatteverket_fetch_failures_total",
    "Failed Skatteverket API calls",
)

# Service health
request_duration_histogram = Histogram(
    "http_request_duration_seconds",
    "HTTP request latency",
    ["method", "endpoint", "status"],
)


def record_calculation(calculator: str) -> None:
    calculation_counter.labels(calculator=calculator).inc()


def record_health_score(score: int) -> None:
    """Record a score for monitoring the distribution across excellent/good/poor"""
    calculation_counter.labels(calculator="health_score").inc()
    health_score_histogram.observe(score)


def record_scenarios(count: int) -> None:
    calculation_counter.labels(calculator="scenarios").inc()
    scenario_count_histogram.observe(count)
