"""Prometheus metrics for monitoring ID checks, affordability outcomes, loan and funeral cover quotes"""

from prometheus_client import Counter, Histogram

# Identity metrics
id_check_counter = Counter(
    "origination_id_check_total",
    "Total SA ID number checks",
    ["outcome"],  # valid | invalid
)

# Affordability metrics
minimum_norms_band_counter = Counter(
    "origination_minimum_norms_band",
    "Minimum norm lookups by gross income band",
    ["band"],  # 0-800, 800-6250, 6250-25000, 25000-50000, 50000+
)

assessment_counter = Counter(
    "origination_assessment_total",
    "Total affordability assessments",
    ["outcome"],  # within_norms | below_norms
)

assessment_surplus_histogram = Histogram(
    "origination_assessment_surplus_rand",
    "Disposable income left after minimum norms",
    buckets=[-5000, -1000, 0, 1000, 3000, 5000, 10000, 25000],
)

# Loan metrics
loan_quote_counter = Counter(
    "origination_loan_quote_total",
    "Total loan quotes issued",
)

# Insurance metrics
funeral_quote_counter = Counter(
    "origination_funeral_quote_total",
    "Total funeral cover premium quotes",
    ["benefit_option"],
)

# Service health
request_duration_histogram = Histogram(
    "http_request_duration_seconds",
    "HTTP request latency",
    ["method", "endpoint", "status"],
)


def record_id_check(valid: bool) -> None:
    outcome = "valid" if valid else "invalid"
    id_check_counter.labels(outcome=outcome).inc()


def record_minimum_norms(band_label: str) -> None:
    minimum_norms_band_counter.labels(band=band_label).inc()


def record_assessment(band_label: str, expenses_below_norms: bool, surplus: float) -> None:
    """Record assessment metrics for monitoring norm breaches and surplus distribution"""
    outcome = "below_norms" if expenses_below_norms else "within_norms"
    assessment_counter.labels(outcome=outcome).inc()
    assessment_surplus_histogram.observe(surplus)
    record_minimum_norms(band_label)


def record_funeral_quote(benefit_option: str) -> None:
    funeral_quote_counter.labels(benefit_option=benefit_option).inc()
