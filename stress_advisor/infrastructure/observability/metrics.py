"""Prometheus metrics for monitoring stress scores, risk tiers, and explanation fallbacks"""

from prometheus_client import Counter, Histogram

# Scoring metrics
stress_score_histogram = Histogram(
    "stress_score",
    "Stress scores computed for submitted household profiles",
    buckets=[10, 20, 30, 40, 50, 60, 70, 80, 90, 100],
)

risk_level_counter = Counter(
    "stress_risk_level_total",
    "Stress summaries by risk tier",
    ["level"],  # Low | Moderate | High
)

simulation_counter = Counter(
    "stress_simulation_total",
    "Scenario simulations by direction of stress change",
    ["direction"],  # up | down | flat
)

# Explanation metrics
explanation_counter = Counter(
    "explanation_total",
    "Explanations served by source",
    ["type", "source"],  # source: model | fallback
)

explanation_fallback_counter = Counter(
    "explanation_fallback_total",
    "Explanation fallbacks by reason",
    ["reason"],  # not_configured | service_error | invalid_output | unexpected_error
)

text_service_latency_histogram = Histogram(
    "text_service_latency_seconds",
    "Text-generation service response time",
    buckets=[0.1, 0.25, 0.5, 1.0, 2.5, 5.0, 10.0],
)

# Service health
request_duration_histogram = Histogram(
    "http_request_duration_seconds",
    "HTTP request latency",
    ["method", "endpoint", "status"],
)


def record_stress(stress_score: int, risk_level: str) -> None:
    """Record score distribution and risk tier counts"""
    stress_score_histogram.observe(stress_score)
    risk_level_counter.labels(level=risk_level).inc()


def record_simulation(delta_stress_score: int) -> None:
    """Record whether a what-if scenario raised, lowered, or kept the stress score"""
    if delta_stress_score > 0:
        direction = "up"
    elif delta_stress_score < 0:
        direction = "down"
    else:
        direction = "flat"

    simulation_counter.labels(direction=direction).inc()


def record_explanation(explain_type: str, source: str, fallback_reason: str | None = None) -> None:
    """Record which path produced an explanation, and why it fell back"""
    explanation_counter.labels(type=explain_type, source=source).inc()
    if fallback_reason is not None:
        explanation_fallback_counter.labels(reason=fallback_reason).inc()
