"""
Verification Metrics
====================
Prometheus metrics for signature verification outcomes.
"""

from typing import Optional

from prometheus_client import CollectorRegistry, Counter, Histogram, generate_latest

# Custom registry for signature metrics
APISIGN_REGISTRY = CollectorRegistry()

VERIFICATIONS_TOTAL = Counter(
    name="apisign_verifications_total",
    documentation="Total number of signed-request verifications",
    labelnames=["sign_type", "decision", "reason"],
    registry=APISIGN_REGISTRY,
)

VERIFICATION_DURATION = Histogram(
    name="apisign_verification_duration_seconds",
    documentation="Time spent verifying signed requests",
    labelnames=["sign_type"],
    buckets=[
        0.0005, 0.001, 0.0025, 0.005, 0.01,
        0.025, 0.05, 0.1, 0.25, 0.5,
    ],
    registry=APISIGN_REGISTRY,
)


def record_verification(
    sign_type: str,
    decision: str,
    reason: Optional[str],
    duration_seconds: float,
) -> None:
    """
    Record metrics for one verification.

    Args:
        sign_type: Sign type the endpoint requires
        decision: accepted, rejected or debug_issued
        reason: Reject reason value, or None when not rejected
        duration_seconds: Time spent in the verifier
    """
    VERIFICATIONS_TOTAL.labels(
        sign_type=sign_type,
        decision=decision,
        reason=reason or "none",
    ).inc()
    VERIFICATION_DURATION.labels(sign_type=sign_type).observe(duration_seconds)


def get_metrics_text() -> bytes:
    """Render signature metrics in Prometheus exposition format."""
    return generate_latest(APISIGN_REGISTRY)
