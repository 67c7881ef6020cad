"""
Risk classification from utilization ratios.
"""

from collections.abc import Iterable

from .models import DayForecast, RiskLevel

MEDIUM_THRESHOLD = 0.7
HIGH_THRESHOLD = 0.9
CRITICAL_THRESHOLD = 1.1


def classify_risk(utilization: float) -> RiskLevel:
    """
    Map a utilization ratio to a risk tier.

    Tiers are half-open: [0, 0.7) low, [0.7, 0.9) medium, [0.9, 1.1] high,
    anything above 1.1 critical.
    """
    if utilization < MEDIUM_THRESHOLD:
        return RiskLevel.LOW
    if utilization < HIGH_THRESHOLD:
        return RiskLevel.MEDIUM
    if utilization <= CRITICAL_THRESHOLD:
        return RiskLevel.HIGH
    return RiskLevel.CRITICAL


def overall_risk(days: Iterable[DayForecast]) -> RiskLevel:
    """Worst risk tier present across the given days (low when empty)."""
    return max(
        (day.risk_level for day in days),
        key=lambda level: level.severity,
        default=RiskLevel.LOW,
    )
