"""
Threshold tables shared by scoring, risk tiering, alerts and recommendations.

Every cutoff used by the analytics core lives here so the same boundary is
never re-derived in two places.
"""

from typing import Dict, Tuple

# Status bands per metric type: (higher_is_better, ((cutoff, status), ...)).
# Bands are checked in order; values failing every band are "critical".
STATUS_BANDS: Dict[str, Tuple[bool, Tuple[Tuple[float, str], ...]]] = {
    "rate": (True, ((0.9, "excellent"), (0.75, "good"), (0.6, "warning"))),
    "score": (True, ((80, "excellent"), (60, "good"), (40, "warning"))),
    "days": (False, ((30, "excellent"), (45, "good"), (60, "warning"))),
    "bad_debt": (False, ((0.05, "excellent"), (0.10, "good"), (0.15, "warning"))),
}
FALLBACK_STATUS = "good"

STATUS_COLORS: Dict[str, str] = {
    "excellent": "#10B981",
    "good": "#F59E0B",
    "warning": "#EF4444",
    "critical": "#DC2626",
}
FALLBACK_COLOR = "#6B7280"

# Performance score weights (raw rates)
PERFORMANCE_WEIGHTS = {
    "collection": 0.4,
    "liquidation": 0.3,
    "bad_debt": 0.3,
}

# Portfolio health weights and the targets each rate is normalized against
HEALTH_WEIGHTS = {
    "collection": 0.4,
    "liquidation": 0.3,
    "bad_debt": 0.3,
}
COLLECTION_RATE_TARGET = 0.9
LIQUIDATION_RATE_TARGET = 0.8
BAD_DEBT_RATE_CEILING = 0.1

# (minimum score, grade, description), highest first
GRADE_BANDS: Tuple[Tuple[float, str, str], ...] = (
    (90, "A", "Excellent portfolio performance"),
    (80, "B", "Good portfolio performance"),
    (70, "C", "Average portfolio performance"),
    (60, "D", "Below average performance"),
)
FAILING_GRADE = ("F", "Poor portfolio performance")

# Alert triggers. Rate cutoffs are kept as whole percents, which alerts
# report as their threshold; the fractional rate is derived from them.
HIGH_BAD_DEBT_PCT = 15
LOW_COLLECTION_PCT = 75
HIGH_DSO_DAYS = 60
LOW_LIQUIDATION_PCT = 60
PORTFOLIO_DECLINE_PCT = 10

HIGH_BAD_DEBT_RATE = HIGH_BAD_DEBT_PCT / 100
LOW_COLLECTION_RATE = LOW_COLLECTION_PCT / 100
LOW_LIQUIDATION_RATE = LOW_LIQUIDATION_PCT / 100

# Bad-debt risk tiers: (exclusive lower bound, level, message, color), highest first
RISK_TIERS: Tuple[Tuple[float, str, str, str], ...] = (
    (HIGH_BAD_DEBT_RATE, "critical", "Critical risk - immediate intervention required", "#DC2626"),
    (0.10, "high", "High risk - enhanced monitoring needed", "#EF4444"),
    (0.05, "medium", "Medium risk - standard monitoring", "#F59E0B"),
)
BASELINE_RISK = ("low", "Low risk - portfolio performing well", "#10B981")

# Recommendation triggers
CREDIT_REVIEW_BAD_DEBT_RATE = 0.10
COLLECTION_STRATEGY_RATE = 0.8
COLLECTION_CYCLE_DSO_DAYS = 45
LIQUIDATION_PROCESS_RATE = 0.7
EXCELLENT_COLLECTION_RATE = 0.9
EXCELLENT_BAD_DEBT_RATE = 0.05

# Performance-metric chart targets (percent, except DSO in days)
COLLECTION_RATE_CHART_TARGET = 85
LIQUIDATION_RATE_CHART_TARGET = 75
BAD_DEBT_RATE_CHART_TARGET = 5
DSO_CHART_TARGET = 30
