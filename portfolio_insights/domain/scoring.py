"""Portfolio scoring engine - performance score, health grade and KPI status"""

import math

from portfolio_insights.domain.formatting import round_half_up
from portfolio_insights.domain.models import DerivedStats, KPISnapshot, PortfolioHealth
from portfolio_insights.domain.thresholds import (
    BAD_DEBT_RATE_CEILING,
    COLLECTION_RATE_TARGET,
    FAILING_GRADE,
    FALLBACK_COLOR,
    FALLBACK_STATUS,
    GRADE_BANDS,
    HEALTH_WEIGHTS,
    LIQUIDATION_RATE_TARGET,
    PERFORMANCE_WEIGHTS,
    STATUS_BANDS,
    STATUS_COLORS,
)


def _cap_at(value: float, ceiling: float) -> float:
    # NaN passes through untouched
    return ceiling if value > ceiling else value


def _floor_at(value: float, floor: float) -> float:
    return floor if value < floor else value


def calculate_performance_score(snapshot: KPISnapshot) -> float:
    """
    Weighted composite of the raw rates, 0-100 for rates within [0, 1].

    Scoring weights:
    - 40%: Collection rate
    - 30%: Liquidation rate
    - 30%: Share of the portfolio NOT written off as bad debt

    Out-of-range rates are not clamped, so invalid upstream data can push the
    score outside 0-100.
    """
    return (
        snapshot.collection_rate * PERFORMANCE_WEIGHTS["collection"]
        + snapshot.liquidation_rate * PERFORMANCE_WEIGHTS["liquidation"]
        + (1 - snapshot.bad_debt_write_off_rate) * PERFORMANCE_WEIGHTS["bad_debt"]
    ) * 100


def calculate_stats(snapshot: KPISnapshot) -> DerivedStats:
    """Snapshot KPIs plus net collection rate, portfolio health and performance score"""
    net_collection_rate = snapshot.collection_rate - snapshot.bad_debt_write_off_rate
    portfolio_health = _floor_at(100 - snapshot.bad_debt_write_off_rate * 100, 0)

    return DerivedStats(
        total_portfolio_value=snapshot.total_portfolio_value,
        collection_rate=snapshot.collection_rate,
        liquidation_rate=snapshot.liquidation_rate,
        bad_debt_write_off_rate=snapshot.bad_debt_write_off_rate,
        days_sales_outstanding=snapshot.days_sales_outstanding,
        net_collection_rate=net_collection_rate,
        portfolio_health=portfolio_health,
        performance_score=calculate_performance_score(snapshot),
    )


def calculate_portfolio_health_score(snapshot: KPISnapshot) -> PortfolioHealth:
    """
    Grade the portfolio against its targets.

    Each rate is normalized against a target before weighting:
    - Collection:  rate / 90%, capped at 100        (weight 40%)
    - Liquidation: rate / 80%, capped at 100        (weight 30%)
    - Bad debt:    100 - rate / 10%, floored at 0   (weight 30%)

    The weighted total is clamped to 0-100 and rounded half-up; the grade is
    read from the rounded score so equal scores always share a grade. A total
    that cannot be computed (NaN input) scores 0.
    """
    collection_score = _cap_at(snapshot.collection_rate / COLLECTION_RATE_TARGET * 100, 100)
    liquidation_score = _cap_at(snapshot.liquidation_rate / LIQUIDATION_RATE_TARGET * 100, 100)
    bad_debt_score = _floor_at(100 - snapshot.bad_debt_write_off_rate / BAD_DEBT_RATE_CEILING * 100, 0)

    total = (
        collection_score * HEALTH_WEIGHTS["collection"]
        + liquidation_score * HEALTH_WEIGHTS["liquidation"]
        + bad_debt_score * HEALTH_WEIGHTS["bad_debt"]
    )

    if math.isnan(total):
        total = 0.0
    score = round_half_up(max(0.0, min(100.0, total)))

    grade, description = grade_for_score(score)
    return PortfolioHealth(score=score, grade=grade, description=description)


def grade_for_score(score: float) -> tuple[str, str]:
    """Map a 0-100 health score to (grade, description)."""
    for minimum, grade, description in GRADE_BANDS:
        if score >= minimum:
            return grade, description
    return FAILING_GRADE


def get_performance_status(value: float, metric_type: str) -> str:
    """
    Classify a KPI value as excellent / good / warning / critical.

    metric_type selects the band table: "rate" and "score" reward higher
    values, "days" and "bad_debt" reward lower ones. Unknown types are "good".
    """
    bands = STATUS_BANDS.get(metric_type)
    if bands is None:
        return FALLBACK_STATUS

    higher_is_better, cutoffs = bands
    for cutoff, status in cutoffs:
        if (value >= cutoff) if higher_is_better else (value <= cutoff):
            return status
    return "critical"


def get_performance_color(value: float, metric_type: str) -> str:
    """Hex color for the status of a KPI value"""
    if metric_type not in STATUS_BANDS:
        return FALLBACK_COLOR
    return STATUS_COLORS[get_performance_status(value, metric_type)]
