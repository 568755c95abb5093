"""Trend analysis over chronological KPI series"""

from typing import Sequence

from portfolio_insights.domain.models import (
    KPISnapshot,
    MetricTrend,
    PortfolioTrend,
    TrendAnalysis,
    TrendPoint,
    TrendResult,
)

_DIRECTIONS = {"up": "increasing", "down": "decreasing"}


def calculate_trend(series: Sequence[TrendPoint]) -> TrendResult:
    """
    Compare the last two points of a series.

    Returns the absolute percentage change and its direction. Series with
    fewer than two points, or whose previous point is zero, are neutral
    with zero change (a move from or to zero is not reported).
    """
    if len(series) < 2:
        return TrendResult(change=0, trend="neutral")

    latest = series[-1].amount
    previous = series[-2].amount

    if previous == 0:
        return TrendResult(change=0, trend="neutral")

    delta = (latest - previous) / previous * 100

    if delta > 0:
        trend = "up"
    elif delta < 0:
        trend = "down"
    else:
        trend = "neutral"

    return TrendResult(change=abs(delta), trend=trend)


def analyze_trends(snapshot: KPISnapshot) -> TrendAnalysis:
    """Run calculate_trend over the portfolio, collection and liquidation series."""
    portfolio = calculate_trend(snapshot.portfolio_value_trend)
    collection = calculate_trend(snapshot.collection_rate_trend)
    liquidation = calculate_trend(snapshot.liquidation_rate_trend)

    return TrendAnalysis(
        portfolio_trend=PortfolioTrend(
            change=portfolio.change,
            trend=portfolio.trend,
            direction=_DIRECTIONS.get(portfolio.trend, "stable"),
        ),
        collection_performance=MetricTrend(
            current=snapshot.collection_rate,
            change=collection.change,
            trend=collection.trend,
        ),
        liquidation_efficiency=MetricTrend(
            current=snapshot.liquidation_rate,
            change=liquidation.change,
            trend=liquidation.trend,
        ),
    )
