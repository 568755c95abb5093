"""Assembles the component outputs into presentation-ready structures"""

import math
from datetime import datetime
from typing import List, Optional

from portfolio_insights.domain.alerts import filter_alerts_by_type, generate_alerts, has_critical_alerts
from portfolio_insights.domain.formatting import format_currency_compact, format_days, format_percentage
from portfolio_insights.domain.models import (
    Alert,
    ChartData,
    DashboardSummary,
    DerivedStats,
    FinancialsReport,
    KPISnapshot,
    PerformanceMetric,
    PortfolioChartPoint,
    RateChartPoint,
    RiskAssessment,
    SummaryMetrics,
    TrendAnalysis,
    TrendSeries,
)
from portfolio_insights.domain.recommendations import get_recommendations
from portfolio_insights.domain.risk import get_portfolio_risk_level
from portfolio_insights.domain.scoring import (
    calculate_portfolio_health_score,
    calculate_stats,
    get_performance_status,
)
from portfolio_insights.domain.thresholds import (
    BAD_DEBT_RATE_CHART_TARGET,
    COLLECTION_RATE_CHART_TARGET,
    DSO_CHART_TARGET,
    LIQUIDATION_RATE_CHART_TARGET,
)
from portfolio_insights.domain.trends import analyze_trends


def _rate_series(series: TrendSeries) -> List[RateChartPoint]:
    return [
        RateChartPoint(
            month=point.label,
            rate=point.amount * 100,
            formatted_rate=format_percentage(point.amount),
        )
        for point in series
    ]


def process_chart_data(snapshot: KPISnapshot) -> ChartData:
    """
    Build chart series and the four performance-metric rows.

    Rate series are scaled to percent; each metric row carries its target
    and status (DSO in days, the others in percent).
    """
    portfolio_trend = [
        PortfolioChartPoint(
            month=point.label,
            value=point.amount,
            formatted_value=format_currency_compact(point.amount),
        )
        for point in snapshot.portfolio_value_trend
    ]

    performance_metrics = [
        PerformanceMetric(
            name="Collection Rate",
            value=snapshot.collection_rate * 100,
            target=COLLECTION_RATE_CHART_TARGET,
            status=get_performance_status(snapshot.collection_rate, "rate"),
            formatted_value=format_percentage(snapshot.collection_rate),
        ),
        PerformanceMetric(
            name="Liquidation Rate",
            value=snapshot.liquidation_rate * 100,
            target=LIQUIDATION_RATE_CHART_TARGET,
            status=get_performance_status(snapshot.liquidation_rate, "rate"),
            formatted_value=format_percentage(snapshot.liquidation_rate),
        ),
        PerformanceMetric(
            name="Bad Debt Rate",
            value=snapshot.bad_debt_write_off_rate * 100,
            target=BAD_DEBT_RATE_CHART_TARGET,
            status=get_performance_status(snapshot.bad_debt_write_off_rate, "bad_debt"),
            formatted_value=format_percentage(snapshot.bad_debt_write_off_rate),
        ),
        PerformanceMetric(
            name="DSO",
            value=snapshot.days_sales_outstanding,
            target=DSO_CHART_TARGET,
            status=get_performance_status(snapshot.days_sales_outstanding, "days"),
            formatted_value=format_days(snapshot.days_sales_outstanding),
        ),
    ]

    return ChartData(
        portfolio_trend=portfolio_trend,
        collection_trend=_rate_series(snapshot.collection_rate_trend),
        liquidation_trend=_rate_series(snapshot.liquidation_rate_trend),
        performance_metrics=performance_metrics,
    )


def calculate_summary_metrics(snapshot: KPISnapshot) -> SummaryMetrics:
    """Display strings for the headline KPIs"""
    stats = calculate_stats(snapshot)
    risk = get_portfolio_risk_level(snapshot.bad_debt_write_off_rate)

    if math.isnan(stats.portfolio_health):
        health_score = "0.0"
    else:
        health_score = f"{stats.portfolio_health:.1f}"

    return SummaryMetrics(
        portfolio_value=format_currency_compact(snapshot.total_portfolio_value),
        collection_rate=format_percentage(snapshot.collection_rate),
        liquidation_rate=format_percentage(snapshot.liquidation_rate),
        bad_debt_rate=format_percentage(snapshot.bad_debt_write_off_rate),
        days_outstanding=format_days(snapshot.days_sales_outstanding),
        net_performance=format_percentage(stats.net_collection_rate),
        health_score=health_score,
        risk_level=risk.level,
    )


def build_dashboard_summary(
    stats: DerivedStats,
    alerts: List[Alert],
    trends: TrendAnalysis,
    risk: RiskAssessment,
) -> DashboardSummary:
    return DashboardSummary(
        portfolio_value=stats.total_portfolio_value,
        collection_rate=stats.collection_rate,
        liquidation_rate=stats.liquidation_rate,
        bad_debt_rate=stats.bad_debt_write_off_rate,
        days_outstanding=stats.days_sales_outstanding,
        performance_score=stats.performance_score,
        portfolio_health=stats.portfolio_health,
        alert_count=len(alerts),
        has_critical_alerts=has_critical_alerts(alerts),
        trends=trends,
        risk_level=risk,
    )


def build_financials_report(snapshot: KPISnapshot, now: Optional[datetime] = None) -> FinancialsReport:
    """
    Main entry point: run every component over one snapshot.

    Returns a FinancialsReport holding stats, display strings, chart data,
    trends, health grade, risk tier, alerts and recommendations.
    """
    stats = calculate_stats(snapshot)
    trends = analyze_trends(snapshot)
    risk = get_portfolio_risk_level(snapshot.bad_debt_write_off_rate)
    alerts = generate_alerts(snapshot, now=now)

    return FinancialsReport(
        stats=stats,
        summary_metrics=calculate_summary_metrics(snapshot),
        chart_data=process_chart_data(snapshot),
        trend_analysis=trends,
        portfolio_health=calculate_portfolio_health_score(snapshot),
        risk_assessment=risk,
        dashboard_summary=build_dashboard_summary(stats, alerts, trends, risk),
        alerts=alerts,
        critical_alerts=filter_alerts_by_type(alerts, "critical"),
        warning_alerts=filter_alerts_by_type(alerts, "warning"),
        has_critical_alerts=has_critical_alerts(alerts),
        recommendations=get_recommendations(snapshot),
    )
