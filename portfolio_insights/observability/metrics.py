"""Prometheus metrics for health grades, risk tiers, alerts and exports"""

from prometheus_client import Counter, Histogram

from portfolio_insights.domain.models import FinancialsReport

# Report metrics
report_counter = Counter(
    "portfolio_reports_total",
    "Total financials reports generated",
    ["risk_level"],  # low | medium | high | critical
)

health_grade_counter = Counter(
    "portfolio_health_grade_total",
    "Portfolio health grades issued",
    ["grade"],  # A | B | C | D | F
)

alert_counter = Counter(
    "portfolio_alerts_total",
    "Alerts raised by rule",
    ["alert_id", "type"],
)

report_duration_histogram = Histogram(
    "portfolio_report_duration_seconds",
    "Time spent building a financials report",
    buckets=[0.001, 0.005, 0.01, 0.05, 0.1, 0.5, 1.0],
)

# Export metrics
csv_export_counter = Counter(
    "portfolio_csv_exports_total",
    "CSV reports exported",
)


def record_report(report: FinancialsReport) -> None:
    """Record grade, risk tier and per-rule alert counts for one report"""
    report_counter.labels(risk_level=report.risk_assessment.level).inc()
    health_grade_counter.labels(grade=report.portfolio_health.grade).inc()

    for alert in report.alerts:
        alert_counter.labels(alert_id=alert.id, type=alert.type).inc()
