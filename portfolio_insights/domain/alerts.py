"""Threshold alerts raised against a KPI snapshot"""

from datetime import datetime, timezone
from typing import List, Optional

from portfolio_insights.domain.formatting import format_days, format_percentage
from portfolio_insights.domain.models import Alert, KPISnapshot
from portfolio_insights.domain.thresholds import (
    HIGH_BAD_DEBT_PCT,
    HIGH_BAD_DEBT_RATE,
    HIGH_DSO_DAYS,
    LOW_COLLECTION_PCT,
    LOW_COLLECTION_RATE,
    LOW_LIQUIDATION_PCT,
    LOW_LIQUIDATION_RATE,
    PORTFOLIO_DECLINE_PCT,
)
from portfolio_insights.domain.trends import calculate_trend


def _iso_timestamp(now: datetime) -> str:
    """ISO-8601 UTC with millisecond precision and a Z suffix"""
    if now.tzinfo is None:
        now = now.replace(tzinfo=timezone.utc)
    return now.astimezone(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


def generate_alerts(snapshot: KPISnapshot, now: Optional[datetime] = None) -> List[Alert]:
    """
    Evaluate every alert rule against the snapshot.

    Each rule fires at most once and carries a fixed id, so repeated runs on
    the same snapshot produce the same ids, messages and values; only the
    timestamp follows the clock. Pass `now` to pin the timestamp.

    Rules:
    - high-bad-debt         bad debt rate > 15%          critical
    - low-collection-rate   collection rate < 75%        critical
    - high-dso              DSO > 60 days                warning
    - low-liquidation-rate  liquidation rate < 60%       warning
    - declining-portfolio   portfolio value down > 10%   warning
    """
    timestamp = _iso_timestamp(now or datetime.now(timezone.utc))
    alerts: List[Alert] = []

    if snapshot.bad_debt_write_off_rate > HIGH_BAD_DEBT_RATE:
        alerts.append(
            Alert(
                id="high-bad-debt",
                type="critical",
                title="High Bad Debt Write-off Rate",
                message=(
                    f"Bad debt rate is {format_percentage(snapshot.bad_debt_write_off_rate)}, "
                    f"exceeding {HIGH_BAD_DEBT_PCT}% threshold"
                ),
                value=snapshot.bad_debt_write_off_rate * 100,
                threshold=HIGH_BAD_DEBT_PCT,
                timestamp=timestamp,
                action_required=True,
            )
        )

    if snapshot.collection_rate < LOW_COLLECTION_RATE:
        alerts.append(
            Alert(
                id="low-collection-rate",
                type="critical",
                title="Low Collection Rate",
                message=(
                    f"Collection rate is {format_percentage(snapshot.collection_rate)}, "
                    f"below {LOW_COLLECTION_PCT}% target"
                ),
                value=snapshot.collection_rate * 100,
                threshold=LOW_COLLECTION_PCT,
                timestamp=timestamp,
                action_required=True,
            )
        )

    if snapshot.days_sales_outstanding > HIGH_DSO_DAYS:
        alerts.append(
            Alert(
                id="high-dso",
                type="warning",
                title="High Days Sales Outstanding",
                message=f"DSO is {format_days(snapshot.days_sales_outstanding)}, above optimal range",
                value=snapshot.days_sales_outstanding,
                threshold=HIGH_DSO_DAYS,
                timestamp=timestamp,
                action_required=True,
            )
        )

    if snapshot.liquidation_rate < LOW_LIQUIDATION_RATE:
        alerts.append(
            Alert(
                id="low-liquidation-rate",
                type="warning",
                title="Low Liquidation Rate",
                message=(
                    f"Liquidation rate is {format_percentage(snapshot.liquidation_rate)}, "
                    f"below {LOW_LIQUIDATION_PCT}% target"
                ),
                value=snapshot.liquidation_rate * 100,
                threshold=LOW_LIQUIDATION_PCT,
                timestamp=timestamp,
                action_required=True,
            )
        )

    portfolio_trend = calculate_trend(snapshot.portfolio_value_trend)
    if portfolio_trend.trend == "down" and portfolio_trend.change > PORTFOLIO_DECLINE_PCT:
        alerts.append(
            Alert(
                id="declining-portfolio",
                type="warning",
                title="Declining Portfolio Value",
                message=f"Portfolio value has decreased by {portfolio_trend.change:.1f}% recently",
                value=portfolio_trend.change,
                threshold=PORTFOLIO_DECLINE_PCT,
                timestamp=timestamp,
                action_required=True,
            )
        )

    return alerts


def filter_alerts_by_type(alerts: List[Alert], alert_type: str) -> List[Alert]:
    return [alert for alert in alerts if alert.type == alert_type]


def find_alert_by_id(alerts: List[Alert], alert_id: str) -> Optional[Alert]:
    return next((alert for alert in alerts if alert.id == alert_id), None)


def has_critical_alerts(alerts: List[Alert]) -> bool:
    return any(alert.type == "critical" for alert in alerts)
