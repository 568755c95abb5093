"""
CSV report generation for a KPI snapshot.

Layout:
  Metric,Value
  <five scalar KPIs>
  ,
  Portfolio Value Trend,
  <label,amount per point>
  ,
  Collection Rate Trend,
  <label,percent per point>
  ,
  Liquidation Rate Trend,
  <label,percent per point>

Cells are joined with "," and rows with "\n" (no quoting, no trailing
newline) so the output matches the dashboard download byte for byte.
"""

import logging
import math
from datetime import datetime, timezone
from decimal import Decimal
from typing import List, Optional

from portfolio_insights.config import settings
from portfolio_insights.domain.formatting import format_percentage
from portfolio_insights.domain.models import KPISnapshot, TrendSeries

logger = logging.getLogger(__name__)

_BLANK_ROW = ["", ""]


def _number_to_string(value: float) -> str:
    """
    Render a raw number the way JavaScript's Number.toString does.

    Uses the shortest round-tripping digits. Plain decimal notation covers
    1e-6 <= |x| < 1e21 (1500000, 0.25, 0.000001); anything outside uses an
    unpadded, explicitly signed exponent (1e-7, 1.5e+21).
    """
    number = float(value)
    if math.isnan(number):
        return "NaN"
    if math.isinf(number):
        return "Infinity" if number > 0 else "-Infinity"
    if number == 0:
        return "0"

    _, digit_tuple, exponent = Decimal(repr(abs(number))).as_tuple()
    digits = "".join(str(d) for d in digit_tuple).rstrip("0")
    exponent += len(digit_tuple) - len(digits)
    # number == 0.<digits> x 10**point
    point = exponent + len(digits)

    if len(digits) <= point <= 21:
        text = digits + "0" * (point - len(digits))
    elif 0 < point <= 21:
        text = f"{digits[:point]}.{digits[point:]}"
    elif -6 < point <= 0:
        text = "0." + "0" * -point + digits
    else:
        mantissa = digits[0] if len(digits) == 1 else f"{digits[0]}.{digits[1:]}"
        text = f"{mantissa}e{point - 1:+d}"

    return f"-{text}" if number < 0 else text


def _section(title: str, series: TrendSeries, as_rate: bool) -> List[List[str]]:
    rows = [[title, ""]]
    for point in series:
        cell = format_percentage(point.amount) if as_rate else _number_to_string(point.amount)
        rows.append([point.label, cell])
    return rows


def generate_csv(snapshot: KPISnapshot) -> str:
    """Serialize the snapshot's KPIs and trend series as CSV text"""
    rows: List[List[str]] = [
        ["Metric", "Value"],
        ["Total Portfolio Value", _number_to_string(snapshot.total_portfolio_value)],
        ["Collection Rate", format_percentage(snapshot.collection_rate)],
        ["Liquidation Rate", format_percentage(snapshot.liquidation_rate)],
        ["Bad Debt Write-off Rate", format_percentage(snapshot.bad_debt_write_off_rate)],
        ["Days Sales Outstanding", _number_to_string(snapshot.days_sales_outstanding)],
        _BLANK_ROW,
        *_section("Portfolio Value Trend", snapshot.portfolio_value_trend, as_rate=False),
        _BLANK_ROW,
        *_section("Collection Rate Trend", snapshot.collection_rate_trend, as_rate=True),
        _BLANK_ROW,
        *_section("Liquidation Rate Trend", snapshot.liquidation_rate_trend, as_rate=True),
    ]

    logger.debug("Generated CSV report", extra={"row_count": len(rows)})
    return "\n".join(",".join(row) for row in rows)


def report_filename(now: Optional[datetime] = None, prefix: Optional[str] = None) -> str:
    """financials-report-YYYY-MM-DD.csv, dated in UTC"""
    moment = now or datetime.now(timezone.utc)
    if moment.tzinfo is not None:
        moment = moment.astimezone(timezone.utc)
    return f"{prefix or settings.export_filename_prefix}-{moment.date().isoformat()}.csv"
