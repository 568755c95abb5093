"""
Display formatting for portfolio KPIs.

Conventions (en-US, USD):
  Currency          →  $1,234,567.89   (2 decimals)
  Compact currency  →  $1.3M           (0-1 decimals, K/M/B/T)
  Percent           →  12.34%          (fraction x 100, 2 decimals)
  Number            →  1,234.568       (up to 3 decimals)
  Days              →  47 days         (whole number)

Every formatter is total: non-numeric input is treated as NaN and rendered
as a zero-valued string instead of raising.
"""

import math
from datetime import date, datetime
from decimal import ROUND_HALF_UP, Context, Decimal
from typing import Any

# Wide enough to quantize any finite float without InvalidOperation
_CONTEXT = Context(prec=400, rounding=ROUND_HALF_UP)
_CENTS = Decimal("0.01")
_TENTHS = Decimal("0.1")
_THOUSANDTHS = Decimal("0.001")

_COMPACT_UNITS = (
    (Decimal(1), ""),
    (Decimal(10**3), "K"),
    (Decimal(10**6), "M"),
    (Decimal(10**9), "B"),
    (Decimal(10**12), "T"),
)

INFINITY_SYMBOL = "∞"


def _to_float(value: Any) -> float:
    try:
        return float(value)
    except (TypeError, ValueError):
        return math.nan


def _to_decimal(value: float) -> Decimal:
    return Decimal(repr(value))


def _signed(text: str, value) -> str:
    return f"-{text}" if value < 0 else text


def round_half_up(value: float) -> int:
    """Round a finite value to the nearest integer, ties toward positive infinity."""
    return math.floor(value + 0.5)


def format_currency(amount: Any) -> str:
    """Format as full USD currency with 2 decimals: $1,234.56"""
    value = _to_float(amount)
    if math.isnan(value):
        return "$0.00"
    if math.isinf(value):
        return _signed(f"${INFINITY_SYMBOL}", value)

    cents = _to_decimal(value).quantize(_CENTS, context=_CONTEXT)
    return _signed(f"${abs(cents):,.2f}", cents)


def format_currency_compact(amount: Any) -> str:
    """
    Format as compact USD currency: $950, $12.3K, $1.3M.

    The scaled figure keeps at most one decimal (rounded half-up) and drops a
    trailing ".0". A figure that rounds up to 1000 of its unit moves to the
    next unit, so 999,960 renders as $1M rather than $1000K.
    """
    value = _to_float(amount)
    if math.isnan(value):
        return "$0"
    if math.isinf(value):
        return _signed(f"${INFINITY_SYMBOL}", value)

    magnitude = abs(_to_decimal(value))

    index = 0
    for i, (size, _) in enumerate(_COMPACT_UNITS):
        if magnitude >= size:
            index = i

    scaled = _scale_to_tenths(magnitude, _COMPACT_UNITS[index][0])
    while scaled >= 1000 and index < len(_COMPACT_UNITS) - 1:
        index += 1
        scaled = _scale_to_tenths(magnitude, _COMPACT_UNITS[index][0])

    if scaled == scaled.to_integral_value():
        figure = str(int(scaled))
    else:
        figure = str(scaled)

    return _signed(f"${figure}{_COMPACT_UNITS[index][1]}", value)


def _scale_to_tenths(magnitude: Decimal, size: Decimal) -> Decimal:
    return _CONTEXT.divide(magnitude, size).quantize(_TENTHS, context=_CONTEXT)


def format_percentage(fraction: Any) -> str:
    """
    Format a fraction as a percentage with 2 decimals: 0.1234 -> 12.34%

    The scaled float is rounded half-up on its exact binary value, so a
    product that lands exactly on a tie (0.04125 x 100 == 4.125) rounds
    away from zero: 4.13%.
    """
    scaled = _to_float(fraction) * 100
    if math.isnan(scaled):
        return "0.00%"
    if math.isinf(scaled):
        return _signed(f"{INFINITY_SYMBOL}%", scaled)

    percent = Decimal(scaled).quantize(_CENTS, context=_CONTEXT)
    return f"{percent:.2f}%"


def format_number(value: Any) -> str:
    """Format with thousands grouping and up to 3 decimals: 1,234.568"""
    number = _to_float(value)
    if math.isnan(number):
        return "0"
    if math.isinf(number):
        return _signed(INFINITY_SYMBOL, number)

    rounded = _to_decimal(number).quantize(_THOUSANDTHS, context=_CONTEXT)
    text = f"{abs(rounded):,.3f}".rstrip("0").rstrip(".")
    return _signed(text, rounded)


def format_days(value: Any) -> str:
    """Format as whole-number days: 47 days"""
    days = _to_float(value)
    if math.isnan(days):
        return "0 days"
    if math.isinf(days):
        return _signed(f"{INFINITY_SYMBOL} days", days)
    return f"{round_half_up(days)} days"


def format_date(value: Any) -> str:
    """Format an ISO-8601 date or datetime as 'Oct 19, 2026'."""
    if isinstance(value, (date, datetime)):
        parsed = value
    else:
        try:
            parsed = datetime.fromisoformat(str(value).replace("Z", "+00:00"))
        except ValueError:
            return "Invalid Date"

    return f"{parsed:%b} {parsed.day}, {parsed.year}"
