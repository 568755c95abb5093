"""Unit tests for bad-debt risk tiering"""

import pytest
from portfolio_insights.domain.risk import get_portfolio_risk_level


@pytest.mark.parametrize(
    "bad_debt_rate, level",
    [
        (0.0, "low"),
        (0.05, "low"),
        (0.051, "medium"),
        (0.10, "medium"),
        (0.11, "high"),
        (0.15, "high"),
        (0.16, "critical"),
        (0.9, "critical"),
    ],
)
def test_risk_tier_boundaries_are_exclusive(bad_debt_rate, level):
    assert get_portfolio_risk_level(bad_debt_rate).level == level


def test_risk_tiers_carry_fixed_message_and_color():
    critical = get_portfolio_risk_level(0.2)
    assert critical.message == "Critical risk - immediate intervention required"
    assert critical.color == "#DC2626"

    high = get_portfolio_risk_level(0.12)
    assert high.message == "High risk - enhanced monitoring needed"
    assert high.color == "#EF4444"

    medium = get_portfolio_risk_level(0.07)
    assert medium.message == "Medium risk - standard monitoring"
    assert medium.color == "#F59E0B"

    low = get_portfolio_risk_level(0.01)
    assert low.message == "Low risk - portfolio performing well"
    assert low.color == "#10B981"
