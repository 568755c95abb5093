"""Unit tests for trend analysis"""

import pytest
from portfolio_insights.domain.models import TrendPoint
from portfolio_insights.domain.trends import analyze_trends, calculate_trend


def _series(*amounts):
    return tuple(TrendPoint(label=f"P{i}", amount=amount) for i, amount in enumerate(amounts))


def test_calculate_trend_up():
    """1000 -> 1200 is a 20% rise"""
    result = calculate_trend(_series(1000, 1200))

    assert result.change == pytest.approx(20)
    assert result.trend == "up"


def test_calculate_trend_down_reports_absolute_change():
    result = calculate_trend(_series(1000, 875))

    assert result.change == pytest.approx(12.5)
    assert result.trend == "down"


def test_calculate_trend_uses_last_two_points_only():
    result = calculate_trend(_series(10, 5000, 100, 110))

    assert result.change == pytest.approx(10)
    assert result.trend == "up"


def test_calculate_trend_flat_is_neutral():
    result = calculate_trend(_series(500, 500))

    assert result.change == 0
    assert result.trend == "neutral"


@pytest.mark.parametrize("points", [(), (1000,)])
def test_calculate_trend_short_series_is_neutral(points):
    result = calculate_trend(_series(*points))

    assert result.change == 0
    assert result.trend == "neutral"


def test_calculate_trend_zero_previous_is_neutral():
    """A move away from zero cannot be expressed as a percentage"""
    result = calculate_trend(_series(0, 2500))

    assert result.change == 0
    assert result.trend == "neutral"


def test_calculate_trend_is_pure():
    data = _series(900, 1000, 750)

    first = calculate_trend(data)
    second = calculate_trend(data)

    assert first == second
    assert data == _series(900, 1000, 750)


def test_analyze_trends_healthy(healthy_snapshot):
    analysis = analyze_trends(healthy_snapshot)

    assert analysis.portfolio_trend.trend == "up"
    assert analysis.portfolio_trend.direction == "increasing"
    assert analysis.portfolio_trend.change == pytest.approx(150_000 / 1_100_000 * 100)

    assert analysis.collection_performance.current == 0.95
    assert analysis.collection_performance.trend == "up"
    assert analysis.liquidation_efficiency.current == 0.85


def test_analyze_trends_directions(distressed_snapshot, make_snapshot):
    assert analyze_trends(distressed_snapshot).portfolio_trend.direction == "decreasing"

    flat = make_snapshot(portfolio_value_trend=_series(1000))
    assert analyze_trends(flat).portfolio_trend.direction == "stable"
