"""Pytest fixtures for testing"""

import pytest
from datetime import datetime, timezone
from typing import Callable, Tuple

from portfolio_insights.domain.models import KPISnapshot, TrendPoint


def series(*points: Tuple[str, float]) -> Tuple[TrendPoint, ...]:
    """Build a trend series from (label, amount) pairs"""
    return tuple(TrendPoint(label=label, amount=amount) for label, amount in points)


@pytest.fixture
def fixed_now() -> datetime:
    return datetime(2026, 10, 19, 12, 30, 45, 123000, tzinfo=timezone.utc)


@pytest.fixture
def make_snapshot() -> Callable[..., KPISnapshot]:
    """Factory for snapshots; defaults describe a healthy portfolio"""

    def _make(**overrides) -> KPISnapshot:
        fields = dict(
            total_portfolio_value=1_250_000,
            collection_rate=0.95,
            liquidation_rate=0.85,
            bad_debt_write_off_rate=0.03,
            days_sales_outstanding=28,
            portfolio_value_trend=series(("Jan", 1_000_000), ("Feb", 1_100_000), ("Mar", 1_250_000)),
            collection_rate_trend=series(("Jan", 0.90), ("Feb", 0.92), ("Mar", 0.95)),
            liquidation_rate_trend=series(("Jan", 0.80), ("Feb", 0.82), ("Mar", 0.85)),
        )
        fields.update(overrides)
        return KPISnapshot(**fields)

    return _make


@pytest.fixture
def healthy_snapshot(make_snapshot) -> KPISnapshot:
    return make_snapshot()


@pytest.fixture
def distressed_snapshot(make_snapshot) -> KPISnapshot:
    """Breaches every alert rule"""
    return make_snapshot(
        total_portfolio_value=780_000,
        collection_rate=0.70,
        liquidation_rate=0.50,
        bad_debt_write_off_rate=0.20,
        days_sales_outstanding=65,
        portfolio_value_trend=series(("Jan", 1_000_000), ("Feb", 900_000), ("Mar", 780_000)),
        collection_rate_trend=series(("Jan", 0.78), ("Feb", 0.74), ("Mar", 0.70)),
        liquidation_rate_trend=series(("Jan", 0.55), ("Feb", 0.52), ("Mar", 0.50)),
    )


@pytest.fixture
def backend_payload() -> dict:
    """Raw snake_case body of the backend financials KPI endpoint"""
    return {
        "total_portfolio_value": 1_250_000,
        "collection_rate": 0.95,
        "liquidation_rate": 0.85,
        "bad_debt_write_off_rate": 0.03,
        "days_sales_outstanding": 28,
        "portfolio_value_trend": [
            {"label": "Jan", "amount": 1_000_000, "tooltip": None},
            {"label": "Feb", "amount": 1_100_000, "tooltip": {"label": "February", "amount": 1_100_000}},
            {"label": "Mar", "amount": 1_250_000, "tooltip": None},
        ],
        "collection_rate_trend": [
            {"label": "Jan", "amount": 0.90, "tooltip": None},
            {"label": "Feb", "amount": 0.92, "tooltip": None},
            {"label": "Mar", "amount": 0.95, "tooltip": None},
        ],
        "liquidation_rate_trend": [
            {"label": "Jan", "amount": 0.80, "tooltip": None},
            {"label": "Feb", "amount": 0.82, "tooltip": None},
            {"label": "Mar", "amount": 0.85, "tooltip": None},
        ],
    }
