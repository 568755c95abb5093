"""Pydantic schemas for the backend KPI payload"""

import math
from typing import Annotated, Any, List, Optional

from pydantic import BaseModel, BeforeValidator, ConfigDict, Field, field_validator

from portfolio_insights.domain.models import KPISnapshot, TrendPoint, TrendTooltip


def _coerce_number(value: Any) -> float:
    """Malformed numerics become NaN instead of failing validation"""
    try:
        return float(value)
    except (TypeError, ValueError):
        return math.nan


def _coerce_label(value: Any) -> str:
    return "" if value is None else str(value)


LenientFloat = Annotated[float, BeforeValidator(_coerce_number)]
LenientLabel = Annotated[str, BeforeValidator(_coerce_label)]


class TrendTooltipSchema(BaseModel):
    label: LenientLabel = ""
    amount: LenientFloat = math.nan


class TrendItemSchema(BaseModel):
    """Single point of a backend trend series"""

    model_config = ConfigDict(extra="ignore")

    label: LenientLabel = ""
    amount: LenientFloat = math.nan
    tooltip: Optional[TrendTooltipSchema] = None

    def to_point(self) -> TrendPoint:
        tooltip = None
        if self.tooltip is not None:
            tooltip = TrendTooltip(label=self.tooltip.label, amount=self.tooltip.amount)
        return TrendPoint(label=self.label, amount=self.amount, tooltip=tooltip)


class FinancialsKPIPayload(BaseModel):
    """Response body of the backend financials KPI endpoint"""

    model_config = ConfigDict(extra="ignore")

    total_portfolio_value: LenientFloat = Field(default=math.nan, description="Portfolio value in USD")
    collection_rate: LenientFloat = Field(default=math.nan, description="Collected share of amounts owed (0-1)")
    liquidation_rate: LenientFloat = Field(default=math.nan, description="Recovered share of defaulted assets (0-1)")
    bad_debt_write_off_rate: LenientFloat = Field(default=math.nan, description="Written-off share of the portfolio (0-1)")
    days_sales_outstanding: LenientFloat = Field(default=math.nan, description="Average days to collect")
    portfolio_value_trend: List[TrendItemSchema] = Field(default_factory=list)
    collection_rate_trend: List[TrendItemSchema] = Field(default_factory=list)
    liquidation_rate_trend: List[TrendItemSchema] = Field(default_factory=list)

    @field_validator(
        "portfolio_value_trend",
        "collection_rate_trend",
        "liquidation_rate_trend",
        mode="before",
    )
    @classmethod
    def coerce_series(cls, value: Any) -> Any:
        return [] if value is None else value

    def to_snapshot(self) -> KPISnapshot:
        """Convert to the immutable domain snapshot, preserving series order"""
        return KPISnapshot(
            total_portfolio_value=self.total_portfolio_value,
            collection_rate=self.collection_rate,
            liquidation_rate=self.liquidation_rate,
            bad_debt_write_off_rate=self.bad_debt_write_off_rate,
            days_sales_outstanding=self.days_sales_outstanding,
            portfolio_value_trend=tuple(item.to_point() for item in self.portfolio_value_trend),
            collection_rate_trend=tuple(item.to_point() for item in self.collection_rate_trend),
            liquidation_rate_trend=tuple(item.to_point() for item in self.liquidation_rate_trend),
        )
