"""Rule-based recommendations for portfolio managers"""

from typing import List

from portfolio_insights.domain.models import KPISnapshot, Recommendation
from portfolio_insights.domain.thresholds import (
    COLLECTION_CYCLE_DSO_DAYS,
    COLLECTION_STRATEGY_RATE,
    CREDIT_REVIEW_BAD_DEBT_RATE,
    EXCELLENT_BAD_DEBT_RATE,
    EXCELLENT_COLLECTION_RATE,
    LIQUIDATION_PROCESS_RATE,
)


def get_recommendations(snapshot: KPISnapshot) -> List[Recommendation]:
    """
    Suggest actions for the snapshot.

    Rules are independent and non-exclusive; several may fire at once.
    """
    recommendations: List[Recommendation] = []

    if snapshot.bad_debt_write_off_rate > CREDIT_REVIEW_BAD_DEBT_RATE:
        recommendations.append(
            Recommendation(
                title="Enhance Credit Assessment",
                description="Implement stricter credit scoring and risk assessment protocols",
                priority="high",
                action_required=True,
                impact="high",
            )
        )

    if snapshot.collection_rate < COLLECTION_STRATEGY_RATE:
        recommendations.append(
            Recommendation(
                title="Optimize Collection Strategy",
                description="Review collection processes and implement automated follow-up systems",
                priority="high",
                action_required=True,
                impact="high",
            )
        )

    if snapshot.days_sales_outstanding > COLLECTION_CYCLE_DSO_DAYS:
        recommendations.append(
            Recommendation(
                title="Accelerate Collection Cycle",
                description="Implement early intervention strategies and payment incentives",
                priority="medium",
                action_required=True,
                impact="medium",
            )
        )

    if snapshot.liquidation_rate < LIQUIDATION_PROCESS_RATE:
        recommendations.append(
            Recommendation(
                title="Improve Liquidation Process",
                description="Review asset valuation and liquidation channels for efficiency",
                priority="medium",
                action_required=True,
                impact="medium",
            )
        )

    if (
        snapshot.collection_rate > EXCELLENT_COLLECTION_RATE
        and snapshot.bad_debt_write_off_rate < EXCELLENT_BAD_DEBT_RATE
    ):
        recommendations.append(
            Recommendation(
                title="Maintain Excellence",
                description="Continue current practices and consider scaling successful strategies",
                priority="low",
                action_required=False,
                impact="low",
            )
        )

    return recommendations
