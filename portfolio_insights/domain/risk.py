"""Bad-debt risk tiering"""

from portfolio_insights.domain.models import RiskAssessment
from portfolio_insights.domain.thresholds import BASELINE_RISK, RISK_TIERS


def get_portfolio_risk_level(bad_debt_rate: float) -> RiskAssessment:
    """
    Map the bad-debt write-off rate to a risk tier.

    Tiers (exclusive lower bounds, shared with the high-bad-debt alert):
    - > 15%: critical
    - > 10%: high
    - >  5%: medium
    - otherwise: low
    """
    for bound, level, message, color in RISK_TIERS:
        if bad_debt_rate > bound:
            return RiskAssessment(level=level, message=message, color=color)

    level, message, color = BASELINE_RISK
    return RiskAssessment(level=level, message=message, color=color)
