"""Domain models - pure Python dataclasses representing portfolio entities"""

from dataclasses import asdict, dataclass, field
from typing import Any, Dict, List, Optional, Tuple


@dataclass(frozen=True)
class TrendTooltip:
    """Tooltip payload attached to a trend point by the backend"""

    label: str
    amount: float


@dataclass(frozen=True)
class TrendPoint:
    """Single observation in a chronological metric series"""

    label: str
    amount: float
    tooltip: Optional[TrendTooltip] = None


TrendSeries = Tuple[TrendPoint, ...]


@dataclass(frozen=True)
class KPISnapshot:
    """Raw collections KPIs as delivered by the backend"""

    total_portfolio_value: float
    collection_rate: float
    liquidation_rate: float
    bad_debt_write_off_rate: float
    days_sales_outstanding: float
    portfolio_value_trend: TrendSeries = ()
    collection_rate_trend: TrendSeries = ()
    liquidation_rate_trend: TrendSeries = ()


@dataclass
class DerivedStats:
    """Snapshot KPIs plus the metrics derived from them"""

    total_portfolio_value: float
    collection_rate: float
    liquidation_rate: float
    bad_debt_write_off_rate: float
    days_sales_outstanding: float
    net_collection_rate: float
    portfolio_health: float
    performance_score: float


@dataclass
class TrendResult:
    """Period-over-period movement of a single series"""

    change: float
    trend: str  # "up", "down" or "neutral"


@dataclass
class PortfolioTrend:
    change: float
    trend: str
    direction: str  # "increasing", "decreasing" or "stable"


@dataclass
class MetricTrend:
    current: float
    change: float
    trend: str


@dataclass
class TrendAnalysis:
    """Trend movement across all three snapshot series"""

    portfolio_trend: PortfolioTrend
    collection_performance: MetricTrend
    liquidation_efficiency: MetricTrend


@dataclass
class Alert:
    """Threshold breach raised against a snapshot"""

    id: str
    type: str  # "critical", "warning" or "info"
    title: str
    message: str
    value: float
    threshold: float
    timestamp: str
    action_required: bool


@dataclass
class PortfolioHealth:
    """Target-normalized health score with letter grade"""

    score: int
    grade: str  # "A" through "F"
    description: str


@dataclass
class RiskAssessment:
    level: str  # "low", "medium", "high" or "critical"
    message: str
    color: str


@dataclass
class Recommendation:
    """Advisory action suggested by a snapshot"""

    title: str
    description: str
    priority: str  # "low", "medium" or "high"
    action_required: bool
    impact: str


@dataclass
class PortfolioChartPoint:
    month: str
    value: float
    formatted_value: str


@dataclass
class RateChartPoint:
    month: str
    rate: float
    formatted_rate: str


@dataclass
class PerformanceMetric:
    """Single KPI row compared against its target"""

    name: str
    value: float
    target: float
    status: str
    formatted_value: str


@dataclass
class ChartData:
    """Chart-ready series and performance rows"""

    portfolio_trend: List[PortfolioChartPoint]
    collection_trend: List[RateChartPoint]
    liquidation_trend: List[RateChartPoint]
    performance_metrics: List[PerformanceMetric]


@dataclass
class SummaryMetrics:
    """Display strings for the headline KPIs"""

    portfolio_value: str
    collection_rate: str
    liquidation_rate: str
    bad_debt_rate: str
    days_outstanding: str
    net_performance: str
    health_score: str
    risk_level: str


@dataclass
class DashboardSummary:
    portfolio_value: float
    collection_rate: float
    liquidation_rate: float
    bad_debt_rate: float
    days_outstanding: float
    performance_score: float
    portfolio_health: float
    alert_count: int
    has_critical_alerts: bool
    trends: TrendAnalysis
    risk_level: RiskAssessment


@dataclass
class FinancialsReport:
    """Everything the presentation layer renders for one snapshot"""

    stats: DerivedStats
    summary_metrics: SummaryMetrics
    chart_data: ChartData
    trend_analysis: TrendAnalysis
    portfolio_health: PortfolioHealth
    risk_assessment: RiskAssessment
    dashboard_summary: DashboardSummary
    alerts: List[Alert] = field(default_factory=list)
    critical_alerts: List[Alert] = field(default_factory=list)
    warning_alerts: List[Alert] = field(default_factory=list)
    has_critical_alerts: bool = False
    recommendations: List[Recommendation] = field(default_factory=list)

    def as_dict(self) -> Dict[str, Any]:
        return asdict(self)
