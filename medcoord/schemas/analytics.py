# medcoord/schemas/analytics.py
from .common import CamelModel


class AnalyticsSummary(CamelModel):
    total_resources: int
    critical_shortages: int
    pending_requests: int
    active_alerts: int


class StockTrendPoint(CamelModel):
    date: str
    city: str
    quantity: int
    resource_name: str


class DistributionBreakdown(CamelModel):
    city: str
    resource_type: str
    total_quantity: int
    critical_count: int
