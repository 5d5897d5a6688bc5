"""Platform analytics returned to admins."""

from __future__ import annotations

from typing import Dict, List

from farm_market.modules.orders.models import Order
from farm_market.modules.utils.records import CamelModel


class Analytics(CamelModel):
    total_users: int
    total_suppliers: int
    total_buyers: int
    total_admins: int
    total_listings: int
    active_listings: int
    total_orders: int
    total_revenue: float
    total_messages: int
    orders_by_status: Dict[str, int]
    recent_orders: List[Order]


class AnalyticsResponse(CamelModel):
    analytics: Analytics
