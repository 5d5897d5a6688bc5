"""Admin analytics, recomputed from full scans on every call."""

from __future__ import annotations

import logging
from collections import Counter

from farm_market.core.config import settings
from farm_market.core.storage import KeyValueStore
from farm_market.modules.listings.models import ListingStatus
from farm_market.modules.listings.repository import ListingRepository
from farm_market.modules.messaging.repository import MessageRepository
from farm_market.modules.orders.repository import OrderRepository
from farm_market.modules.users.models import UserRole
from farm_market.modules.users.repository import UserRepository
from farm_market.modules.utils.records import newest_first

from .schemas import Analytics

logger = logging.getLogger(__name__)


class AnalyticsService:
    def __init__(self, store: KeyValueStore, recent_orders_limit: int = None):
        self.users = UserRepository(store)
        self.listings = ListingRepository(store)
        self.orders = OrderRepository(store)
        self.messages = MessageRepository(store)
        self.recent_orders_limit = recent_orders_limit or settings.recent_orders_limit

    async def compute(self) -> Analytics:
        users = await self.users.list_all()
        listings = await self.listings.list_all()
        orders = await self.orders.list_all()
        messages = await self.messages.list_all()

        roles = Counter(user.role for user in users)
        analytics = Analytics(
            total_users=len(users),
            total_suppliers=roles[UserRole.SUPPLIER.value],
            total_buyers=roles[UserRole.BUYER.value],
            total_admins=roles[UserRole.ADMIN.value],
            total_listings=len(listings),
            active_listings=sum(
                1 for listing in listings if listing.status == ListingStatus.PUBLISHED.value
            ),
            total_orders=len(orders),
            total_revenue=sum(order.total_amount for order in orders),
            total_messages=len(messages),
            orders_by_status=dict(Counter(order.status for order in orders)),
            recent_orders=newest_first(orders)[: self.recent_orders_limit],
        )
        logger.debug(
            "Analytics computed over %d users, %d listings, %d orders",
            len(users),
            len(listings),
            len(orders),
        )
        return analytics
