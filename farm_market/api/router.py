"""Centralized API router registration.

Groups:
- Public catalogue: health, listings, suppliers, mandi rates, public profiles, reviews.
- Account: signup, own profile, watchlist, notifications.
- Trading: orders, messages, disputes.
- Admin: users, listings, analytics, mandi-rate seeding.
"""

from fastapi import APIRouter

from farm_market.core.config import settings
from farm_market.routers import (
    admin,
    auth,
    disputes,
    health,
    listings,
    mandi_rates,
    messages,
    notifications,
    orders,
    reviews,
    users,
    watchlist,
)

api_router = APIRouter(prefix=settings.api_prefix)

api_router.include_router(health.router)
api_router.include_router(auth.router)
api_router.include_router(listings.router)
api_router.include_router(listings.suppliers_router)
api_router.include_router(orders.router)
api_router.include_router(mandi_rates.router)
api_router.include_router(users.router)
api_router.include_router(messages.router)
api_router.include_router(reviews.router)
api_router.include_router(watchlist.router)
api_router.include_router(notifications.router)
api_router.include_router(disputes.router)
api_router.include_router(admin.router)
