"""Watchlist domain package."""

from .models import WatchlistItem, WatchlistType
from .service import WatchlistService

__all__ = ["WatchlistItem", "WatchlistType", "WatchlistService"]
