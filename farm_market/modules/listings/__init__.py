"""Listings domain package."""

from .models import Listing, ListingStatus
from .service import ListingService

__all__ = ["Listing", "ListingStatus", "ListingService"]
