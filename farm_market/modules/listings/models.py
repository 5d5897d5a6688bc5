"""Listing record stored under `listing:<id>`."""

from __future__ import annotations

from datetime import datetime
from enum import Enum
from typing import List

from pydantic import Field

from farm_market.modules.utils.records import CamelModel, utcnow


class ListingStatus(str, Enum):
    PUBLISHED = "published"
    PENDING = "pending"
    CLOSED = "closed"


class Listing(CamelModel):
    id: str
    supplier_id: str
    # Snapshot of the supplier profile at creation time; not refreshed afterwards.
    supplier_name: str = ""
    supplier_rating: float = 0.0
    supplier_verified: bool = False
    supplier_location: str = ""
    crop: str
    grade: str = "Standard"
    quantity: int
    unit: str = "kg"
    price_per_unit: float
    mandi: str
    packaging: str = ""
    harvest_date: datetime = Field(default_factory=utcnow)
    images: List[str] = Field(default_factory=list)
    certification: str = ""
    description: str = ""
    status: ListingStatus = ListingStatus.PUBLISHED
    created_at: datetime = Field(default_factory=utcnow)
