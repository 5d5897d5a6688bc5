"""Request/response schemas for listings."""

from __future__ import annotations

from datetime import datetime
from typing import List, Optional

from pydantic import Field, field_validator

from farm_market.modules.utils.records import CamelModel, PatchModel

from .models import Listing, ListingStatus


class ListingCreate(CamelModel):
    # Required fields are optional here so a missing one surfaces as the domain's
    # "required fields missing" error rather than a schema error.
    crop: Optional[str] = None
    quantity: Optional[int] = None
    price_per_unit: Optional[float] = None
    mandi: Optional[str] = None
    grade: Optional[str] = None
    unit: Optional[str] = None
    packaging: Optional[str] = None
    harvest_date: Optional[datetime] = None
    images: List[str] = Field(default_factory=list)
    certification: Optional[str] = None
    description: Optional[str] = None


class ListingUpdate(PatchModel):
    """Owner-editable fields; supplier identity is not patchable."""

    crop: Optional[str] = None
    grade: Optional[str] = None
    quantity: Optional[int] = Field(default=None, gt=0)
    unit: Optional[str] = None
    price_per_unit: Optional[float] = Field(default=None, gt=0)
    mandi: Optional[str] = None
    packaging: Optional[str] = None
    harvest_date: Optional[datetime] = None
    images: Optional[List[str]] = None
    certification: Optional[str] = None
    description: Optional[str] = None
    status: Optional[ListingStatus] = None

    @field_validator("crop", "mandi")
    @classmethod
    def _not_blank(cls, value: Optional[str]) -> Optional[str]:
        if value is not None and not value.strip():
            raise ValueError("must not be blank")
        return value


class ListingFilters(CamelModel):
    crop: Optional[str] = None
    mandi: Optional[str] = None
    grade: Optional[str] = None
    status: str = ListingStatus.PUBLISHED.value


class ListingResponse(CamelModel):
    listing: Listing


class ListingListResponse(CamelModel):
    listings: List[Listing]
