"""Government reference rate per crop and mandi, stored under `mandi-rate:<id>`."""

from __future__ import annotations

from farm_market.modules.utils.records import CamelModel


class MandiRate(CamelModel):
    id: str
    crop: str
    mandi: str
    state: str
    govt_rate: float
    # Publication day as an ISO date string (`2025-10-19`); filtered by equality.
    date: str
    # Day-over-day change, percent.
    change: float = 0.0
