"""Dispute record stored under `dispute:<id>`."""

from __future__ import annotations

from datetime import datetime
from enum import Enum
from typing import Optional

from pydantic import Field

from farm_market.modules.utils.records import CamelModel, utcnow


class DisputeStatus(str, Enum):
    OPEN = "open"
    RESOLVED = "resolved"
    REJECTED = "rejected"


class Dispute(CamelModel):
    id: str
    order_id: str
    raised_by: str
    raised_by_name: str = ""
    reason: str
    description: str = ""
    status: DisputeStatus = DisputeStatus.OPEN
    resolution: Optional[str] = None
    created_at: datetime = Field(default_factory=utcnow)
    updated_at: datetime = Field(default_factory=utcnow)
