from __future__ import annotations

from typing import List, Optional

from farm_market.modules.utils.records import CamelModel, PatchModel

from .models import Dispute, DisputeStatus


class DisputeCreate(CamelModel):
    order_id: Optional[str] = None
    reason: Optional[str] = None
    description: Optional[str] = None


class DisputeUpdate(PatchModel):
    """Admin decision on a dispute."""

    status: Optional[DisputeStatus] = None
    resolution: Optional[str] = None


class DisputeResponse(CamelModel):
    dispute: Dispute


class DisputeListResponse(CamelModel):
    disputes: List[Dispute]
