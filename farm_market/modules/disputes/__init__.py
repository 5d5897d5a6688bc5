"""Disputes domain package."""

from .models import Dispute, DisputeStatus
from .service import DisputeService

__all__ = ["Dispute", "DisputeStatus", "DisputeService"]
