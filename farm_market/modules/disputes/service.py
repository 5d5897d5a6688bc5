"""Order disputes: raised by any party, decided by admins."""

from __future__ import annotations

import logging
from typing import List

from farm_market.core.exceptions import ResourceNotFoundException, ValidationException
from farm_market.core.storage import KeyValueStore
from farm_market.modules.notifications import NotificationService, NotificationType
from farm_market.modules.utils.records import (
    merge_patch,
    new_record_id,
    newest_first,
    utcnow,
)

from .models import Dispute
from .repository import DisputeRepository
from .schemas import DisputeCreate, DisputeUpdate

logger = logging.getLogger(__name__)


class DisputeService:
    def __init__(self, store: KeyValueStore):
        self.disputes = DisputeRepository(store)
        self.notifications = NotificationService(store)

    async def create_dispute(self, caller, payload: DisputeCreate) -> Dispute:
        reason = (payload.reason or "").strip()
        if not payload.order_id or not reason:
            raise ValidationException("Order ID and reason required")

        dispute = Dispute(
            id=new_record_id("dispute"),
            order_id=payload.order_id,
            raised_by=caller.id,
            raised_by_name=caller.display_name,
            reason=reason,
            description=payload.description or "",
        )
        await self.disputes.save(dispute)
        logger.info("User %s raised dispute %s on order %s", caller.id, dispute.id, dispute.order_id)
        return dispute

    async def list_disputes(self, caller) -> List[Dispute]:
        """Admins see every dispute; everyone else only the ones they raised."""
        disputes = await self.disputes.list_all()
        if not caller.is_admin:
            disputes = [d for d in disputes if d.raised_by == caller.id]
        return newest_first(disputes)

    async def update_dispute(self, admin, dispute_id: str, patch: DisputeUpdate) -> Dispute:
        dispute = await self.disputes.get_dispute(dispute_id)
        if dispute is None:
            raise ResourceNotFoundException("Dispute", dispute_id)

        updated = merge_patch(dispute, patch).model_copy(update={"updated_at": utcnow()})
        await self.disputes.save(updated)
        logger.info("Admin %s set dispute %s to %s", admin.id, dispute_id, updated.status)

        await self.notifications.notify(
            updated.raised_by,
            NotificationType.ALERT,
            "Dispute Updated",
            f"Your dispute on order {updated.order_id} is now {updated.status}",
        )
        return updated
