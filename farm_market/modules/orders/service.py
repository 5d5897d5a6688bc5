"""Order inquiries between buyers and suppliers."""

from __future__ import annotations

import logging
from typing import List

from farm_market.core.config import settings
from farm_market.core.exceptions import (
    InvalidStatusTransitionException,
    OwnershipRequiredException,
    ResourceNotFoundException,
    ValidationException,
)
from farm_market.core.storage import KeyValueStore
from farm_market.modules.listings.repository import ListingRepository
from farm_market.modules.notifications import NotificationService, NotificationType
from farm_market.modules.utils.records import (
    merge_patch,
    new_record_id,
    newest_first,
    utcnow,
)

from .models import Order, OrderStatus, can_transition
from .repository import OrderRepository
from .schemas import OrderCreate, OrderUpdate

logger = logging.getLogger(__name__)


class OrderService:
    def __init__(self, store: KeyValueStore, enforce_transitions: bool = None):
        self.orders = OrderRepository(store)
        self.listings = ListingRepository(store)
        self.notifications = NotificationService(store)
        if enforce_transitions is None:
            enforce_transitions = settings.enforce_order_transitions
        self.enforce_transitions = enforce_transitions

    async def list_for_user(self, user_id: str) -> List[Order]:
        """Orders where the user is either the buyer or the supplier."""
        orders = await self.orders.list_all()
        return newest_first(order for order in orders if order.is_party(user_id))

    async def create_order(self, caller, payload: OrderCreate) -> Order:
        if not payload.listing_id or not payload.quantity:
            raise ValidationException("Listing ID and quantity required")
        if payload.quantity < 0:
            raise ValidationException("Quantity must be positive", field="quantity")

        listing = await self.listings.get_listing(payload.listing_id)
        if listing is None:
            raise ResourceNotFoundException("Listing", payload.listing_id)

        order = Order(
            id=new_record_id("ord"),
            listing_id=listing.id,
            buyer_id=caller.id,
            buyer_name=caller.display_name,
            supplier_id=listing.supplier_id,
            crop=listing.crop,
            quantity=payload.quantity,
            unit=listing.unit,
            unit_price=listing.price_per_unit,
            total_amount=listing.price_per_unit * payload.quantity,
            status=OrderStatus.INQUIRY,
            message=payload.message or "",
        )
        await self.orders.save(order)
        logger.info(
            "Buyer %s raised order %s on listing %s", caller.id, order.id, listing.id
        )

        await self.notifications.notify(
            order.supplier_id,
            NotificationType.ORDER,
            "New Order Inquiry",
            f"{order.buyer_name} requested {order.quantity} {order.unit} of {order.crop}",
        )
        return order

    async def update_order(self, caller, order_id: str, patch: OrderUpdate) -> Order:
        order = await self.orders.get_order(order_id)
        if order is None:
            raise ResourceNotFoundException("Order", order_id)
        if not order.is_party(caller.id):
            logger.warning("User %s denied access to order %s", caller.id, order_id)
            raise OwnershipRequiredException("order")

        changes = patch.changes()
        requested = changes.get("status")
        if (
            requested is not None
            and self.enforce_transitions
            and not can_transition(order.status, requested)
        ):
            raise InvalidStatusTransitionException(order.status, requested)

        previous_status = order.status
        updated = merge_patch(order, patch).model_copy(update={"updated_at": utcnow()})
        await self.orders.save(updated)

        if requested is not None and requested != previous_status:
            logger.info(
                "Order %s moved %s -> %s by %s",
                order_id,
                previous_status,
                requested,
                caller.id,
            )
            await self.notifications.notify(
                order.counterparty(caller.id),
                NotificationType.ORDER,
                "Order Updated",
                f"Your {order.crop} order is now {requested}",
            )
        return updated
