"""Orders domain package."""

from .models import ORDER_TRANSITIONS, Order, OrderStatus, can_transition
from .service import OrderService

__all__ = ["ORDER_TRANSITIONS", "Order", "OrderStatus", "OrderService", "can_transition"]
