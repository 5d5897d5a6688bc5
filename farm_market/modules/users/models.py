"""User profile record stored under `user:<id>`."""

from __future__ import annotations

from datetime import datetime
from enum import Enum
from typing import Optional

from pydantic import Field

from farm_market.modules.utils.records import CamelModel, utcnow


class UserRole(str, Enum):
    SUPPLIER = "supplier"
    BUYER = "buyer"
    ADMIN = "admin"


class User(CamelModel):
    id: str
    email: Optional[str] = None
    name: Optional[str] = None
    role: Optional[UserRole] = None
    phone: Optional[str] = None
    location: Optional[str] = None
    verified: bool = False
    # Mean of every review targeting this user; recomputed on each review submission.
    rating: float = 0.0
    created_at: datetime = Field(default_factory=utcnow)

    @property
    def is_admin(self) -> bool:
        return self.role == UserRole.ADMIN.value

    @property
    def display_name(self) -> str:
        return self.name or self.email or self.id
