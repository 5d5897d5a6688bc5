"""Request/response schemas for profiles and signup."""

from __future__ import annotations

from datetime import datetime
from typing import List, Optional

from pydantic import Field

from farm_market.modules.utils.records import CamelModel, PatchModel

from .models import User, UserRole


class SignupRequest(CamelModel):
    email: str = Field(min_length=3)
    password: str = Field(min_length=6)
    role: UserRole
    name: Optional[str] = None
    phone: Optional[str] = None
    location: Optional[str] = None


class ProfileUpdate(PatchModel):
    """Fields a user may change on their own profile."""

    name: Optional[str] = None
    phone: Optional[str] = None
    location: Optional[str] = None


class AdminUserUpdate(ProfileUpdate):
    """Fields an admin may change on any profile."""

    role: Optional[UserRole] = None
    verified: Optional[bool] = None


class PublicUser(CamelModel):
    """Redacted profile shown to anyone: no email or phone."""

    id: str
    name: Optional[str] = None
    role: Optional[UserRole] = None
    location: Optional[str] = None
    verified: bool = False
    rating: float = 0.0
    created_at: Optional[datetime] = None

    @classmethod
    def from_user(cls, user: User) -> "PublicUser":
        return cls(
            id=user.id,
            name=user.name,
            role=user.role,
            location=user.location,
            verified=user.verified,
            rating=user.rating,
            created_at=user.created_at,
        )


class UserResponse(CamelModel):
    user: User


class PublicUserResponse(CamelModel):
    user: PublicUser


class UserListResponse(CamelModel):
    users: List[User]


class SignupResponse(CamelModel):
    user: User
