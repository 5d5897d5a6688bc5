"""Application services for the users domain."""

from __future__ import annotations

import logging
from typing import Any, Dict, List

from farm_market.core.exceptions import ResourceNotFoundException
from farm_market.core.storage import KeyValueStore
from farm_market.modules.utils.records import merge_patch

from .models import User
from .repository import UserRepository
from .schemas import AdminUserUpdate, ProfileUpdate, PublicUser, SignupRequest

logger = logging.getLogger(__name__)


class UserService:
    """Encapsulates profile logic shared across the users, auth and admin routers."""

    def __init__(self, store: KeyValueStore):
        self.users = UserRepository(store)

    @staticmethod
    def signup_metadata(payload: SignupRequest) -> Dict[str, Any]:
        """Profile fields mirrored into the provider account metadata."""
        return {
            "name": payload.name,
            "role": payload.role,
            "phone": payload.phone,
            "location": payload.location,
        }

    async def create_profile(self, identity, payload: SignupRequest) -> User:
        """Store the marketplace profile for a freshly created provider account."""
        user = User(
            id=identity.id,
            email=payload.email,
            name=payload.name,
            role=payload.role,
            phone=payload.phone,
            location=payload.location,
            verified=False,
            rating=0.0,
        )
        await self.users.save(user)
        logger.info("Registered %s user %s", user.role, user.id)
        return user

    async def get_own_profile(self, caller) -> User:
        """Stored profile, or a bare `{id, email}` profile when none was created yet."""
        if caller.profile is not None:
            return caller.profile
        return User(id=caller.identity.id, email=caller.identity.email)

    async def update_own_profile(self, caller, patch: ProfileUpdate) -> User:
        current = await self.get_own_profile(caller)
        updated = merge_patch(current, patch)
        await self.users.save(updated)
        return updated

    async def get_public_profile(self, user_id: str) -> PublicUser:
        user = await self.users.get_user(user_id)
        if user is None:
            raise ResourceNotFoundException("User", user_id)
        return PublicUser.from_user(user)

    async def list_users(self) -> List[User]:
        return await self.users.list_all()

    async def admin_update(self, user_id: str, patch: AdminUserUpdate) -> User:
        user = await self.users.get_user(user_id)
        if user is None:
            raise ResourceNotFoundException("User", user_id)
        updated = merge_patch(user, patch)
        await self.users.save(updated)
        logger.info("Admin updated user %s: %s", user_id, sorted(patch.changes()))
        return updated
