"""Data-access helpers for user profiles."""

from __future__ import annotations

from typing import List, Optional

from farm_market.modules.utils.repository import RecordRepository

from .models import User


class UserRepository(RecordRepository[User]):
    prefix = "user"
    model = User

    async def get_user(self, user_id: str) -> Optional[User]:
        return await self.get(user_id)

    async def save(self, user: User) -> User:
        return await self.put(user, user.id)

    async def list_all(self) -> List[User]:
        return await self.scan()
