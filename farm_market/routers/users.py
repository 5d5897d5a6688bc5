"""Own-profile management and public profiles."""

from fastapi import APIRouter, Depends

from farm_market.core.storage import KeyValueStore, get_store
from farm_market.identity import Caller, get_current_caller
from farm_market.modules.users import UserService
from farm_market.modules.users.schemas import (
    ProfileUpdate,
    PublicUserResponse,
    UserResponse,
)

router = APIRouter(prefix="/users", tags=["Users"])


def get_user_service(store: KeyValueStore = Depends(get_store)) -> UserService:
    """Provide a UserService instance via FastAPI dependency injection."""
    return UserService(store)


@router.get("/me", response_model=UserResponse)
async def get_me(
    service: UserService = Depends(get_user_service),
    caller: Caller = Depends(get_current_caller),
):
    return UserResponse(user=await service.get_own_profile(caller))


@router.put("/me", response_model=UserResponse)
async def update_me(
    patch: ProfileUpdate,
    service: UserService = Depends(get_user_service),
    caller: Caller = Depends(get_current_caller),
):
    """Update name, phone and location; other profile fields are not self-editable."""
    return UserResponse(user=await service.update_own_profile(caller, patch))


@router.get("/{user_id}", response_model=PublicUserResponse)
async def get_public_profile(
    user_id: str, service: UserService = Depends(get_user_service)
):
    """Redacted profile: no email or phone."""
    return PublicUserResponse(user=await service.get_public_profile(user_id))
