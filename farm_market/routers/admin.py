"""Admin-only moderation, analytics and reference-data seeding."""

from fastapi import APIRouter, Depends, Request
from pydantic import ValidationError

from farm_market.core.exceptions import ValidationException
from farm_market.core.storage import KeyValueStore, get_store
from farm_market.identity import require_admin
from farm_market.modules.admin import AnalyticsService
from farm_market.modules.admin.schemas import AnalyticsResponse
from farm_market.modules.listings import ListingService
from farm_market.modules.listings.schemas import ListingListResponse
from farm_market.modules.mandi_rates import MandiRateService
from farm_market.modules.mandi_rates.schemas import SeedResponse
from farm_market.modules.users import UserService
from farm_market.modules.users.schemas import (
    AdminUserUpdate,
    UserListResponse,
    UserResponse,
)

router = APIRouter(
    prefix="/admin",
    tags=["Admin"],
    dependencies=[Depends(require_admin)],
)


@router.get("/users", response_model=UserListResponse)
async def list_users(store: KeyValueStore = Depends(get_store)):
    return UserListResponse(users=await UserService(store).list_users())


async def _read_admin_user_update(request: Request) -> AdminUserUpdate:
    # Parsed here, not as a body parameter, so non-admins get 403 before the body is read.
    try:
        body = await request.json()
    except ValueError:
        raise ValidationException("Malformed JSON body")
    try:
        return AdminUserUpdate.model_validate(body)
    except ValidationError as exc:
        first = exc.errors()[0]
        field = ".".join(str(loc) for loc in first["loc"]) or None
        raise ValidationException(first["msg"], field=field)


@router.patch("/users/{user_id}", response_model=UserResponse)
async def update_user(
    user_id: str,
    request: Request,
    store: KeyValueStore = Depends(get_store),
):
    """Verify, re-role or correct a user profile."""
    patch = await _read_admin_user_update(request)
    return UserResponse(user=await UserService(store).admin_update(user_id, patch))


@router.get("/listings", response_model=ListingListResponse)
async def list_all_listings(store: KeyValueStore = Depends(get_store)):
    """Every listing regardless of status, for moderation."""
    return ListingListResponse(listings=await ListingService(store).list_all())


@router.get("/analytics", response_model=AnalyticsResponse)
async def analytics(store: KeyValueStore = Depends(get_store)):
    return AnalyticsResponse(analytics=await AnalyticsService(store).compute())


@router.post("/seed-mandi-rates", response_model=SeedResponse)
async def seed_mandi_rates(store: KeyValueStore = Depends(get_store)):
    count = await MandiRateService(store).seed()
    return SeedResponse(count=count)
