"""Signup router; login and token refresh stay with the hosted identity provider."""

from fastapi import APIRouter, Depends, Request
from starlette.concurrency import run_in_threadpool

from farm_market.core.config import settings
from farm_market.core.middleware.rate_limit import limiter
from farm_market.core.storage import KeyValueStore, get_store
from farm_market.identity import IdentityProvider, get_identity_provider
from farm_market.modules.users import UserService
from farm_market.modules.users.schemas import SignupRequest, SignupResponse

router = APIRouter(prefix="/auth", tags=["Authentication"])


@router.post("/signup", response_model=SignupResponse)
@limiter.limit(settings.signup_rate_limit)
async def signup(
    request: Request,
    payload: SignupRequest,
    store: KeyValueStore = Depends(get_store),
    provider: IdentityProvider = Depends(get_identity_provider),
):
    """Create the provider account and the marketplace profile."""
    service = UserService(store)
    # Account creation is a blocking HTTP call to the provider.
    identity = await run_in_threadpool(
        provider.create_account,
        payload.email,
        payload.password,
        service.signup_metadata(payload),
    )
    user = await service.create_profile(identity, payload)
    return SignupResponse(user=user)
