"""Reviews between trading parties."""

from fastapi import APIRouter, Depends

from farm_market.core.storage import KeyValueStore, get_store
from farm_market.identity import Caller, get_current_caller
from farm_market.modules.reviews import ReviewService
from farm_market.modules.reviews.schemas import (
    ReviewCreate,
    ReviewListResponse,
    ReviewResponse,
)

router = APIRouter(prefix="/reviews", tags=["Reviews"])


def get_review_service(store: KeyValueStore = Depends(get_store)) -> ReviewService:
    return ReviewService(store)


@router.get("/{user_id}", response_model=ReviewListResponse)
async def list_reviews(
    user_id: str, service: ReviewService = Depends(get_review_service)
):
    return ReviewListResponse(reviews=await service.list_for_user(user_id))


@router.post("", response_model=ReviewResponse)
async def create_review(
    payload: ReviewCreate,
    service: ReviewService = Depends(get_review_service),
    caller: Caller = Depends(get_current_caller),
):
    """Store the review and refresh the reviewee's average rating."""
    return ReviewResponse(review=await service.create_review(caller, payload))
