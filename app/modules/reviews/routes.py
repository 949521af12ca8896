from fastapi import APIRouter, Depends
from app.database.supabase_client import get_supabase
from app.modules.listings.schemas import PropertyReview
from app.modules.reviews.schemas import ReviewCreate, AverageRatingResponse
from app.modules.reviews.service import ReviewService
from app.core.dependencies import get_current_user_id
from supabase import Client
from typing import List, Dict

router = APIRouter(prefix="/properties/{property_id}/reviews", tags=["reviews"])


def get_review_service(supabase: Client = Depends(get_supabase)) -> ReviewService:
    return ReviewService(supabase)


@router.get("", response_model=List[PropertyReview])
async def list_reviews(property_id: str, service: ReviewService = Depends(get_review_service)):
    return service.get_property_reviews(property_id)


@router.get("/average", response_model=AverageRatingResponse)
async def average_rating(property_id: str, service: ReviewService = Depends(get_review_service)):
    reviews = service.get_property_reviews(property_id)
    return AverageRatingResponse(
        property_id=property_id,
        average_rating=ReviewService.average_rating(reviews),
        review_count=len(reviews)
    )


@router.post("", status_code=201)
async def add_review(
    property_id: str,
    review: ReviewCreate,
    user_data: Dict = Depends(get_current_user_id),
    service: ReviewService = Depends(get_review_service)
):
    """Rate a property 1-5 with an optional comment"""
    service.add_review(property_id, user_data, review.rating, review.comment)
    return {"message": "Review added"}
