from supabase import Client
from app.modules.listings.schemas import PropertyReview, ReviewAuthor
from app.modules.notifications.schemas import NotificationCreate
from app.modules.notifications.service import NotificationService
from app.modules.users.service import get_profiles_by_id, display_name
from app.core.formatters import parse_timestamp, parse_home_id
from typing import List, Dict, Any, Optional
from fastapi import HTTPException
import logging

logger = logging.getLogger(__name__)


class ReviewService:
    def __init__(self, supabase: Client):
        self.supabase = supabase

    def add_review(self, property_id: str, user_data: Dict[str, Any], rating: int, comment: Optional[str]) -> None:
        """Insert a review, then tell the owner about it unless they reviewed their own listing"""
        home_id = parse_home_id(property_id)
        if home_id is None:
            raise HTTPException(status_code=400, detail="Invalid property ID")
        if rating < 1 or rating > 5:
            raise HTTPException(status_code=400, detail="Rating must be between 1 and 5")

        try:
            self.supabase.table("property_reviews").insert({
                "property_id": home_id,
                "user_id": user_data["id"],
                "rating": rating,
                "comment": comment or "",
                "helpful_count": 0
            }).execute()
            logger.info(f"Review added to property {home_id} by {user_data['id']}")
        except Exception as e:
            logger.error(f"Error inserting review: {e}")
            raise HTTPException(status_code=500, detail=str(e))

        self._notify_owner(home_id, user_data["id"], rating)

    def _notify_owner(self, home_id: int, reviewer_id: str, rating: int) -> None:
        try:
            result = self.supabase.table("homes")\
                .select("id, title, user_id")\
                .eq("id", home_id)\
                .maybe_single()\
                .execute()
            home = result.data if result else None
            if not home or not home.get("user_id") or home["user_id"] == reviewer_id:
                return

            NotificationService(self.supabase).create_notification(NotificationCreate(
                user_id=home["user_id"],
                title="New review on your property ⭐",
                message=f'Your property "{home.get("title")}" received a new {rating}-star review.',
                type="review",
                data={"homeId": home["id"], "rating": rating}
            ))
        except Exception as e:
            logger.error(f"Error creating review notification: {e}")

    def get_property_reviews(self, property_id: str) -> List[PropertyReview]:
        """Reviews newest first with author names resolved; empty on any failure"""
        home_id = parse_home_id(property_id)
        if home_id is None:
            return []

        try:
            result = self.supabase.table("property_reviews")\
                .select("id, rating, comment, helpful_count, created_at, user_id")\
                .eq("property_id", home_id)\
                .order("created_at", desc=True)\
                .execute()
            rows = result.data or []
            profiles = get_profiles_by_id(self.supabase, [r.get("user_id") for r in rows])

            reviews = []
            for row in rows:
                profile = profiles.get(row.get("user_id"))
                reviews.append(PropertyReview(
                    id=str(row["id"]),
                    rating=row.get("rating") or 0,
                    comment=row.get("comment"),
                    public=True,
                    helpful=row.get("helpful_count") or 0,
                    user=ReviewAuthor(
                        name=display_name(profile, row.get("user_id")),
                        avatar=(profile or {}).get("avatar_url") or "",
                        email=(profile or {}).get("email") or ""
                    ),
                    created_at=parse_timestamp(row.get("created_at"))
                ))
            return reviews
        except Exception as e:
            logger.error(f"Error getting reviews for property {property_id}: {e}")
            return []

    @staticmethod
    def average_rating(reviews: List[PropertyReview]) -> float:
        """Mean rating over public reviews, 0 when there are none"""
        public_reviews = [r for r in reviews if r.public is not False]
        if not public_reviews:
            return 0
        return sum(r.rating for r in public_reviews) / len(public_reviews)
