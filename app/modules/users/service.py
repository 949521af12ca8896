from supabase import Client
from app.modules.users.schemas import UserProfileUpdate, UserProfileResponse, NotificationPreferences
from app.core.formatters import utc_now_iso
from typing import List, Optional, Dict, Any
from fastapi import HTTPException
import logging

logger = logging.getLogger(__name__)


class UserService:
    def __init__(self, supabase: Client):
        self.supabase = supabase

    def get_profile(self, user_id: str) -> UserProfileResponse:
        """Get user profile by ID"""
        try:
            result = self.supabase.table("users")\
                .select("*")\
                .eq("id", user_id)\
                .maybe_single()\
                .execute()

            if not result or not result.data:
                raise HTTPException(status_code=404, detail="User not found")

            return UserProfileResponse(**result.data)
        except HTTPException:
            raise
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))

    def update_profile(self, user_id: str, user_data: UserProfileUpdate) -> UserProfileResponse:
        """Update user profile"""
        try:
            update_data: Dict[str, Any] = {"updated_at": utc_now_iso()}
            if user_data.name is not None:
                update_data["name"] = user_data.name
            if user_data.phone is not None:
                update_data["phone"] = user_data.phone
            if user_data.avatar_url is not None:
                update_data["avatar_url"] = user_data.avatar_url
            if user_data.metadata is not None:
                update_data["metadata"] = user_data.metadata

            result = self.supabase.table("users")\
                .update(update_data)\
                .eq("id", user_id)\
                .execute()

            if not result.data:
                raise HTTPException(status_code=404, detail="User not found")

            return UserProfileResponse(**result.data[0])
        except HTTPException:
            raise
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))

    def get_metadata(self, user_id: str) -> Dict[str, Any]:
        """Return users.metadata, empty when the user or column is missing"""
        result = self.supabase.table("users")\
            .select("metadata")\
            .eq("id", user_id)\
            .maybe_single()\
            .execute()
        if not result or not result.data:
            return {}
        return result.data.get("metadata") or {}

    def save_push_token(
        self,
        user_id: str,
        push_token: str,
        preferences: Optional[NotificationPreferences] = None
    ) -> Dict[str, Any]:
        """Store the device push token and notification preferences in users.metadata"""
        try:
            metadata = self.get_metadata(user_id)
            metadata["pushToken"] = push_token
            existing_preferences = metadata.get("notificationPreferences") or {}
            if preferences is not None:
                metadata["notificationPreferences"] = preferences.model_dump()
            else:
                metadata["notificationPreferences"] = NotificationPreferences(**existing_preferences).model_dump()

            result = self.supabase.table("users")\
                .update({"metadata": metadata, "updated_at": utc_now_iso()})\
                .eq("id", user_id)\
                .execute()
            if not result.data:
                raise HTTPException(status_code=404, detail="User not found")
            return metadata
        except HTTPException:
            raise
        except Exception as e:
            logger.error(f"Error saving push token: {e}")
            raise HTTPException(status_code=500, detail=str(e))


def get_profiles_by_id(supabase: Client, user_ids: List[str]) -> Dict[str, Dict[str, Any]]:
    """Fetch users rows for the given ids in one query; empty when the lookup fails"""
    unique_ids = list({uid for uid in user_ids if uid})
    if not unique_ids:
        return {}
    try:
        result = supabase.table("users")\
            .select("id, name, email, avatar_url")\
            .in_("id", unique_ids)\
            .execute()
        return {row["id"]: row for row in result.data or [] if row.get("id")}
    except Exception as e:
        logger.error(f"Error fetching user profiles: {e}")
        return {}


def display_name(profile: Optional[Dict[str, Any]], user_id: Optional[str] = None) -> str:
    """Name shown next to reviews and forum posts"""
    if profile:
        if profile.get("name"):
            return profile["name"]
        if profile.get("email"):
            return profile["email"].split("@")[0]
        return "Anonymous"
    if user_id:
        return f"User {user_id[:8]}"
    return "Anonymous"
