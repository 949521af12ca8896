from supabase import Client
from app.modules.saved_searches.schemas import SavedSearchCreate, SavedSearchResponse, SearchCriteria
from app.core.formatters import utc_now_iso
from typing import List, Optional
from fastapi import HTTPException
import logging

logger = logging.getLogger(__name__)


def _to_response(row: dict) -> SavedSearchResponse:
    return SavedSearchResponse(
        id=str(row["id"]),
        user_id=str(row["user_id"]),
        name=row.get("name") or "",
        criteria=SearchCriteria(**(row.get("criteria") or {})),
        is_active=bool(row.get("is_active")),
        last_checked=row.get("last_checked"),
        created_at=row.get("created_at")
    )


class SavedSearchService:
    def __init__(self, supabase: Client):
        self.supabase = supabase

    def save_search(self, user_id: str, search_data: SavedSearchCreate) -> SavedSearchResponse:
        """Save a search; listings created from now on count as new for it"""
        try:
            now = utc_now_iso()
            result = self.supabase.table("saved_searches").insert({
                "user_id": user_id,
                "name": search_data.name,
                "criteria": search_data.criteria.model_dump(by_alias=True, exclude_none=True),
                "is_active": search_data.is_active,
                "last_checked": now,
                "created_at": now
            }).execute()
            if not result.data:
                raise HTTPException(status_code=500, detail="Failed to save search")
            return _to_response(result.data[0])
        except HTTPException:
            raise
        except Exception as e:
            logger.error(f"Error saving search: {e}")
            raise HTTPException(status_code=500, detail=str(e))

    def get_saved_searches(self, user_id: str) -> List[SavedSearchResponse]:
        """Active searches, newest first"""
        try:
            result = self.supabase.table("saved_searches")\
                .select("*")\
                .eq("user_id", user_id)\
                .eq("is_active", True)\
                .order("created_at", desc=True)\
                .execute()
            return [_to_response(row) for row in result.data or []]
        except Exception as e:
            logger.error(f"Error getting saved searches for {user_id}: {e}")
            raise HTTPException(status_code=500, detail=str(e))

    def toggle_active(self, search_id: str, is_active: bool, user_id: Optional[str] = None) -> SavedSearchResponse:
        try:
            query = self.supabase.table("saved_searches")\
                .update({"is_active": is_active})\
                .eq("id", search_id)
            if user_id:
                query = query.eq("user_id", user_id)
            result = query.execute()
            if not result.data:
                raise HTTPException(status_code=404, detail="Saved search not found")
            return _to_response(result.data[0])
        except HTTPException:
            raise
        except Exception as e:
            logger.error(f"Error toggling saved search {search_id}: {e}")
            raise HTTPException(status_code=500, detail=str(e))

    def update_last_checked(self, search_id: str) -> None:
        self.supabase.table("saved_searches")\
            .update({"last_checked": utc_now_iso()})\
            .eq("id", search_id)\
            .execute()

    def count_active(self, user_id: str) -> int:
        try:
            return len(self.get_saved_searches(user_id))
        except HTTPException:
            return 0

    def users_with_active_searches(self) -> List[str]:
        """Distinct owners of active searches; empty on failure"""
        try:
            result = self.supabase.table("saved_searches")\
                .select("user_id")\
                .eq("is_active", True)\
                .execute()
            user_ids = []
            for row in result.data or []:
                user_id = row.get("user_id")
                if user_id and str(user_id) not in user_ids:
                    user_ids.append(str(user_id))
            return user_ids
        except Exception as e:
            logger.error(f"Error getting users with saved searches: {e}")
            return []
