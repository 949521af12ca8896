from supabase import Client
from postgrest.exceptions import APIError
from app.modules.listings.service import require_home_id
from typing import List
from fastapi import HTTPException
import logging

logger = logging.getLogger(__name__)

DUPLICATE_KEY = "23505"


class FavoriteService:
    def __init__(self, supabase: Client):
        self.supabase = supabase

    def get_user_favorites(self, user_id: str) -> List[str]:
        """Favorited property ids as strings; empty on failure"""
        try:
            result = self.supabase.table("user_favorites")\
                .select("property_id")\
                .eq("user_id", user_id)\
                .execute()
            return [str(row["property_id"]) for row in result.data or []]
        except Exception as e:
            logger.error(f"Error getting favorites for {user_id}: {e}")
            return []

    def add_favorite(self, user_id: str, property_id: str) -> None:
        home_id = require_home_id(property_id)
        try:
            self.supabase.table("user_favorites").insert({
                "user_id": user_id,
                "property_id": home_id
            }).execute()
        except APIError as e:
            # Already favorited
            if e.code == DUPLICATE_KEY:
                return
            logger.error(f"Error adding favorite: {e}")
            raise HTTPException(status_code=500, detail=str(e))
        except Exception as e:
            logger.error(f"Error adding favorite: {e}")
            raise HTTPException(status_code=500, detail=str(e))

    def remove_favorite(self, user_id: str, property_id: str) -> None:
        home_id = require_home_id(property_id)
        try:
            self.supabase.table("user_favorites")\
                .delete()\
                .eq("user_id", user_id)\
                .eq("property_id", home_id)\
                .execute()
        except Exception as e:
            logger.error(f"Error removing favorite: {e}")
            raise HTTPException(status_code=500, detail=str(e))
