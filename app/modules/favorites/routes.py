from fastapi import APIRouter, Depends
from app.database.supabase_client import get_supabase
from app.modules.favorites.service import FavoriteService
from app.core.dependencies import get_current_user_id
from supabase import Client
from typing import List, Dict

router = APIRouter(prefix="/favorites", tags=["favorites"])


def get_favorite_service(supabase: Client = Depends(get_supabase)) -> FavoriteService:
    return FavoriteService(supabase)


@router.get("", response_model=List[str])
async def list_favorites(
    user_data: Dict = Depends(get_current_user_id),
    service: FavoriteService = Depends(get_favorite_service)
):
    """Ids of the current user's favorite properties"""
    return service.get_user_favorites(user_data["id"])


@router.put("/{property_id}", status_code=204)
async def add_favorite(
    property_id: str,
    user_data: Dict = Depends(get_current_user_id),
    service: FavoriteService = Depends(get_favorite_service)
):
    service.add_favorite(user_data["id"], property_id)
    return None


@router.delete("/{property_id}", status_code=204)
async def remove_favorite(
    property_id: str,
    user_data: Dict = Depends(get_current_user_id),
    service: FavoriteService = Depends(get_favorite_service)
):
    service.remove_favorite(user_data["id"], property_id)
    return None
