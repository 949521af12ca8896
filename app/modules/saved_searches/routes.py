from fastapi import APIRouter, Depends
from app.database.supabase_client import get_supabase
from app.modules.saved_searches.schemas import (
    SavedSearchCreate, SavedSearchResponse, SavedSearchToggle, SavedSearchCheckResult
)
from app.modules.saved_searches.service import SavedSearchService
from app.modules.saved_searches.matcher import SavedSearchChecker
from app.core.dependencies import get_current_user_id
from supabase import Client
from typing import List, Dict

router = APIRouter(prefix="/saved-searches", tags=["saved-searches"])


def get_saved_search_service(supabase: Client = Depends(get_supabase)) -> SavedSearchService:
    return SavedSearchService(supabase)


def get_saved_search_checker(supabase: Client = Depends(get_supabase)) -> SavedSearchChecker:
    return SavedSearchChecker(supabase)


@router.post("", response_model=SavedSearchResponse, status_code=201)
async def save_search(
    search_data: SavedSearchCreate,
    user_data: Dict = Depends(get_current_user_id),
    service: SavedSearchService = Depends(get_saved_search_service)
):
    return service.save_search(user_data["id"], search_data)


@router.get("", response_model=List[SavedSearchResponse])
async def list_saved_searches(
    user_data: Dict = Depends(get_current_user_id),
    service: SavedSearchService = Depends(get_saved_search_service)
):
    """Active saved searches, newest first"""
    return service.get_saved_searches(user_data["id"])


@router.get("/count")
async def count_saved_searches(
    user_data: Dict = Depends(get_current_user_id),
    service: SavedSearchService = Depends(get_saved_search_service)
):
    return {"count": service.count_active(user_data["id"])}


@router.put("/{search_id}/active", response_model=SavedSearchResponse)
async def toggle_saved_search(
    search_id: str,
    request: SavedSearchToggle,
    user_data: Dict = Depends(get_current_user_id),
    service: SavedSearchService = Depends(get_saved_search_service)
):
    return service.toggle_active(search_id, request.is_active, user_id=user_data["id"])


@router.post("/check", response_model=SavedSearchCheckResult)
async def check_saved_searches(
    user_data: Dict = Depends(get_current_user_id),
    service: SavedSearchService = Depends(get_saved_search_service),
    checker: SavedSearchChecker = Depends(get_saved_search_checker)
):
    """Check the caller's saved searches for new listings now"""
    checked = service.count_active(user_data["id"])
    notified = checker.trigger(user_data["id"])
    return SavedSearchCheckResult(searches_checked=checked, searches_notified=notified)
