from fastapi import APIRouter, Depends
from app.database.supabase_client import get_supabase, get_service_supabase
from app.modules.listings.schemas import Property, PropertyCreate, ShareMessage
from app.modules.listings.service import ListingService, require_home_id
from app.core.dependencies import get_current_user_id, require_admin, check_owner_or_admin
from supabase import Client
from typing import List, Optional, Dict

router = APIRouter(prefix="/properties", tags=["properties"])


def get_listing_service(supabase: Client = Depends(get_supabase)) -> ListingService:
    return ListingService(supabase)


def get_admin_listing_service(supabase: Client = Depends(get_service_supabase)) -> ListingService:
    return ListingService(supabase)


def _check_can_modify(property_id: str, user_data: Dict, service: ListingService, supabase: Client) -> None:
    row = service.get_home_row(require_home_id(property_id))
    check_owner_or_admin(row.get("user_id") if row else None, user_data, supabase)


@router.get("", response_model=List[Property])
async def list_properties(
    filter: Optional[str] = None,
    search: Optional[str] = None,
    limit: Optional[int] = None,
    include_sold: bool = False,
    service: ListingService = Depends(get_listing_service)
):
    """Browse published listings"""
    return service.get_properties(filter=filter, search=search, limit=limit, include_sold=include_sold)


@router.get("/latest", response_model=List[Property])
async def latest_properties(service: ListingService = Depends(get_listing_service)):
    return service.get_latest_properties()


@router.get("/{property_id}", response_model=Property)
async def get_property(property_id: str, service: ListingService = Depends(get_listing_service)):
    """Published listing with reviews, or a pending submission"""
    return service.get_property_by_id(property_id)


@router.get("/{property_id}/share", response_model=ShareMessage)
async def share_property(property_id: str, service: ListingService = Depends(get_listing_service)):
    return service.share_message(property_id)


@router.post("", response_model=Property, status_code=201)
async def create_property(
    property_data: PropertyCreate,
    user_data: Dict = Depends(require_admin),
    service: ListingService = Depends(get_admin_listing_service)
):
    """Publish a listing directly (admin only)"""
    return service.add_property(property_data, user_data["id"])


@router.delete("/{property_id}", status_code=204)
async def delete_property(
    property_id: str,
    user_data: Dict = Depends(get_current_user_id),
    service: ListingService = Depends(get_listing_service),
    supabase: Client = Depends(get_supabase)
):
    _check_can_modify(property_id, user_data, service, supabase)
    service.delete_property(property_id)
    return None


@router.post("/{property_id}/sold")
async def mark_sold(
    property_id: str,
    user_data: Dict = Depends(get_current_user_id),
    service: ListingService = Depends(get_listing_service),
    supabase: Client = Depends(get_supabase)
):
    """Archive a listing as sold (owner or admin)"""
    _check_can_modify(property_id, user_data, service, supabase)
    service.mark_sold(property_id)
    return {"message": "Property marked as sold"}


@router.delete("/{property_id}/sold")
async def mark_unsold(
    property_id: str,
    user_data: Dict = Depends(get_current_user_id),
    service: ListingService = Depends(get_listing_service),
    supabase: Client = Depends(get_supabase)
):
    _check_can_modify(property_id, user_data, service, supabase)
    service.mark_unsold(property_id)
    return {"message": "Property marked as available"}
