from fastapi import APIRouter, Depends
from app.database.supabase_client import get_supabase, get_service_supabase
from app.modules.announcements.schemas import AnnouncementCreate, AnnouncementResponse, AnnouncementStatusUpdate
from app.modules.announcements.service import AnnouncementService
from app.core.dependencies import require_admin
from supabase import Client
from typing import List, Optional, Dict

router = APIRouter(prefix="/announcements", tags=["announcements"])


def get_announcement_service(supabase: Client = Depends(get_supabase)) -> AnnouncementService:
    return AnnouncementService(supabase)


def get_admin_announcement_service(supabase: Client = Depends(get_service_supabase)) -> AnnouncementService:
    return AnnouncementService(supabase)


@router.get("", response_model=List[AnnouncementResponse])
async def active_announcements(
    limit: int = 10,
    service: AnnouncementService = Depends(get_announcement_service)
):
    """Announcements currently shown in the app"""
    return service.get_active_announcements(limit)


@router.get("/all", response_model=List[AnnouncementResponse])
async def all_announcements(
    search: Optional[str] = None,
    user_data: Dict = Depends(require_admin),
    service: AnnouncementService = Depends(get_admin_announcement_service)
):
    return service.get_all_announcements(search)


@router.post("", response_model=AnnouncementResponse, status_code=201)
async def create_announcement(
    announcement: AnnouncementCreate,
    user_data: Dict = Depends(require_admin),
    service: AnnouncementService = Depends(get_admin_announcement_service)
):
    return service.create_announcement(announcement, created_by=user_data["id"])


@router.put("/{announcement_id}/status")
async def update_announcement_status(
    announcement_id: str,
    request: AnnouncementStatusUpdate,
    user_data: Dict = Depends(require_admin),
    service: AnnouncementService = Depends(get_admin_announcement_service)
):
    service.update_announcement_status(announcement_id, request.is_active)
    return {"message": "Announcement updated"}


@router.delete("/{announcement_id}", status_code=204)
async def delete_announcement(
    announcement_id: str,
    user_data: Dict = Depends(require_admin),
    service: AnnouncementService = Depends(get_admin_announcement_service)
):
    service.delete_announcement(announcement_id)
    return None
