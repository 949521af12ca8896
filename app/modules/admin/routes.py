from fastapi import APIRouter, Depends
from app.database.supabase_client import get_service_supabase
from app.modules.admin.schemas import (
    AdminHome, AdminPendingHome, AdminUserProfile, Subscription, DashboardOverview, AdminRejectRequest
)
from app.modules.admin.service import AdminService
from app.modules.contacts.schemas import ContactResponse
from app.core.dependencies import require_admin
from supabase import Client
from typing import List, Optional, Dict

router = APIRouter(prefix="/admin", tags=["admin"])


def get_admin_service(supabase: Client = Depends(get_service_supabase)) -> AdminService:
    return AdminService(supabase)


@router.get("/overview", response_model=DashboardOverview)
async def overview(
    user_data: Dict = Depends(require_admin),
    service: AdminService = Depends(get_admin_service)
):
    return service.get_overview()


@router.get("/homes", response_model=List[AdminHome])
async def published_homes(
    search: Optional[str] = None,
    user_data: Dict = Depends(require_admin),
    service: AdminService = Depends(get_admin_service)
):
    return service.get_published_homes(search)


@router.get("/homes/archived", response_model=List[AdminHome])
async def archived_homes(
    search: Optional[str] = None,
    user_data: Dict = Depends(require_admin),
    service: AdminService = Depends(get_admin_service)
):
    return service.get_archived_homes(search)


@router.post("/homes/{home_id}/archive")
async def archive_home(
    home_id: int,
    user_data: Dict = Depends(require_admin),
    service: AdminService = Depends(get_admin_service)
):
    service.archive_home(home_id)
    return {"message": "Home archived"}


@router.post("/homes/{home_id}/unarchive")
async def unarchive_home(
    home_id: int,
    user_data: Dict = Depends(require_admin),
    service: AdminService = Depends(get_admin_service)
):
    service.unarchive_home(home_id)
    return {"message": "Home unarchived"}


@router.delete("/homes/{home_id}", status_code=204)
async def delete_home(
    home_id: int,
    user_data: Dict = Depends(require_admin),
    service: AdminService = Depends(get_admin_service)
):
    service.delete_home(home_id)
    return None


@router.get("/pending-homes", response_model=List[AdminPendingHome])
async def pending_homes(
    search: Optional[str] = None,
    user_data: Dict = Depends(require_admin),
    service: AdminService = Depends(get_admin_service)
):
    """Submissions with requester details and resolved images"""
    return service.get_pending_homes(search)


@router.post("/pending-homes/{pending_id}/approve")
async def approve_pending_home(
    pending_id: int,
    user_data: Dict = Depends(require_admin),
    service: AdminService = Depends(get_admin_service)
):
    home_id = service.approve_pending_home(pending_id, user_data["id"])
    return {"message": "Property approved", "home_id": home_id}


@router.post("/pending-homes/{pending_id}/reject")
async def reject_pending_home(
    pending_id: int,
    request: AdminRejectRequest,
    user_data: Dict = Depends(require_admin),
    service: AdminService = Depends(get_admin_service)
):
    service.reject_pending_home(pending_id, request.reason, user_data["id"], request.category)
    return {"message": "Property rejected"}


@router.get("/users", response_model=List[AdminUserProfile])
async def list_users(
    search: Optional[str] = None,
    user_data: Dict = Depends(require_admin),
    service: AdminService = Depends(get_admin_service)
):
    return service.get_users(search)


@router.delete("/users/{user_id}", status_code=204)
async def delete_user(
    user_id: str,
    user_data: Dict = Depends(require_admin),
    service: AdminService = Depends(get_admin_service)
):
    service.delete_user(user_id)
    return None


@router.get("/subscriptions", response_model=List[Subscription])
async def list_subscriptions(
    search: Optional[str] = None,
    status: Optional[str] = None,
    date_range: Optional[str] = None,
    user_data: Dict = Depends(require_admin),
    service: AdminService = Depends(get_admin_service)
):
    """Filter by email, status and a week / month / year window"""
    return service.get_subscriptions(search, status, date_range)


@router.get("/contacts", response_model=List[ContactResponse])
async def list_contacts(
    search: Optional[str] = None,
    user_data: Dict = Depends(require_admin),
    service: AdminService = Depends(get_admin_service)
):
    return service.get_contacts(search)
