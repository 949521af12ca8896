from fastapi import APIRouter, Depends
from app.database.supabase_client import get_supabase, get_service_supabase
from app.modules.approvals.schemas import (
    PendingHomeCreate, PendingHomeResponse, RejectionCategory, RejectRequest, PropertyStatus
)
from app.modules.approvals.service import ApprovalService
from app.core.dependencies import get_current_user_id, require_admin
from supabase import Client
from typing import List, Optional, Dict

router = APIRouter(prefix="/pending-properties", tags=["approvals"])


def get_approval_service(supabase: Client = Depends(get_supabase)) -> ApprovalService:
    return ApprovalService(supabase)


def get_admin_approval_service(supabase: Client = Depends(get_service_supabase)) -> ApprovalService:
    return ApprovalService(supabase)


@router.post("", response_model=PendingHomeResponse, status_code=201)
async def submit_property(
    property_data: PendingHomeCreate,
    user_data: Dict = Depends(get_current_user_id),
    service: ApprovalService = Depends(get_approval_service)
):
    """Submit a listing for admin approval"""
    return service.submit_pending_property(property_data, user_data["id"])


@router.get("/mine", response_model=List[PendingHomeResponse])
async def my_pending_properties(
    user_data: Dict = Depends(get_current_user_id),
    service: ApprovalService = Depends(get_approval_service)
):
    return service.get_user_pending_properties(user_data["id"])


@router.get("/status", response_model=List[PropertyStatus])
async def my_property_status(
    user_data: Dict = Depends(get_current_user_id),
    service: ApprovalService = Depends(get_approval_service)
):
    """Moderation status of the caller's submissions"""
    return service.get_user_property_status(user_data["id"])


@router.get("/rejection-categories", response_model=List[RejectionCategory])
async def rejection_categories(service: ApprovalService = Depends(get_approval_service)):
    return service.get_rejection_categories()


@router.get("", response_model=List[PendingHomeResponse])
async def list_pending_properties(
    status: Optional[str] = None,
    user_data: Dict = Depends(require_admin),
    service: ApprovalService = Depends(get_admin_approval_service)
):
    """All submissions, optionally by status (admin only)"""
    return service.get_all_pending_properties(status)


@router.post("/{pending_id}/approve")
async def approve_property(
    pending_id: int,
    user_data: Dict = Depends(require_admin),
    service: ApprovalService = Depends(get_admin_approval_service)
):
    home_id = service.approve_pending_property(pending_id, user_data["id"])
    return {"message": "Property approved", "home_id": home_id}


@router.post("/{pending_id}/reject")
async def reject_property(
    pending_id: int,
    request: RejectRequest,
    user_data: Dict = Depends(require_admin),
    service: ApprovalService = Depends(get_admin_approval_service)
):
    service.reject_pending_property(pending_id, user_data["id"], request.reason, request.category)
    return {"message": "Property rejected"}
