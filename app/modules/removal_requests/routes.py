from fastapi import APIRouter, Depends
from app.database.supabase_client import get_supabase, get_service_supabase
from app.modules.removal_requests.schemas import (
    RemovalRequestCreate, RemovalRequestResponse, RemovalRequestDetail, RemovalApproveRequest, RemovalRejectRequest
)
from app.modules.removal_requests.service import RemovalRequestService
from app.core.dependencies import get_current_user_id, require_admin
from supabase import Client
from typing import List, Optional, Dict

router = APIRouter(prefix="/removal-requests", tags=["removal-requests"])


def get_removal_request_service(supabase: Client = Depends(get_supabase)) -> RemovalRequestService:
    return RemovalRequestService(supabase)


def get_admin_removal_request_service(supabase: Client = Depends(get_service_supabase)) -> RemovalRequestService:
    return RemovalRequestService(supabase)


@router.post("", response_model=RemovalRequestResponse, status_code=201)
async def create_removal_request(
    request_data: RemovalRequestCreate,
    user_data: Dict = Depends(get_current_user_id),
    service: RemovalRequestService = Depends(get_removal_request_service)
):
    """Ask an admin to take a listing down"""
    return service.create_removal_request(request_data, user_data["id"])


@router.get("/mine", response_model=List[RemovalRequestResponse])
async def my_removal_requests(
    user_data: Dict = Depends(get_current_user_id),
    service: RemovalRequestService = Depends(get_removal_request_service)
):
    return service.get_user_removal_requests(user_data["id"])


@router.get("", response_model=List[RemovalRequestResponse])
async def list_removal_requests(
    status: Optional[str] = None,
    user_data: Dict = Depends(require_admin),
    service: RemovalRequestService = Depends(get_admin_removal_request_service)
):
    return service.get_all_removal_requests(status)


@router.get("/detailed", response_model=List[RemovalRequestDetail])
async def list_detailed_removal_requests(
    search: Optional[str] = None,
    user_data: Dict = Depends(require_admin),
    service: RemovalRequestService = Depends(get_admin_removal_request_service)
):
    """Requests with requester and property details (admin panel)"""
    return service.list_removal_requests(search)


@router.post("/{request_id}/approve")
async def approve_removal_request(
    request_id: int,
    request: Optional[RemovalApproveRequest] = None,
    user_data: Dict = Depends(require_admin),
    service: RemovalRequestService = Depends(get_admin_removal_request_service)
):
    property_id = request.property_id if request else None
    service.approve_removal_request(request_id, property_id, user_data["id"])
    return {"message": "Removal request approved"}


@router.post("/{request_id}/reject")
async def reject_removal_request(
    request_id: int,
    request: Optional[RemovalRejectRequest] = None,
    user_data: Dict = Depends(require_admin),
    service: RemovalRequestService = Depends(get_admin_removal_request_service)
):
    service.reject_removal_request(request_id, user_data["id"], request.reason if request else None)
    return {"message": "Removal request rejected"}
