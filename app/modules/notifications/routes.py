from fastapi import APIRouter, Depends
from app.database.supabase_client import get_supabase, get_service_supabase
from app.modules.notifications.schemas import (
    NotificationCreate, NotificationResponse, MarketUpdateRequest, AgentMessageRequest, OpenHouseRequest
)
from app.modules.notifications.service import NotificationService
from app.modules.notifications.push import PushNotifier
from app.core.dependencies import get_current_user_id, require_admin
from supabase import Client
from typing import List, Dict

router = APIRouter(prefix="/notifications", tags=["notifications"])


def get_notification_service(supabase: Client = Depends(get_supabase)) -> NotificationService:
    return NotificationService(supabase)


def get_admin_notification_service(supabase: Client = Depends(get_service_supabase)) -> NotificationService:
    return NotificationService(supabase)


def get_admin_push_notifier(supabase: Client = Depends(get_service_supabase)) -> PushNotifier:
    return PushNotifier(supabase)


@router.get("", response_model=List[NotificationResponse])
async def list_my_notifications(
    user_data: Dict = Depends(get_current_user_id),
    service: NotificationService = Depends(get_notification_service)
):
    """Own and broadcast notifications, newest first"""
    return service.get_user_notifications(user_data["id"])


@router.put("/{notification_id}/read")
async def mark_notification_read(
    notification_id: str,
    user_data: Dict = Depends(get_current_user_id),
    service: NotificationService = Depends(get_notification_service)
):
    service.mark_as_read(notification_id, user_data["id"])
    return {"message": "Notification marked as read"}


@router.delete("/{notification_id}", status_code=204)
async def delete_notification(
    notification_id: str,
    user_data: Dict = Depends(get_current_user_id),
    service: NotificationService = Depends(get_notification_service)
):
    """Delete an own notification or hide a broadcast"""
    service.delete_notification(notification_id, user_data["id"])
    return None


@router.post("", response_model=NotificationResponse, status_code=201)
async def create_notification(
    notification: NotificationCreate,
    user_data: Dict = Depends(require_admin),
    service: NotificationService = Depends(get_admin_notification_service)
):
    """Create a notification; omit user_id to broadcast (admin only)"""
    return service.create_notification(notification)


@router.post("/market-update", status_code=202)
async def send_market_update(
    request: MarketUpdateRequest,
    user_data: Dict = Depends(require_admin),
    notifier: PushNotifier = Depends(get_admin_push_notifier)
):
    notifier.send_market_update_notification(request.user_id, request.update)
    return {"message": "Market update sent"}


@router.post("/agent-message", status_code=202)
async def send_agent_message(
    request: AgentMessageRequest,
    user_data: Dict = Depends(require_admin),
    notifier: PushNotifier = Depends(get_admin_push_notifier)
):
    notifier.send_agent_message_notification(request.user_id, request.agent_name, request.message)
    return {"message": "Agent message sent"}


@router.post("/open-house", status_code=202)
async def send_open_house(
    request: OpenHouseRequest,
    user_data: Dict = Depends(require_admin),
    notifier: PushNotifier = Depends(get_admin_push_notifier)
):
    notifier.send_open_house_notification(request.user_id, request.property_id, request.date, request.address)
    return {"message": "Open house reminder sent"}
