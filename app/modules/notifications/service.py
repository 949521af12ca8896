from supabase import Client
from app.modules.notifications.schemas import NotificationCreate, NotificationResponse
from app.core.formatters import utc_now_iso
from typing import List
from fastapi import HTTPException
import logging

logger = logging.getLogger(__name__)


def _to_response(row: dict) -> NotificationResponse:
    return NotificationResponse(
        id=str(row["id"]),
        user_id=row.get("user_id"),
        title=row.get("title") or "",
        message=row.get("message") or "",
        type=row.get("type") or "system",
        data=row.get("data") or {},
        is_read=bool(row.get("is_read")),
        created_at=row.get("created_at")
    )


class NotificationService:
    def __init__(self, supabase: Client):
        self.supabase = supabase

    def create_notification(self, notification: NotificationCreate) -> NotificationResponse:
        """Store a notification; user_id None makes it a broadcast"""
        try:
            result = self.supabase.table("notifications").insert({
                "user_id": notification.user_id,
                "title": notification.title,
                "message": notification.message,
                "type": notification.type,
                "data": notification.data or {},
                "is_read": notification.is_read,
                "created_at": utc_now_iso()
            }).execute()

            if not result.data:
                raise HTTPException(status_code=500, detail="Failed to create notification")
            return _to_response(result.data[0])
        except HTTPException:
            raise
        except Exception as e:
            logger.error(f"Error creating notification: {e}")
            raise HTTPException(status_code=500, detail=str(e))

    def get_user_notifications(self, user_id: str) -> List[NotificationResponse]:
        """Own and broadcast notifications, newest first, minus the ones this user hid"""
        try:
            result = self.supabase.table("notifications")\
                .select("*")\
                .or_(f"user_id.eq.{user_id},user_id.is.null")\
                .order("created_at", desc=True)\
                .execute()
            rows = result.data or []
        except Exception as e:
            logger.error(f"Error getting notifications for {user_id}: {e}")
            return []

        try:
            deleted = self.supabase.table("deleted_notifications")\
                .select("notification_id")\
                .eq("user_id", user_id)\
                .execute()
            hidden = {str(d["notification_id"]) for d in deleted.data or []}
        except Exception as e:
            logger.warning(f"deleted_notifications unavailable, returning unfiltered list: {e}")
            hidden = set()

        return [_to_response(row) for row in rows if str(row["id"]) not in hidden]

    def delete_notification(self, notification_id: str, user_id: str) -> None:
        """Delete an own notification, or hide a broadcast for this user only"""
        try:
            result = self.supabase.table("notifications")\
                .select("id, user_id")\
                .eq("id", notification_id)\
                .maybe_single()\
                .execute()
            if not result or not result.data:
                raise HTTPException(status_code=404, detail="Notification not found")

            owner_id = result.data.get("user_id")
            if owner_id == user_id:
                self.supabase.table("notifications").delete().eq("id", notification_id).execute()
                return

            if owner_id is None:
                self.supabase.table("deleted_notifications").upsert(
                    {"notification_id": notification_id, "user_id": user_id},
                    on_conflict="notification_id,user_id"
                ).execute()
                return

            raise HTTPException(
                status_code=403,
                detail="You can only delete your own or broadcast notifications"
            )
        except HTTPException:
            raise
        except Exception as e:
            logger.error(f"Error deleting notification {notification_id}: {e}")
            raise HTTPException(status_code=500, detail=str(e))

    def mark_as_read(self, notification_id: str, user_id: str) -> None:
        """Mark an own or broadcast notification as read"""
        try:
            result = self.supabase.table("notifications")\
                .select("id, user_id")\
                .eq("id", notification_id)\
                .maybe_single()\
                .execute()
            if not result or not result.data:
                raise HTTPException(status_code=404, detail="Notification not found")

            owner_id = result.data.get("user_id")
            if owner_id is not None and owner_id != user_id:
                raise HTTPException(status_code=403, detail="You can only update your own notifications")

            self.supabase.table("notifications")\
                .update({"is_read": True})\
                .eq("id", notification_id)\
                .execute()
        except HTTPException:
            raise
        except Exception as e:
            logger.error(f"Error marking notification {notification_id} as read: {e}")
            raise HTTPException(status_code=500, detail=str(e))
