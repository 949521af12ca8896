from supabase import Client
from app.modules.announcements.schemas import AnnouncementCreate, AnnouncementResponse
from app.modules.notifications.schemas import NotificationCreate
from app.modules.notifications.service import NotificationService
from app.core.formatters import utc_now_iso
from typing import List, Optional
from fastapi import HTTPException
import logging

logger = logging.getLogger(__name__)


def _to_response(row: dict) -> AnnouncementResponse:
    priority = row.get("priority")
    return AnnouncementResponse(
        id=str(row["id"]),
        title=row.get("title") or "",
        message=row.get("message") or "",
        is_active=row.get("is_active") if row.get("is_active") is not None else True,
        priority=priority if isinstance(priority, int) else 0,
        created_at=row.get("created_at"),
        expires_at=row.get("expires_at"),
        created_by=row.get("created_by"),
        link=row.get("link"),
        image_url=row.get("image_url")
    )


class AnnouncementService:
    def __init__(self, supabase: Client):
        self.supabase = supabase

    def get_active_announcements(self, limit: int = 10) -> List[AnnouncementResponse]:
        """Active, unexpired announcements by priority then newest; empty on failure"""
        try:
            now = utc_now_iso()
            result = self.supabase.table("announcements")\
                .select("*")\
                .eq("is_active", True)\
                .or_(f"expires_at.is.null,expires_at.gt.{now}")\
                .order("priority", desc=True)\
                .order("created_at", desc=True)\
                .limit(limit)\
                .execute()
            return [_to_response(row) for row in result.data or []]
        except Exception as e:
            logger.error(f"Error fetching active announcements: {e}")
            return []

    def get_all_announcements(self, search: Optional[str] = None) -> List[AnnouncementResponse]:
        try:
            query = self.supabase.table("announcements")\
                .select("*")\
                .order("created_at", desc=True)
            if search and search.strip():
                term = search.strip()
                query = query.or_(f"title.ilike.%{term}%,message.ilike.%{term}%")
            result = query.execute()
            return [_to_response(row) for row in result.data or []]
        except Exception as e:
            logger.error(f"Error fetching announcements: {e}")
            return []

    def create_announcement(self, announcement: AnnouncementCreate, created_by: Optional[str] = None) -> AnnouncementResponse:
        """Post an announcement and broadcast it to every user's notification center"""
        try:
            result = self.supabase.table("announcements").insert({
                "title": announcement.title.strip(),
                "message": announcement.message.strip(),
                "is_active": announcement.is_active,
                "priority": announcement.priority,
                "expires_at": announcement.expires_at.isoformat() if announcement.expires_at else None,
                "link": announcement.link,
                "image_url": announcement.image_url,
                "created_by": created_by
            }).execute()
            if not result.data:
                raise HTTPException(status_code=500, detail="Failed to create announcement")
            row = result.data[0]
        except HTTPException:
            raise
        except Exception as e:
            logger.error(f"Error creating announcement: {e}")
            raise HTTPException(status_code=500, detail=str(e))

        try:
            NotificationService(self.supabase).create_notification(NotificationCreate(
                user_id=None,
                title=row["title"],
                message=row["message"],
                type="announcement",
                data={"announcementId": row["id"], "link": row.get("link")}
            ))
        except Exception as e:
            logger.error(f"Error broadcasting announcement {row['id']}: {e}")

        return _to_response(row)

    def update_announcement_status(self, announcement_id: str, is_active: bool) -> None:
        try:
            result = self.supabase.table("announcements")\
                .update({"is_active": is_active})\
                .eq("id", announcement_id)\
                .execute()
            if not result.data:
                raise HTTPException(status_code=404, detail="Announcement not found")
        except HTTPException:
            raise
        except Exception as e:
            logger.error(f"Error updating announcement {announcement_id}: {e}")
            raise HTTPException(status_code=500, detail=str(e))

    def delete_announcement(self, announcement_id: str) -> None:
        try:
            self.supabase.table("announcements").delete().eq("id", announcement_id).execute()
        except Exception as e:
            logger.error(f"Error deleting announcement {announcement_id}: {e}")
            raise HTTPException(status_code=500, detail=str(e))
