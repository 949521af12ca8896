from supabase import Client
from app.modules.admin.schemas import (
    AdminHome, AdminPendingHome, AdminUserProfile, Subscription, DashboardOverview, ImageUrl, RequesterDetails
)
from app.modules.approvals.service import ApprovalService
from app.modules.contacts.schemas import ContactResponse
from app.modules.contacts.service import ContactService
from app.modules.storage.service import resolve_image_url
from datetime import datetime, timedelta, timezone
from typing import List, Optional, Dict, Any
from fastapi import HTTPException
import calendar
import logging

logger = logging.getLogger(__name__)

DATE_RANGES = ("week", "month", "year")


def range_start(date_range: str, now: Optional[datetime] = None) -> Optional[datetime]:
    """Start of a week / month / year window ending now; None for 'all' or unknown ranges"""
    now = now or datetime.now(timezone.utc)
    if date_range == "week":
        return now - timedelta(days=7)
    if date_range == "month":
        year, month = (now.year, now.month - 1) if now.month > 1 else (now.year - 1, 12)
        day = min(now.day, calendar.monthrange(year, month)[1])
        return now.replace(year=year, month=month, day=day)
    if date_range == "year":
        day = min(now.day, calendar.monthrange(now.year - 1, now.month)[1])
        return now.replace(year=now.year - 1, day=day)
    return None


class AdminService:
    def __init__(self, supabase: Client):
        self.supabase = supabase

    def _homes(self, archived: bool, search: Optional[str]) -> List[AdminHome]:
        try:
            query = self.supabase.table("homes").select("*")
            if archived:
                query = query.not_.is_("archived_at", "null").order("archived_at", desc=True)
            else:
                query = query.is_("archived_at", "null").order("created_at", desc=True)
            if search:
                query = query.ilike("title", f"%{search}%")
            result = query.execute()
            return [AdminHome(**row) for row in result.data or []]
        except Exception as e:
            logger.error(f"Error fetching {'archived' if archived else 'published'} homes: {e}")
            raise HTTPException(status_code=500, detail=str(e))

    def get_published_homes(self, search: Optional[str] = None) -> List[AdminHome]:
        return self._homes(False, search)

    def get_archived_homes(self, search: Optional[str] = None) -> List[AdminHome]:
        return self._homes(True, search)

    def _pending_images(self, row: Dict[str, Any]) -> List[ImageUrl]:
        """pending_home_images first, else the images column; resolved to public URLs"""
        urls: List[str] = []
        try:
            result = self.supabase.table("pending_home_images")\
                .select("url")\
                .eq("home_id", row["id"])\
                .execute()
            urls = [img["url"] for img in result.data or [] if img.get("url")]
        except Exception as e:
            logger.debug(f"pending_home_images unavailable for {row['id']}: {e}")
        if not urls:
            urls = [img for img in row.get("images") or [] if img]
        return [ImageUrl(url=resolve_image_url(self.supabase, url)) for url in urls]

    def get_pending_homes(self, search: Optional[str] = None) -> List[AdminPendingHome]:
        """Submissions with requester details and images"""
        try:
            query = self.supabase.table("pending_homes")\
                .select("*")\
                .order("created_at", desc=True)
            if search:
                query = query.ilike("title", f"%{search}%")
            rows = query.execute().data or []

            user_ids = list({row["user_id"] for row in rows if row.get("user_id")})
            requesters: Dict[str, Dict[str, Any]] = {}
            if user_ids:
                users = self.supabase.table("users")\
                    .select("id, name, email, phone")\
                    .in_("id", user_ids)\
                    .execute()
                requesters = {u["id"]: u for u in users.data or []}

            homes = []
            for row in rows:
                requester = requesters.get(row.get("user_id"))
                homes.append(AdminPendingHome(
                    **{**row, "images": self._pending_images(row)},
                    userDetails=RequesterDetails(**requester) if requester else None
                ))
            return homes
        except Exception as e:
            logger.error(f"Error fetching pending homes: {e}")
            raise HTTPException(status_code=500, detail=str(e))

    def approve_pending_home(self, pending_id: int, admin_id: Optional[str] = None) -> int:
        return ApprovalService(self.supabase).approve_pending_property(pending_id, admin_id)

    def reject_pending_home(
        self,
        pending_id: int,
        reason: str,
        admin_id: Optional[str] = None,
        category: Optional[str] = None
    ) -> None:
        ApprovalService(self.supabase).reject_pending_property(pending_id, admin_id, reason, category)

    def _set_archived(self, home_id: int, archived_at: Optional[str]) -> None:
        try:
            result = self.supabase.table("homes")\
                .update({"archived_at": archived_at})\
                .eq("id", home_id)\
                .execute()
            if not result.data:
                raise HTTPException(status_code=404, detail="Home not found")
        except HTTPException:
            raise
        except Exception as e:
            logger.error(f"Error updating home {home_id}: {e}")
            raise HTTPException(status_code=500, detail=str(e))

    def archive_home(self, home_id: int) -> None:
        self._set_archived(home_id, datetime.now(timezone.utc).isoformat())

    def unarchive_home(self, home_id: int) -> None:
        self._set_archived(home_id, None)

    def delete_home(self, home_id: int) -> None:
        """Delete a home and its home_images rows"""
        try:
            self.supabase.table("home_images").delete().eq("home_id", home_id).execute()
        except Exception as e:
            logger.warning(f"Error deleting images of home {home_id}: {e}")

        try:
            self.supabase.table("homes").delete().eq("id", home_id).execute()
            logger.info(f"Home {home_id} deleted by admin")
        except Exception as e:
            logger.error(f"Error deleting home {home_id}: {e}")
            raise HTTPException(status_code=500, detail=str(e))

    def get_users(self, search: Optional[str] = None) -> List[AdminUserProfile]:
        try:
            query = self.supabase.table("users")\
                .select("*")\
                .order("created_at", desc=True)
            if search:
                query = query.ilike("email", f"%{search}%")
            result = query.execute()
            return [
                AdminUserProfile(**{**row, "role": (row.get("metadata") or {}).get("role")})
                for row in result.data or []
            ]
        except Exception as e:
            logger.error(f"Error fetching users: {e}")
            raise HTTPException(status_code=500, detail=str(e))

    def delete_user(self, user_id: str) -> None:
        try:
            self.supabase.table("users").delete().eq("id", user_id).execute()
            logger.info(f"User {user_id} deleted by admin")
        except Exception as e:
            logger.error(f"Error deleting user {user_id}: {e}")
            raise HTTPException(status_code=500, detail=str(e))

    def get_subscriptions(
        self,
        search: Optional[str] = None,
        status: Optional[str] = None,
        date_range: Optional[str] = None
    ) -> List[Subscription]:
        try:
            query = self.supabase.table("subscriptions")\
                .select("*")\
                .order("created_at", desc=True)
            if search:
                query = query.ilike("email", f"%{search}%")
            if status and status != "all":
                query = query.eq("status", status)
            if date_range and date_range != "all":
                start = range_start(date_range)
                if start is None:
                    raise HTTPException(status_code=400, detail=f"Invalid date range: {date_range}")
                query = query.gte("created_at", start.isoformat())
            result = query.execute()
            return [Subscription(**row) for row in result.data or []]
        except HTTPException:
            raise
        except Exception as e:
            logger.error(f"Error fetching subscriptions: {e}")
            raise HTTPException(status_code=500, detail=str(e))

    def get_contacts(self, search: Optional[str] = None) -> List[ContactResponse]:
        return ContactService(self.supabase).get_contacts(search)

    def _count(self, table: str, **filters) -> int:
        query = self.supabase.table(table).select("id", count="exact")
        for column, value in filters.items():
            if value is None:
                query = query.is_(column, "null")
            elif value == "not_null":
                query = query.not_.is_(column, "null")
            else:
                query = query.eq(column, value)
        result = query.execute()
        return result.count or 0

    def get_overview(self) -> DashboardOverview:
        """Counts shown on the dashboard tiles"""
        try:
            return DashboardOverview(
                published_homes=self._count("homes", archived_at=None),
                archived_homes=self._count("homes", archived_at="not_null"),
                pending_homes=self._count("pending_homes", status="pending"),
                users=self._count("users"),
                subscriptions=self._count("subscriptions"),
                contacts=self._count("contacts"),
                pending_removal_requests=self._count("property_removal_requests", request_status="pending")
            )
        except Exception as e:
            logger.error(f"Error building dashboard overview: {e}")
            raise HTTPException(status_code=500, detail=str(e))
