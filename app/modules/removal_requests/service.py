from supabase import Client
from app.modules.removal_requests.schemas import RemovalRequestCreate, RemovalRequestResponse, RemovalRequestDetail
from app.core.formatters import utc_now_iso
from typing import List, Optional, Dict, Any
from fastapi import HTTPException
import logging

logger = logging.getLogger(__name__)

REQUEST_STATUSES = ("pending", "approved", "rejected")


class RemovalRequestService:
    def __init__(self, supabase: Client):
        self.supabase = supabase

    def create_removal_request(self, request_data: RemovalRequestCreate, user_id: str) -> RemovalRequestResponse:
        try:
            now = utc_now_iso()
            result = self.supabase.table("property_removal_requests").insert({
                "property_id": request_data.property_id,
                "property_title": request_data.property_title,
                "removal_reason": request_data.removal_reason,
                "user_id": user_id,
                "request_status": "pending",
                "created_at": now,
                "updated_at": now
            }).execute()
            if not result.data:
                raise HTTPException(status_code=500, detail="Failed to create removal request")
            return RemovalRequestResponse(**result.data[0])
        except HTTPException:
            raise
        except Exception as e:
            logger.error(f"Error creating removal request: {e}")
            raise HTTPException(status_code=500, detail=str(e))

    def get_user_removal_requests(self, user_id: str) -> List[RemovalRequestResponse]:
        try:
            result = self.supabase.table("property_removal_requests")\
                .select("*")\
                .eq("user_id", user_id)\
                .order("created_at", desc=True)\
                .execute()
            return [RemovalRequestResponse(**row) for row in result.data or []]
        except Exception as e:
            logger.error(f"Error getting removal requests for {user_id}: {e}")
            raise HTTPException(status_code=500, detail=str(e))

    def get_all_removal_requests(self, status: Optional[str] = None) -> List[RemovalRequestResponse]:
        if status and status not in REQUEST_STATUSES:
            raise HTTPException(status_code=400, detail=f"Invalid status: {status}")
        try:
            query = self.supabase.table("property_removal_requests")\
                .select("*")\
                .order("created_at", desc=True)
            if status:
                query = query.eq("request_status", status)
            result = query.execute()
            return [RemovalRequestResponse(**row) for row in result.data or []]
        except Exception as e:
            logger.error(f"Error getting removal requests: {e}")
            raise HTTPException(status_code=500, detail=str(e))

    def _maybe_single(self, table: str, columns: str, column: str, value: Any) -> Optional[Dict[str, Any]]:
        result = self.supabase.table(table)\
            .select(columns)\
            .eq(column, value)\
            .maybe_single()\
            .execute()
        return result.data if result else None

    def _lookup(self, table: str, columns: str, value: Any) -> Optional[Dict[str, Any]]:
        """Enrichment lookup for the admin list; a failed row lookup yields None"""
        if value is None:
            return None
        try:
            return self._maybe_single(table, columns, "id", value)
        except Exception as e:
            logger.warning(f"Error loading {table} {value} for removal request: {e}")
            return None

    def list_removal_requests(self, search: Optional[str] = None) -> List[RemovalRequestDetail]:
        """Admin list enriched with requester and property details; empty on failure"""
        try:
            query = self.supabase.table("property_removal_requests")\
                .select("*")\
                .order("created_at", desc=True)
            if search:
                query = query.ilike("property_title", f"%{search}%")
            result = query.execute()

            detailed = []
            for row in result.data or []:
                detailed.append(RemovalRequestDetail(
                    **row,
                    users=self._lookup("users", "name, email, phone", row.get("user_id")),
                    pending_homes=self._lookup("pending_homes", "title, city, country, price", row.get("property_id"))
                ))
            return detailed
        except Exception as e:
            logger.error(f"Error loading removal requests: {e}")
            return []

    def _delete_listing(self, property_id: int) -> None:
        """Remove the submission and its published copy; failures are logged"""
        pending = self._maybe_single("pending_homes", "*", "id", property_id)
        if pending:
            try:
                self.supabase.table("pending_homes").delete().eq("id", property_id).execute()
            except Exception as e:
                logger.error(f"Error deleting pending home {property_id}: {e}")

            # Approved submissions were copied into homes; the copy shares title and owner
            if pending.get("status") == "approved":
                try:
                    self.supabase.table("homes")\
                        .delete()\
                        .eq("title", pending.get("title"))\
                        .eq("user_id", pending.get("user_id"))\
                        .execute()
                except Exception as e:
                    logger.error(f"Error deleting published copy of {property_id}: {e}")
            return

        try:
            self.supabase.table("homes").delete().eq("id", property_id).execute()
        except Exception as e:
            logger.error(f"Error deleting home {property_id}: {e}")

    def approve_removal_request(
        self,
        request_id: int,
        property_id: Optional[int] = None,
        admin_id: Optional[str] = None
    ) -> None:
        """Mark the request approved and delete the listing"""
        try:
            request = self._maybe_single("property_removal_requests", "*", "id", request_id)
            if not request:
                raise HTTPException(status_code=404, detail="Removal request not found")
            if property_id is None:
                property_id = request.get("property_id")

            now = utc_now_iso()
            self.supabase.table("property_removal_requests").update({
                "request_status": "approved",
                "processed_at": now,
                "processed_by": admin_id,
                "admin_notes": "Property removal approved and deleted by admin",
                "updated_at": now
            }).eq("id", request_id).execute()

            self._delete_listing(property_id)
            logger.info(f"Removal request {request_id} approved, property {property_id} removed")
        except HTTPException:
            raise
        except Exception as e:
            logger.error(f"Error approving removal request {request_id}: {e}")
            raise HTTPException(status_code=500, detail=str(e))

    def reject_removal_request(self, request_id: int, admin_id: Optional[str] = None, reason: Optional[str] = None) -> None:
        try:
            now = utc_now_iso()
            result = self.supabase.table("property_removal_requests").update({
                "request_status": "rejected",
                "processed_at": now,
                "processed_by": admin_id,
                "admin_notes": reason or "Removal request rejected by admin",
                "updated_at": now
            }).eq("id", request_id).execute()
            if not result.data:
                raise HTTPException(status_code=404, detail="Removal request not found")
        except HTTPException:
            raise
        except Exception as e:
            logger.error(f"Error rejecting removal request {request_id}: {e}")
            raise HTTPException(status_code=500, detail=str(e))
