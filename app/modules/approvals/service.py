from supabase import Client
from app.modules.approvals.schemas import PendingHomeCreate, PendingHomeResponse, RejectionCategory, PropertyStatus
from app.modules.notifications.schemas import NotificationCreate
from app.modules.notifications.service import NotificationService
from app.modules.storage.service import resolve_image_url
from app.core.formatters import utc_now_iso
from typing import List, Optional, Dict, Any
from fastapi import HTTPException
import logging

logger = logging.getLogger(__name__)

PENDING_STATUSES = ("pending", "approved", "rejected", "needs_revision")

STATUS_MESSAGES = {
    "approved": "Your property has been approved and is now live!",
    "pending": "Your property is under review. We will notify you once it is processed.",
}


def numeric_text(value: Any) -> Optional[str]:
    """homes stores price and sqft as text: 4500000.0 -> '4500000'"""
    if value is None:
        return None
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def optional_int(value: Any) -> Optional[int]:
    if value is None or value == "":
        return None
    return int(value)


def status_message(row: Dict[str, Any]) -> str:
    status = row.get("status")
    if status == "rejected":
        if row.get("rejection_reason"):
            return f"Rejected: {row['rejection_reason']}"
        return "Your property was rejected. Please review and resubmit with corrections."
    return STATUS_MESSAGES.get(status, "Status unknown")


class ApprovalService:
    def __init__(self, supabase: Client):
        self.supabase = supabase

    def submit_pending_property(self, property_data: PendingHomeCreate, user_id: str) -> PendingHomeResponse:
        """Queue a listing for moderation"""
        try:
            now = utc_now_iso()
            insert_data = property_data.model_dump()
            insert_data.update({
                "user_id": user_id,
                "status": "pending",
                "created_at": now,
                "updated_at": now
            })
            result = self.supabase.table("pending_homes").insert(insert_data).execute()
            if not result.data:
                raise HTTPException(status_code=500, detail="Failed to submit property")
            logger.info(f"Pending property {result.data[0]['id']} submitted by {user_id}")
            return PendingHomeResponse(**result.data[0])
        except HTTPException:
            raise
        except Exception as e:
            logger.error(f"Error submitting pending property: {e}")
            raise HTTPException(status_code=500, detail=str(e))

    def get_user_pending_properties(self, user_id: str) -> List[PendingHomeResponse]:
        try:
            result = self.supabase.table("pending_homes")\
                .select("*")\
                .eq("user_id", user_id)\
                .order("created_at", desc=True)\
                .execute()
            return [PendingHomeResponse(**row) for row in result.data or []]
        except Exception as e:
            logger.error(f"Error getting pending properties for {user_id}: {e}")
            raise HTTPException(status_code=500, detail=str(e))

    def get_all_pending_properties(self, status: Optional[str] = None) -> List[PendingHomeResponse]:
        if status and status not in PENDING_STATUSES:
            raise HTTPException(status_code=400, detail=f"Invalid status: {status}")
        try:
            query = self.supabase.table("pending_homes")\
                .select("*")\
                .order("created_at", desc=True)
            if status:
                query = query.eq("status", status)
            result = query.execute()
            return [PendingHomeResponse(**row) for row in result.data or []]
        except Exception as e:
            logger.error(f"Error getting pending properties: {e}")
            raise HTTPException(status_code=500, detail=str(e))

    def get_pending_row(self, pending_id: int) -> Dict[str, Any]:
        result = self.supabase.table("pending_homes")\
            .select("*")\
            .eq("id", pending_id)\
            .maybe_single()\
            .execute()
        if not result or not result.data:
            raise HTTPException(status_code=404, detail="Pending property not found")
        return result.data

    def _verify_owner(self, user_id: Optional[str]) -> None:
        if not user_id:
            return
        result = self.supabase.table("users")\
            .select("id, email")\
            .eq("id", user_id)\
            .maybe_single()\
            .execute()
        if not result or not result.data:
            logger.error(f"Submitter {user_id} not found in users")
            raise HTTPException(
                status_code=400,
                detail="User validation failed: submitter not found in users"
            )

    def _notify_owner(self, user_id: Optional[str], title: str, message: str, data: Dict[str, Any]) -> None:
        if not user_id:
            return
        try:
            NotificationService(self.supabase).create_notification(NotificationCreate(
                user_id=user_id,
                title=title,
                message=message,
                type="property",
                data=data
            ))
        except Exception as e:
            logger.error(f"Error notifying {user_id} about moderation result: {e}")

    def approve_pending_property(self, pending_id: int, admin_id: Optional[str] = None) -> int:
        """Copy a pending submission into homes and mark it approved. Returns the new home id."""
        try:
            pending = self.get_pending_row(pending_id)
            if pending.get("status") != "pending":
                raise HTTPException(
                    status_code=409,
                    detail=f"Only pending properties can be approved (current status: {pending.get('status')})"
                )
            self._verify_owner(pending.get("user_id"))

            home_data = {
                "title": pending.get("title"),
                "country": pending.get("country"),
                "state": pending.get("state"),
                "city": pending.get("city"),
                "price": numeric_text(pending.get("price")),
                "sqft": numeric_text(pending.get("sqft")),
                "bedrooms": optional_int(pending.get("bedrooms")),
                "bathrooms": optional_int(pending.get("bathrooms")),
                "description": pending.get("description"),
                "categories": pending.get("categories"),
                "images": pending.get("images"),
                "user_id": pending.get("user_id"),
                "created_at": utc_now_iso()
            }
            inserted = self.supabase.table("homes").insert(home_data).execute()
            if not inserted.data:
                raise HTTPException(status_code=500, detail="Failed to publish property")
            home_id = inserted.data[0]["id"]

            now = utc_now_iso()
            try:
                self.supabase.table("pending_homes").update({
                    "status": "approved",
                    "approved_at": now,
                    "admin_id": admin_id,
                    "updated_at": now
                }).eq("id", pending_id).execute()
            except Exception as e:
                logger.error(f"Marking pending {pending_id} approved failed, removing home {home_id}: {e}")
                self.supabase.table("homes").delete().eq("id", home_id).execute()
                raise

            logger.info(f"Pending property {pending_id} approved as home {home_id} by {admin_id}")
            self._notify_owner(
                pending.get("user_id"),
                "Property approved 🎉",
                f'Your property "{pending.get("title")}" has been approved and is now live!',
                {"pendingId": pending_id, "homeId": home_id}
            )
            return home_id
        except HTTPException:
            raise
        except Exception as e:
            logger.error(f"Error approving pending property {pending_id}: {e}")
            raise HTTPException(status_code=500, detail=str(e))

    def reject_pending_property(
        self,
        pending_id: int,
        admin_id: Optional[str],
        reason: str,
        category: Optional[str] = None
    ) -> None:
        try:
            pending = self.get_pending_row(pending_id)
            now = utc_now_iso()
            self.supabase.table("pending_homes").update({
                "status": "rejected",
                "rejected_at": now,
                "rejection_reason": reason,
                "rejection_category": category,
                "admin_id": admin_id,
                "updated_at": now
            }).eq("id", pending_id).execute()

            logger.info(f"Pending property {pending_id} rejected by {admin_id}")
            self._notify_owner(
                pending.get("user_id"),
                "Property not approved",
                f'Your property "{pending.get("title")}" was rejected: {reason}',
                {"pendingId": pending_id, "reason": reason, "category": category}
            )
        except HTTPException:
            raise
        except Exception as e:
            logger.error(f"Error rejecting pending property {pending_id}: {e}")
            raise HTTPException(status_code=500, detail=str(e))

    def get_rejection_categories(self) -> List[RejectionCategory]:
        try:
            result = self.supabase.table("rejection_categories")\
                .select("*")\
                .eq("is_active", True)\
                .order("name")\
                .execute()
            return [RejectionCategory(**row) for row in result.data or []]
        except Exception as e:
            logger.error(f"Error getting rejection categories: {e}")
            raise HTTPException(status_code=500, detail=str(e))

    def get_user_property_status(self, user_id: str) -> List[PropertyStatus]:
        """Moderation status of each of the user's submissions"""
        try:
            result = self.supabase.table("pending_homes")\
                .select("id, title, status, created_at, approved_at, rejected_at, rejection_reason, "
                        "rejection_category, admin_notes, user_id, images, city, state, country, price, description")\
                .eq("user_id", user_id)\
                .order("created_at", desc=True)\
                .execute()
            rows = result.data or []

            category_names = list({row["rejection_category"] for row in rows if row.get("rejection_category")})
            descriptions: Dict[str, str] = {}
            if category_names:
                try:
                    categories = self.supabase.table("rejection_categories")\
                        .select("name, description")\
                        .in_("name", category_names)\
                        .execute()
                    descriptions = {c["name"]: c.get("description") or "" for c in categories.data or [] if c.get("name")}
                except Exception as e:
                    logger.warning(f"Could not load rejection category descriptions: {e}")

            statuses = []
            for row in rows:
                category = row.get("rejection_category")
                statuses.append(PropertyStatus(
                    id=row["id"],
                    title=row.get("title"),
                    status=row.get("status") or "",
                    status_message=status_message(row),
                    created_at=row.get("created_at"),
                    approved_at=row.get("approved_at"),
                    rejected_at=row.get("rejected_at"),
                    rejection_reason=row.get("rejection_reason"),
                    rejection_category=category,
                    rejection_category_description=(descriptions.get(category) or None) if category else None,
                    admin_notes=row.get("admin_notes"),
                    images=[resolve_image_url(self.supabase, img) for img in row.get("images") or []],
                    city=row.get("city"),
                    state=row.get("state"),
                    country=row.get("country"),
                    price=row.get("price"),
                    description=row.get("description")
                ))
            return statuses
        except Exception as e:
            logger.error(f"Error getting property status for {user_id}: {e}")
            raise HTTPException(status_code=500, detail=str(e))
