from supabase import Client
from app.modules.contacts.schemas import ContactCreate, ContactResponse
from app.core.formatters import utc_now_iso
from typing import List, Optional
from fastapi import HTTPException
import logging

logger = logging.getLogger(__name__)


class ContactService:
    def __init__(self, supabase: Client):
        self.supabase = supabase

    def submit_contact(self, contact: ContactCreate) -> ContactResponse:
        try:
            result = self.supabase.table("contacts").insert({
                "first_name": contact.first_name,
                "last_name": contact.last_name,
                "email": contact.email,
                "phone": contact.phone,
                "message": contact.message,
                "services": contact.services,
                "created_at": utc_now_iso()
            }).execute()
            if not result.data:
                raise HTTPException(status_code=500, detail="Failed to submit contact form")
            logger.info(f"Contact form submitted by {contact.email}")
            return ContactResponse(**result.data[0])
        except HTTPException:
            raise
        except Exception as e:
            logger.error(f"Error submitting contact: {e}")
            raise HTTPException(status_code=500, detail=str(e))

    def get_contacts(self, search: Optional[str] = None) -> List[ContactResponse]:
        """Contact submissions, newest first, optionally filtered by email"""
        try:
            query = self.supabase.table("contacts")\
                .select("*")\
                .order("created_at", desc=True)
            if search:
                query = query.ilike("email", f"%{search}%")
            result = query.execute()
            return [ContactResponse(**row) for row in result.data or []]
        except Exception as e:
            logger.error(f"Error fetching contacts: {e}")
            raise HTTPException(status_code=500, detail=str(e))
