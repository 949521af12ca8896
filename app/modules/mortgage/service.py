from supabase import Client
from app.modules.mortgage.schemas import MortgageLeadCreate, MortgageLeadResponse
from app.core.formatters import utc_now_iso
from typing import Optional
from fastapi import HTTPException
import logging

logger = logging.getLogger(__name__)


class MortgageLeadService:
    def __init__(self, supabase: Client):
        self.supabase = supabase

    def create_mortgage_lead(self, lead: MortgageLeadCreate, user_id: Optional[str] = None) -> MortgageLeadResponse:
        """Store a financing enquiry; anonymous visitors are allowed"""
        try:
            lead_data = lead.model_dump()
            lead_data.update({"user_id": user_id, "created_at": utc_now_iso()})
            result = self.supabase.table("mortgage_leads").insert(lead_data).execute()
            if not result.data:
                raise HTTPException(status_code=500, detail="Failed to create mortgage lead")
            logger.info(f"Mortgage lead created for property {lead.property_id}")
            row = result.data[0]
            return MortgageLeadResponse(**{**row, "id": str(row["id"])})
        except HTTPException:
            raise
        except Exception as e:
            logger.error(f"Error creating mortgage lead: {e}")
            raise HTTPException(status_code=500, detail=str(e))
