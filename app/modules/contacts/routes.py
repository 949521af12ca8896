from fastapi import APIRouter, Depends
from app.database.supabase_client import get_supabase
from app.modules.contacts.schemas import ContactCreate, ContactResponse
from app.modules.contacts.service import ContactService
from supabase import Client

router = APIRouter(prefix="/contacts", tags=["contacts"])


def get_contact_service(supabase: Client = Depends(get_supabase)) -> ContactService:
    return ContactService(supabase)


@router.post("", response_model=ContactResponse, status_code=201)
async def submit_contact(
    contact: ContactCreate,
    service: ContactService = Depends(get_contact_service)
):
    """Contact Us form (no sign-in required)"""
    return service.submit_contact(contact)
