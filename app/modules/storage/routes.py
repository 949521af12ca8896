from fastapi import APIRouter, Depends, UploadFile, File, HTTPException
from app.database.supabase_client import get_supabase
from app.modules.storage.service import StorageService
from app.core.dependencies import get_current_user_id
from supabase import Client
from typing import List, Dict

router = APIRouter(prefix="/storage", tags=["storage"])


def get_storage_service(supabase: Client = Depends(get_supabase)) -> StorageService:
    return StorageService(supabase)


@router.post("/property-images", status_code=201)
async def upload_property_images(
    files: List[UploadFile] = File(...),
    user_data: Dict = Depends(get_current_user_id),
    service: StorageService = Depends(get_storage_service)
):
    """Upload listing photos. Images that fail are skipped; returns the public URLs that succeeded."""
    if not files:
        raise HTTPException(status_code=400, detail="No files uploaded")
    payload = [(f.filename, await f.read()) for f in files]
    urls = service.upload_property_images(payload)
    if not urls:
        raise HTTPException(status_code=500, detail="Failed to upload images")
    return {"urls": urls}
