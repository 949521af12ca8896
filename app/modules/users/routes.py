from fastapi import APIRouter, Depends, UploadFile, File
from app.database.supabase_client import get_supabase
from app.modules.users.schemas import UserProfileUpdate, UserProfileResponse, PushTokenUpdate
from app.modules.users.service import UserService
from app.modules.storage.service import StorageService
from app.core.dependencies import get_current_user_id
from supabase import Client
from typing import Dict

router = APIRouter(prefix="/users", tags=["users"])


def get_user_service(supabase: Client = Depends(get_supabase)) -> UserService:
    return UserService(supabase)


def get_storage_service(supabase: Client = Depends(get_supabase)) -> StorageService:
    return StorageService(supabase)


@router.get("/me", response_model=UserProfileResponse)
async def get_my_profile(
    user_data: Dict = Depends(get_current_user_id),
    service: UserService = Depends(get_user_service)
):
    """Get the current user's profile"""
    return service.get_profile(user_data["id"])


@router.put("/me", response_model=UserProfileResponse)
async def update_my_profile(
    profile_data: UserProfileUpdate,
    user_data: Dict = Depends(get_current_user_id),
    service: UserService = Depends(get_user_service)
):
    """Update name, phone, avatar or metadata"""
    return service.update_profile(user_data["id"], profile_data)


@router.post("/me/avatar", response_model=UserProfileResponse)
async def upload_avatar(
    file: UploadFile = File(...),
    user_data: Dict = Depends(get_current_user_id),
    service: UserService = Depends(get_user_service),
    storage: StorageService = Depends(get_storage_service)
):
    """Upload a new avatar and store its URL on the profile"""
    avatar_url = storage.upload_user_avatar(await file.read(), file.filename, user_data["id"])
    return service.update_profile(user_data["id"], UserProfileUpdate(avatar_url=avatar_url))


@router.put("/me/push-token")
async def save_push_token(
    request: PushTokenUpdate,
    user_data: Dict = Depends(get_current_user_id),
    service: UserService = Depends(get_user_service)
):
    """Register the device push token used for alerts"""
    metadata = service.save_push_token(user_data["id"], request.push_token, request.preferences)
    return {"message": "Push token saved", "notificationPreferences": metadata["notificationPreferences"]}
