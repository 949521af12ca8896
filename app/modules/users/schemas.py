from pydantic import BaseModel
from typing import Optional, Dict, Any
from datetime import datetime


class UserProfileUpdate(BaseModel):
    name: Optional[str] = None
    phone: Optional[str] = None
    avatar_url: Optional[str] = None
    metadata: Optional[Dict[str, Any]] = None


class UserProfileResponse(BaseModel):
    id: str
    email: str
    name: Optional[str] = None
    phone: Optional[str] = None
    avatar_url: Optional[str] = None
    is_verified: Optional[bool] = False
    is_active: Optional[bool] = True
    last_login: Optional[datetime] = None
    metadata: Optional[Dict[str, Any]] = None
    created_at: datetime
    updated_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class NotificationPreferences(BaseModel):
    newProperties: bool = True
    priceDrops: bool = True
    openHouses: bool = True
    marketUpdates: bool = True
    agentMessages: bool = True
    savedSearches: bool = True


class PushTokenUpdate(BaseModel):
    push_token: str
    preferences: Optional[NotificationPreferences] = None
