from pydantic import BaseModel, Field
from app.modules.approvals.schemas import PendingHomeResponse
from typing import Optional, List, Any, Dict
from datetime import datetime


class AdminHome(BaseModel):
    id: int
    title: Optional[str] = None
    city: Optional[str] = None
    state: Optional[str] = None
    country: Optional[str] = None
    price: Optional[Any] = None
    description: Optional[str] = None
    created_at: Optional[datetime] = None
    archived_at: Optional[datetime] = None
    images: Optional[List[str]] = None
    sqft: Optional[Any] = None
    categories: Optional[List[str]] = None
    user_id: Optional[str] = None

    class Config:
        from_attributes = True


class ImageUrl(BaseModel):
    url: str


class RequesterDetails(BaseModel):
    id: str
    name: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None


class AdminPendingHome(PendingHomeResponse):
    images: List[ImageUrl] = Field(default_factory=list)
    userDetails: Optional[RequesterDetails] = None


class AdminUserProfile(BaseModel):
    id: str
    email: str
    name: Optional[str] = None
    phone: Optional[str] = None
    role: Optional[str] = None
    is_active: Optional[bool] = None
    is_verified: Optional[bool] = None
    last_login: Optional[datetime] = None
    created_at: Optional[datetime] = None
    metadata: Optional[Dict[str, Any]] = None


class Subscription(BaseModel):
    id: int
    email: Optional[str] = None
    plan: Optional[str] = None
    status: Optional[str] = None
    expires_at: Optional[datetime] = None
    created_at: Optional[datetime] = None


class AdminRejectRequest(BaseModel):
    reason: str = Field(..., min_length=1)
    category: Optional[str] = None


class DashboardOverview(BaseModel):
    published_homes: int = 0
    archived_homes: int = 0
    pending_homes: int = 0
    users: int = 0
    subscriptions: int = 0
    contacts: int = 0
    pending_removal_requests: int = 0
