from pydantic import BaseModel, Field
from typing import Optional, Any, Dict
from datetime import datetime


class RemovalRequestCreate(BaseModel):
    property_id: int
    property_title: str
    removal_reason: str = Field(..., min_length=1)


class RemovalRequestResponse(BaseModel):
    id: int
    property_id: int
    user_id: str
    property_title: Optional[str] = None
    removal_reason: Optional[str] = None
    request_status: str = "pending"
    admin_notes: Optional[str] = None
    processed_at: Optional[datetime] = None
    processed_by: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class RemovalRequestDetail(RemovalRequestResponse):
    """Admin view with requester and property details attached"""
    users: Optional[Dict[str, Any]] = None
    pending_homes: Optional[Dict[str, Any]] = None


class RemovalApproveRequest(BaseModel):
    property_id: Optional[int] = None


class RemovalRejectRequest(BaseModel):
    reason: Optional[str] = None
