from pydantic import BaseModel, Field
from typing import Optional, List, Any
from datetime import datetime


class PendingHomeCreate(BaseModel):
    title: str
    country: Optional[str] = None
    state: Optional[str] = None
    city: Optional[str] = None
    price: float = Field(..., ge=0)
    sqft: float = Field(0, ge=0)
    bedrooms: Optional[int] = None
    bathrooms: Optional[int] = None
    description: Optional[str] = ""
    categories: List[str] = Field(default_factory=list)
    images: List[str] = Field(default_factory=list)


class PendingHomeResponse(BaseModel):
    id: int
    title: Optional[str] = None
    country: Optional[str] = None
    state: Optional[str] = None
    city: Optional[str] = None
    price: Optional[Any] = None
    sqft: Optional[Any] = None
    bedrooms: Optional[int] = None
    bathrooms: Optional[int] = None
    description: Optional[str] = None
    categories: Optional[List[str]] = None
    images: Optional[List[Any]] = None
    user_id: Optional[str] = None
    status: str = "pending"
    admin_notes: Optional[str] = None
    approved_at: Optional[datetime] = None
    rejected_at: Optional[datetime] = None
    rejection_reason: Optional[str] = None
    rejection_category: Optional[str] = None
    admin_id: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class RejectionCategory(BaseModel):
    id: Optional[int] = None
    name: str
    description: Optional[str] = None
    is_active: Optional[bool] = True
    created_at: Optional[datetime] = None


class RejectRequest(BaseModel):
    reason: str = Field(..., min_length=1)
    category: Optional[str] = None


class PropertyStatus(BaseModel):
    id: int
    title: Optional[str] = None
    status: str
    status_message: str
    created_at: Optional[datetime] = None
    approved_at: Optional[datetime] = None
    rejected_at: Optional[datetime] = None
    rejection_reason: Optional[str] = None
    rejection_category: Optional[str] = None
    rejection_category_description: Optional[str] = None
    admin_notes: Optional[str] = None
    images: List[str] = Field(default_factory=list)
    city: Optional[str] = None
    state: Optional[str] = None
    country: Optional[str] = None
    price: Optional[Any] = None
    description: Optional[str] = None
