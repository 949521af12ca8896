from pydantic import BaseModel, Field
from typing import Optional
from datetime import datetime


class AnnouncementCreate(BaseModel):
    title: str = Field(..., min_length=1)
    message: str = Field(..., min_length=1)
    is_active: bool = True
    priority: int = 0
    expires_at: Optional[datetime] = None
    link: Optional[str] = None
    image_url: Optional[str] = None


class AnnouncementStatusUpdate(BaseModel):
    is_active: bool


class AnnouncementResponse(BaseModel):
    id: str
    title: str
    message: str
    is_active: bool = True
    priority: int = 0
    created_at: Optional[datetime] = None
    expires_at: Optional[datetime] = None
    created_by: Optional[str] = None
    link: Optional[str] = None
    image_url: Optional[str] = None

    class Config:
        from_attributes = True
