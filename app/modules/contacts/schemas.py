from pydantic import BaseModel, EmailStr, Field
from typing import Optional, List
from datetime import datetime


class ContactCreate(BaseModel):
    first_name: str = Field(..., min_length=1)
    last_name: str = ""
    email: EmailStr
    phone: Optional[str] = ""
    message: str = Field(..., min_length=1)
    services: List[str] = Field(default_factory=list)


class ContactResponse(BaseModel):
    id: int
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None
    message: Optional[str] = None
    services: Optional[List[str]] = None
    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True
