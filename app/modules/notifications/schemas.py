from pydantic import BaseModel, Field
from typing import Optional, Dict, Any
from datetime import datetime


class NotificationCreate(BaseModel):
    user_id: Optional[str] = None
    title: str
    message: str
    type: str = "system"
    data: Dict[str, Any] = Field(default_factory=dict)
    is_read: bool = False


class NotificationResponse(BaseModel):
    id: str
    user_id: Optional[str] = None
    title: str
    message: str
    type: str
    data: Dict[str, Any] = Field(default_factory=dict)
    is_read: bool = False
    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class MarketUpdateRequest(BaseModel):
    user_id: str
    update: str


class AgentMessageRequest(BaseModel):
    user_id: str
    agent_name: str
    message: str


class OpenHouseRequest(BaseModel):
    user_id: str
    property_id: str
    date: datetime
    address: str
