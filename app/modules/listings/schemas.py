from pydantic import BaseModel, Field
from typing import Optional, List
from datetime import datetime

DEFAULT_AGENT_AVATAR = "https://images.unsplash.com/photo-1472099645785-5658abf4ff4e?w=150&h=150&fit=crop&crop=face"


class AgentInfo(BaseModel):
    name: str = "Property Agent"
    email: str = "agent@plotify.com"
    avatar: str = DEFAULT_AGENT_AVATAR


class GalleryItem(BaseModel):
    id: str
    image: str


class ReviewAuthor(BaseModel):
    name: str
    avatar: str = ""
    email: str = ""


class PropertyReview(BaseModel):
    id: str
    rating: int
    comment: Optional[str] = None
    public: bool = True
    helpful: int = 0
    user: ReviewAuthor
    created_at: Optional[datetime] = None


class Property(BaseModel):
    """Listing as the mobile client renders it"""
    id: Optional[str] = None
    name: str = "Untitled Property"
    address: str = "Address not specified"
    price: str = "0"
    formatted_price: Optional[str] = None
    rating: Optional[float] = None
    type: str = "Property"
    bedrooms: int = 0
    bathrooms: int = 0
    area: int = 0
    image: str = ""
    agent: AgentInfo = Field(default_factory=AgentInfo)
    facilities: List[str] = Field(default_factory=list)
    description: str = ""
    reviews: List[PropertyReview] = Field(default_factory=list)
    gallery: List[GalleryItem] = Field(default_factory=list)
    created_at: Optional[datetime] = None
    sold: bool = False
    owner_id: Optional[str] = None
    is_pending: bool = False

    class Config:
        from_attributes = True


class PropertyCreate(BaseModel):
    name: str
    address: str
    price: str
    type: Optional[str] = None
    bedrooms: Optional[int] = None
    bathrooms: Optional[int] = None
    area: Optional[int] = None
    image: Optional[str] = None
    gallery: List[str] = Field(default_factory=list)
    facilities: List[str] = Field(default_factory=list)
    description: Optional[str] = ""
    sold: bool = False


class ShareMessage(BaseModel):
    property_id: str
    title: str
    message: str
