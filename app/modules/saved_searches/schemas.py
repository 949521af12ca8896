from pydantic import BaseModel, Field
from typing import Optional
from datetime import datetime


class SearchCriteria(BaseModel):
    """Stored in camelCase, the way the mobile client writes it"""
    min_price: Optional[float] = Field(None, alias="minPrice")
    max_price: Optional[float] = Field(None, alias="maxPrice")
    bedrooms: Optional[int] = None
    bathrooms: Optional[int] = None
    property_type: Optional[str] = Field(None, alias="propertyType")
    location: Optional[str] = None

    class Config:
        populate_by_name = True


class SavedSearchCreate(BaseModel):
    name: str
    criteria: SearchCriteria = Field(default_factory=SearchCriteria)
    is_active: bool = True


class SavedSearchToggle(BaseModel):
    is_active: bool


class SavedSearchResponse(BaseModel):
    id: str
    user_id: str
    name: str
    criteria: SearchCriteria = Field(default_factory=SearchCriteria)
    is_active: bool = True
    last_checked: Optional[datetime] = None
    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True
        populate_by_name = True


class SavedSearchCheckResult(BaseModel):
    searches_checked: int
    searches_notified: int
