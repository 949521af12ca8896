from pydantic import BaseModel
from typing import Optional


class NewsArticle(BaseModel):
    id: str
    title: str
    summary: str
    image: str  # emoji shown on the card
    date: str  # relative label, e.g. "5h ago"
    content: str
    url: Optional[str] = None
    source: Optional[str] = None


class NewsCacheInfo(BaseModel):
    exists: bool
    age: int  # minutes
    expires_in: int  # minutes
