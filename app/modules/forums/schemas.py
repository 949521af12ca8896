from pydantic import BaseModel, Field
from typing import Optional, List, Literal
from datetime import datetime

ForumCategory = Literal["general", "buying", "selling", "investing", "neighborhood", "expert"]


class ForumAuthor(BaseModel):
    name: str
    avatar: str = ""
    email: str = ""


class ForumPostCreate(BaseModel):
    title: str = Field(..., min_length=1)
    content: str = Field(..., min_length=1)
    category: ForumCategory = "general"
    tags: List[str] = Field(default_factory=list)


class ForumCommentCreate(BaseModel):
    comment: str = Field(..., min_length=1)


class ForumComment(BaseModel):
    id: str
    post_id: str
    user_id: str
    comment: str
    likes_count: int = 0
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    author: ForumAuthor


class ForumPost(BaseModel):
    id: str
    user_id: str
    title: str
    content: str
    category: str
    tags: List[str] = Field(default_factory=list)
    views: int = 0
    likes_count: int = 0
    replies_count: int = 0
    is_pinned: bool = False
    is_trending: bool = False
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    author: ForumAuthor


class ForumPostDetail(ForumPost):
    comments: List[ForumComment] = Field(default_factory=list)


class LikeState(BaseModel):
    liked: bool
