from fastapi import APIRouter, Depends
from app.database.supabase_client import get_supabase
from app.modules.forums.schemas import (
    ForumPost, ForumPostCreate, ForumPostDetail, ForumComment, ForumCommentCreate, LikeState
)
from app.modules.forums.service import ForumService
from app.core.dependencies import get_current_user_id
from supabase import Client
from typing import List, Optional, Dict

router = APIRouter(prefix="/forums", tags=["forums"])


def get_forum_service(supabase: Client = Depends(get_supabase)) -> ForumService:
    return ForumService(supabase)


@router.get("/posts", response_model=List[ForumPost])
async def list_posts(
    category: Optional[str] = None,
    limit: Optional[int] = None,
    offset: Optional[int] = None,
    service: ForumService = Depends(get_forum_service)
):
    return service.get_forum_posts(category, limit, offset)


@router.post("/posts", response_model=ForumPost, status_code=201)
async def create_post(
    post_data: ForumPostCreate,
    user_data: Dict = Depends(get_current_user_id),
    service: ForumService = Depends(get_forum_service)
):
    return service.create_forum_post(post_data, user_data["id"])


@router.get("/posts/{post_id}", response_model=ForumPostDetail)
async def get_post(post_id: str, service: ForumService = Depends(get_forum_service)):
    """Post with its comments"""
    return service.get_forum_post(post_id)


@router.post("/posts/{post_id}/comments", response_model=ForumComment, status_code=201)
async def add_comment(
    post_id: str,
    comment_data: ForumCommentCreate,
    user_data: Dict = Depends(get_current_user_id),
    service: ForumService = Depends(get_forum_service)
):
    return service.add_comment(post_id, comment_data.comment, user_data["id"])


@router.post("/posts/{post_id}/like", response_model=LikeState)
async def toggle_like(
    post_id: str,
    user_data: Dict = Depends(get_current_user_id),
    service: ForumService = Depends(get_forum_service)
):
    return LikeState(liked=service.toggle_like(post_id, user_data["id"]))


@router.get("/posts/{post_id}/like", response_model=LikeState)
async def has_liked(
    post_id: str,
    user_data: Dict = Depends(get_current_user_id),
    service: ForumService = Depends(get_forum_service)
):
    return LikeState(liked=service.has_liked(post_id, user_data["id"]))
