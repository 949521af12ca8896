from supabase import Client
from app.modules.forums.schemas import (
    ForumPost, ForumPostCreate, ForumPostDetail, ForumComment, ForumAuthor
)
from app.modules.users.service import get_profiles_by_id, display_name
from typing import List, Optional, Dict, Any
from fastapi import HTTPException
import logging

logger = logging.getLogger(__name__)

DEFAULT_PAGE_SIZE = 20


def _author(profiles: Dict[str, Dict[str, Any]], user_id: Optional[str]) -> ForumAuthor:
    profile = profiles.get(user_id) if user_id else None
    return ForumAuthor(
        name=display_name(profile, user_id),
        avatar=(profile or {}).get("avatar_url") or "",
        email=(profile or {}).get("email") or ""
    )


def _post(row: Dict[str, Any], profiles: Dict[str, Dict[str, Any]]) -> ForumPost:
    return ForumPost(
        id=str(row["id"]),
        user_id=str(row["user_id"]),
        title=row.get("title") or "",
        content=row.get("content") or "",
        category=row.get("category") or "general",
        tags=row.get("tags") or [],
        views=row.get("views") or 0,
        likes_count=row.get("likes_count") or 0,
        replies_count=row.get("replies_count") or 0,
        is_pinned=bool(row.get("is_pinned")),
        is_trending=bool(row.get("is_trending")),
        created_at=row.get("created_at"),
        updated_at=row.get("updated_at"),
        author=_author(profiles, row.get("user_id"))
    )


def _comment(row: Dict[str, Any], profiles: Dict[str, Dict[str, Any]]) -> ForumComment:
    return ForumComment(
        id=str(row["id"]),
        post_id=str(row["post_id"]),
        user_id=str(row["user_id"]),
        comment=row.get("comment") or "",
        likes_count=row.get("likes_count") or 0,
        created_at=row.get("created_at"),
        updated_at=row.get("updated_at"),
        author=_author(profiles, row.get("user_id"))
    )


class ForumService:
    def __init__(self, supabase: Client):
        self.supabase = supabase

    def get_forum_posts(
        self,
        category: Optional[str] = None,
        limit: Optional[int] = None,
        offset: Optional[int] = None
    ) -> List[ForumPost]:
        """Pinned posts first, then newest"""
        try:
            query = self.supabase.table("forum_posts")\
                .select("*")\
                .order("is_pinned", desc=True)\
                .order("created_at", desc=True)

            if category and category != "all":
                query = query.eq("category", category)

            if offset:
                query = query.range(offset, offset + (limit or DEFAULT_PAGE_SIZE) - 1)
            elif limit:
                query = query.limit(limit)

            rows = query.execute().data or []
            profiles = get_profiles_by_id(self.supabase, [row.get("user_id") for row in rows])
            return [_post(row, profiles) for row in rows]
        except Exception as e:
            logger.error(f"Error getting forum posts: {e}")
            raise HTTPException(status_code=500, detail=str(e))

    def create_forum_post(self, post_data: ForumPostCreate, user_id: str) -> ForumPost:
        try:
            result = self.supabase.table("forum_posts").insert({
                "user_id": user_id,
                "title": post_data.title,
                "content": post_data.content,
                "category": post_data.category,
                "tags": post_data.tags,
                "views": 0,
                "likes_count": 0,
                "replies_count": 0,
                "is_pinned": False,
                "is_trending": False
            }).execute()
            if not result.data:
                raise HTTPException(status_code=500, detail="Failed to create post")
            profiles = get_profiles_by_id(self.supabase, [user_id])
            return _post(result.data[0], profiles)
        except HTTPException:
            raise
        except Exception as e:
            logger.error(f"Error creating forum post: {e}")
            raise HTTPException(status_code=500, detail=str(e))

    def get_forum_post(self, post_id: str) -> ForumPostDetail:
        """Post with comments (oldest first); counts the view"""
        try:
            result = self.supabase.table("forum_posts")\
                .select("*")\
                .eq("id", post_id)\
                .maybe_single()\
                .execute()
            if not result or not result.data:
                raise HTTPException(status_code=404, detail="Post not found")
            row = result.data

            views = (row.get("views") or 0) + 1
            self.supabase.table("forum_posts").update({"views": views}).eq("id", post_id).execute()
            row = {**row, "views": views}

            comment_rows: List[Dict[str, Any]] = []
            try:
                comments = self.supabase.table("forum_comments")\
                    .select("*")\
                    .eq("post_id", post_id)\
                    .order("created_at")\
                    .execute()
                comment_rows = comments.data or []
            except Exception as e:
                logger.error(f"Error fetching comments for post {post_id}: {e}")

            profiles = get_profiles_by_id(
                self.supabase, [row.get("user_id")] + [c.get("user_id") for c in comment_rows]
            )
            post = _post(row, profiles)
            return ForumPostDetail(
                **post.model_dump(),
                comments=[_comment(c, profiles) for c in comment_rows]
            )
        except HTTPException:
            raise
        except Exception as e:
            logger.error(f"Error getting forum post {post_id}: {e}")
            raise HTTPException(status_code=500, detail=str(e))

    def add_comment(self, post_id: str, comment: str, user_id: str) -> ForumComment:
        try:
            result = self.supabase.table("forum_comments").insert({
                "post_id": post_id,
                "user_id": user_id,
                "comment": comment,
                "likes_count": 0
            }).execute()
            if not result.data:
                raise HTTPException(status_code=500, detail="Failed to add comment")
            return _comment(result.data[0], get_profiles_by_id(self.supabase, [user_id]))
        except HTTPException:
            raise
        except Exception as e:
            logger.error(f"Error adding comment to post {post_id}: {e}")
            raise HTTPException(status_code=500, detail=str(e))

    def has_liked(self, post_id: str, user_id: str) -> bool:
        try:
            result = self.supabase.table("forum_likes")\
                .select("id")\
                .eq("post_id", post_id)\
                .eq("user_id", user_id)\
                .execute()
            return bool(result.data)
        except Exception as e:
            logger.warning(f"Error checking like on post {post_id}: {e}")
            return False

    def toggle_like(self, post_id: str, user_id: str) -> bool:
        """Like or unlike; returns the new state"""
        try:
            if self.has_liked(post_id, user_id):
                self.supabase.table("forum_likes")\
                    .delete()\
                    .eq("post_id", post_id)\
                    .eq("user_id", user_id)\
                    .execute()
                return False

            self.supabase.table("forum_likes").insert({
                "post_id": post_id,
                "user_id": user_id
            }).execute()
            return True
        except Exception as e:
            logger.error(f"Error toggling like on post {post_id}: {e}")
            raise HTTPException(status_code=500, detail=str(e))
