from fastapi import APIRouter, Depends
from app.modules.news.schemas import NewsArticle, NewsCacheInfo
from app.modules.news.service import NewsService, clear_cache
from app.core.dependencies import require_admin
from typing import List, Dict

router = APIRouter(prefix="/news", tags=["news"])


def get_news_service() -> NewsService:
    return NewsService()


@router.get("", response_model=List[NewsArticle])
async def list_news(service: NewsService = Depends(get_news_service)):
    """Top Indian real estate headlines (cached)"""
    return service.get_news()


@router.post("/refresh", response_model=List[NewsArticle])
async def refresh_news(
    user_data: Dict = Depends(require_admin),
    service: NewsService = Depends(get_news_service)
):
    return service.force_refresh()


@router.get("/cache", response_model=NewsCacheInfo)
async def news_cache_info(
    user_data: Dict = Depends(require_admin),
    service: NewsService = Depends(get_news_service)
):
    return service.cache_info()


@router.delete("/cache", status_code=204)
async def clear_news_cache(user_data: Dict = Depends(require_admin)):
    clear_cache()
    return None
