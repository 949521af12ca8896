"""
Indian real estate headlines from NewsAPI, cached in memory.

Without an API key, or when NewsAPI returns nothing India-related, the curated
fallback articles are served instead. Errors fall back to the last cached batch.
"""

import re
import time
import httpx
from app.config.settings import settings
from app.core.formatters import format_relative_date
from app.modules.news.schemas import NewsArticle, NewsCacheInfo
from app.modules.news.fallback import FALLBACK_ARTICLES
from typing import List, Dict, Any, Optional
import logging

logger = logging.getLogger(__name__)

NEWS_QUERY = (
    "real estate India OR property India OR housing market India OR "
    "Indian real estate OR property market India"
)
PAGE_SIZE = 20
MAX_ARTICLES = 5

INDIA_KEYWORDS = (
    "india", "indian", "mumbai", "delhi", "bangalore", "chennai", "hyderabad",
    "pune", "kolkata", "noida", "gurgaon", "ahmedabad", "₹", "rupee", "rs.", "rs ", "inr"
)

# First match wins
EMOJI_RULES = (
    (("trend", "market"), "📈"),
    (("tip", "guide", "advice"), "💡"),
    (("investment", "invest"), "💰"),
    (("home", "house", "property"), "🏠"),
    (("tax", "finance"), "📊"),
    (("smart", "technology"), "🏡"),
)
DEFAULT_EMOJI = "📰"

_TRUNCATION_SUFFIX = re.compile(r"\s*\[\+\d+\s*chars\]\s*$", re.IGNORECASE)

# {"articles": List[NewsArticle], "timestamp": float}
_NEWS_CACHE: Dict[str, Any] = {}


def clear_cache() -> None:
    _NEWS_CACHE.clear()


def emoji_for(title: str) -> str:
    lowered = title.lower()
    for keywords, emoji in EMOJI_RULES:
        if any(word in lowered for word in keywords):
            return emoji
    return DEFAULT_EMOJI


def is_india_related(article: Dict[str, Any]) -> bool:
    text = f"{article.get('title') or ''} {article.get('description') or ''}".lower()
    return any(keyword in text for keyword in INDIA_KEYWORDS)


def clean_content(content: Optional[str]) -> str:
    """NewsAPI truncates content and appends '[+1234 chars]'"""
    if not content:
        return ""
    return _TRUNCATION_SUFFIX.sub("", content).strip()


def to_article(raw: Dict[str, Any], index: int, fetched_ms: int) -> NewsArticle:
    title = raw.get("title") or ""
    description = raw.get("description") or ""
    content = clean_content(raw.get("content"))

    if description and content:
        body = f"{description}\n\n{content}"
    else:
        body = content or description or title or "Real Estate News"

    return NewsArticle(
        id=f"news_{index}_{fetched_ms}",
        title=title,
        summary=description or (content[:150] if content else "Read more about real estate trends."),
        image=emoji_for(title),
        date=format_relative_date(raw.get("publishedAt")),
        content=body,
        url=raw.get("url"),
        source=(raw.get("source") or {}).get("name") or "News"
    )


class NewsService:
    def __init__(self, cache_hours: Optional[float] = None):
        self.cache_seconds = (cache_hours if cache_hours is not None else settings.news_cache_hours) * 3600

    def _cache_valid(self) -> bool:
        timestamp = _NEWS_CACHE.get("timestamp")
        return timestamp is not None and time.time() - timestamp < self.cache_seconds

    def _fetch(self) -> List[NewsArticle]:
        response = httpx.get(
            settings.news_api_url,
            params={
                "q": NEWS_QUERY,
                "sortBy": "publishedAt",
                "language": "en",
                "pageSize": PAGE_SIZE,
                "apiKey": settings.news_api_key,
            },
            timeout=settings.http_timeout_seconds
        )
        response.raise_for_status()
        raw_articles = response.json().get("articles") or []

        relevant = [
            a for a in raw_articles
            if a.get("title") and a.get("description") and is_india_related(a)
        ]
        if not relevant:
            logger.info(f"No India-related articles among {len(raw_articles)} results, using fallback")
            return list(FALLBACK_ARTICLES)

        fetched_ms = int(time.time() * 1000)
        return [to_article(a, i, fetched_ms) for i, a in enumerate(relevant[:MAX_ARTICLES])]

    def get_news(self) -> List[NewsArticle]:
        """Cached articles when fresh; otherwise fetch, falling back on errors"""
        if self._cache_valid():
            return _NEWS_CACHE["articles"]

        if not settings.news_api_key:
            logger.warning("NEWS_API_KEY not configured, serving fallback articles")
            return list(FALLBACK_ARTICLES)

        try:
            articles = self._fetch()
        except Exception as e:
            logger.error(f"Error fetching news: {e}")
            if _NEWS_CACHE.get("articles"):
                logger.info("Serving stale news cache")
                return _NEWS_CACHE["articles"]
            return list(FALLBACK_ARTICLES)

        _NEWS_CACHE["articles"] = articles
        _NEWS_CACHE["timestamp"] = time.time()
        return articles

    def force_refresh(self) -> List[NewsArticle]:
        clear_cache()
        return self.get_news()

    def cache_info(self) -> NewsCacheInfo:
        timestamp = _NEWS_CACHE.get("timestamp")
        if timestamp is None:
            return NewsCacheInfo(exists=False, age=0, expires_in=0)
        age = time.time() - timestamp
        return NewsCacheInfo(
            exists=True,
            age=int(age // 60),
            expires_in=max(0, int((self.cache_seconds - age) // 60))
        )
